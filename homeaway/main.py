import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from homeaway.core.config import settings
from homeaway.core.exceptions import (
    HomeAwayException,
    OnboardingRequired,
    homeaway_exception_handler,
    onboarding_required_handler,
)
from homeaway.database import engine
from homeaway.routers import favorites, profile, properties, rentals

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan event handler for startup and shutdown.
    Disposes of the database connection pool on shutdown.
    """
    logger.info(f"Starting {settings.PROJECT_NAME} in {settings.ENVIRONMENT} mode")

    yield

    logger.info("Shutting down")
    await engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Property rental listings: profiles, properties, search and favorites",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(OnboardingRequired)
async def handle_onboarding_required(request: Request, exc: OnboardingRequired):
    return await onboarding_required_handler(request, exc)


@app.exception_handler(HomeAwayException)
async def handle_homeaway_exception(request: Request, exc: HomeAwayException):
    return await homeaway_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"}
    )


# Include routers
app.include_router(profile.router, prefix="/api/v1/profile", tags=["Profile"])
app.include_router(properties.router, prefix="/api/v1/properties", tags=["Properties"])
app.include_router(rentals.router, prefix="/api/v1/rentals", tags=["Rentals"])
app.include_router(favorites.router, prefix="/api/v1/favorites", tags=["Favorites"])


@app.get("/", tags=["Health Check"])
def read_root():
    return {"message": "HomeAway API is healthy", "version": "1.0.0"}


@app.get("/health", tags=["Health Check"])
async def health_check():
    """Detailed health check"""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
    }
