from functools import lru_cache
from typing import Literal
import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
ENV_FILE_PATH = os.path.join(BASE_DIR, "..", ".env")


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=ENV_FILE_PATH,
        extra='ignore'
    )

    PROJECT_NAME: str = "HomeAway"
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False

    DATABASE_URL: str

    # Security/JWT
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Clerk (identity provider)
    CLERK_SECRET_KEY: str = ""
    CLERK_API_URL: str = "https://api.clerk.com/v1"
    CLERK_JWKS_URL: str = ""
    CLERK_JWT_ALGORITHMS: str = "RS256"
    # Seconds to wait before refetching signing keys after a failed fetch
    JWKS_RETRY_SECONDS: int = 60

    # Supabase (image storage)
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    SUPABASE_BUCKET: str = "temp-home-away"

    # Image uploads
    MAX_IMAGE_SIZE_MB: int = Field(default=1, ge=1, le=50)
    ALLOWED_IMAGE_TYPES: str = "image/"

    # Cached public views
    VIEW_CACHE_TTL_SECONDS: int = 60
    VIEW_CACHE_MAX_ENTRIES: int = Field(default=1024, ge=1)

    CORS_ORIGINS: str = "http://localhost:3000"

    @property
    def max_image_size_bytes(self) -> int:
        return self.MAX_IMAGE_SIZE_MB * 1024 * 1024

    @property
    def allowed_image_types_list(self) -> list[str]:
        """Comma-separated MIME prefixes, e.g. "image/png, image/jpeg"."""
        return [t.strip().lower() for t in self.ALLOWED_IMAGE_TYPES.split(",") if t.strip()]

    @property
    def clerk_jwt_algorithms_list(self) -> list[str]:
        return [alg.strip() for alg in self.CLERK_JWT_ALGORITHMS.split(",") if alg.strip()]

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
