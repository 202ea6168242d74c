import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

ONBOARDING_PATH = "/profile/create"


class HomeAwayException(Exception):
    """
    Base exception for the HomeAway API.

    Carries a human-readable message, a machine-readable code and the HTTP
    status used when it reaches a route handler.
    """

    def __init__(
        self,
        message: str,
        code: str = "HOMEAWAY_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


class AuthorizationError(HomeAwayException):
    """Raised when the request has no resolved identity."""

    def __init__(self, message: str = "You must be logged in to access this route"):
        super().__init__(message=message, code="NOT_AUTHENTICATED", status_code=401)


class OnboardingRequired(HomeAwayException):
    """The identity exists but has no profile yet. Handled as a redirect."""

    def __init__(self, redirect_to: str = ONBOARDING_PATH):
        super().__init__(
            message="Create a profile to continue",
            code="ONBOARDING_REQUIRED",
            status_code=403,
            details={"redirect_to": redirect_to},
        )
        self.redirect_to = redirect_to


class ValidationError(HomeAwayException):
    """First failing field constraint of a submitted form."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=422,
            details={"field": field} if field else None,
        )
        self.field = field


class StorageError(HomeAwayException):
    """Constraint violation or connectivity failure from the database."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Database operation failed: {error}",
            code="STORAGE_ERROR",
            status_code=500,
        )


class UploadError(HomeAwayException):
    """Object storage rejected or failed the upload."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Image upload failed: {error}",
            code="UPLOAD_ERROR",
            status_code=502,
        )


class IdentityProviderError(HomeAwayException):
    """The identity provider could not be reached or refused the call."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Identity provider request failed: {error}",
            code="IDENTITY_PROVIDER_ERROR",
            status_code=502,
        )


class NotFoundError(HomeAwayException):

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource} not found",
            code="NOT_FOUND",
            status_code=404,
            details={"id": resource_id},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def homeaway_exception_handler(request: Request, exc: HomeAwayException) -> JSONResponse:
    """Convert HomeAwayException to a JSON response."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def onboarding_required_handler(request: Request, exc: OnboardingRequired) -> JSONResponse:
    """Tell the client where to go instead of failing the request."""
    content = exc.to_dict()
    content["redirect_to"] = exc.redirect_to
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers={"Location": exc.redirect_to},
    )
