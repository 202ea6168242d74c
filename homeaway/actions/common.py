import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from homeaway.core.exceptions import AuthorizationError, HomeAwayException, OnboardingRequired, StorageError
from homeaway.schemas.common_schema import ActionResult
from homeaway.schemas.identity_schema import Identity

logger = logging.getLogger(__name__)


def require_identity(identity: Optional[Identity], message: str | None = None) -> Identity:
    if identity is None:
        raise AuthorizationError(message) if message else AuthorizationError()
    return identity


def get_auth_user(identity: Optional[Identity]) -> Identity:
    """The caller, provided they are logged in and onboarded."""
    identity = require_identity(identity)
    if not identity.has_profile:
        raise OnboardingRequired()
    return identity


def render_error(error: Exception) -> ActionResult:
    """Turn anything raised inside an action into a displayable message."""
    if isinstance(error, HomeAwayException):
        return ActionResult(message=error.message)
    if isinstance(error, SQLAlchemyError):
        logger.error(f"Database error: {error}")
        return ActionResult(message=StorageError(type(error).__name__).message)
    logger.exception(f"Unexpected error: {error}")
    return ActionResult(message="An error occurred")
