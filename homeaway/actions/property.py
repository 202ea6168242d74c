import logging
from typing import Any, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from homeaway.actions.common import get_auth_user, render_error
from homeaway.core.cache import revalidate_path
from homeaway.core.exceptions import NotFoundError, OnboardingRequired
from homeaway.crud import property as property_crud
from homeaway.models import Property
from homeaway.schemas import (
    ActionResult,
    Identity,
    ImageForm,
    PropertyCard,
    PropertyForm,
    validate_with_schema,
)
from homeaway.services.storage import ImageStorage

logger = logging.getLogger(__name__)


async def create_property(
    db: AsyncSession,
    storage: ImageStorage,
    identity: Optional[Identity],
    form: Mapping[str, Any],
) -> ActionResult:
    """
    Create a listing owned by the caller.

    Both the listing fields and the image are validated before anything is
    uploaded; the row is only written once the upload has succeeded.
    """
    try:
        user = get_auth_user(identity)
        validated = validate_with_schema(PropertyForm, form)
        validated_file = validate_with_schema(ImageForm, {"image": form.get("image")})
        full_path = await storage.upload(validated_file.image)

        prop = await property_crud.create_property(
            db,
            profile_id=user.id,
            image=full_path,
            **validated.model_dump(),
        )
    except OnboardingRequired:
        raise
    except Exception as e:
        await db.rollback()
        return render_error(e)

    logger.info(f"Created property {prop.id} for {user.id}")
    revalidate_path("/")
    revalidate_path("/rentals")
    return ActionResult(message="Rental created successfully", redirect_to="/")


async def fetch_properties(
    db: AsyncSession,
    search: str = "",
    category: Optional[str] = None,
) -> list[PropertyCard]:
    rows = await property_crud.search_properties(db, search=search or "", category=category or None)
    return [PropertyCard(**row) for row in rows]


async def fetch_property_details(db: AsyncSession, property_id: str) -> Optional[Property]:
    """Full listing with its owner's profile, or None when the id is unknown."""
    return await property_crud.get_property_with_profile(db, property_id)


async def fetch_rentals(db: AsyncSession, identity: Optional[Identity]) -> list[PropertyCard]:
    user = get_auth_user(identity)
    rows = await property_crud.list_properties_by_owner(db, user.id)
    return [PropertyCard(**row) for row in rows]


async def delete_rental(
    db: AsyncSession,
    identity: Optional[Identity],
    property_id: str,
) -> ActionResult:
    try:
        user = get_auth_user(identity)
        deleted = await property_crud.delete_owned_property(db, property_id, user.id)
        if not deleted:
            raise NotFoundError("Rental", property_id)
    except OnboardingRequired:
        raise
    except Exception as e:
        await db.rollback()
        return render_error(e)

    logger.info(f"Deleted property {property_id} for {user.id}")
    revalidate_path("/rentals")
    revalidate_path("/")
    revalidate_path(f"/properties/{property_id}")
    return ActionResult(message="Rental deleted successfully")
