import logging
from typing import Any, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from homeaway.actions.common import get_auth_user, render_error, require_identity
from homeaway.core.cache import revalidate_path
from homeaway.core.exceptions import OnboardingRequired
from homeaway.crud import profile as profile_crud
from homeaway.crud import property as property_crud
from homeaway.models import Profile
from homeaway.schemas import ActionResult, Identity, ImageForm, ProfileForm, validate_with_schema
from homeaway.services.identity import IdentityStore
from homeaway.services.storage import ImageStorage

logger = logging.getLogger(__name__)


async def _revalidate_profile_views(db: AsyncSession, clerk_id: str) -> None:
    """Listing details embed the owner's profile, so they go stale with it."""
    revalidate_path("/profile")
    for row in await property_crud.list_properties_by_owner(db, clerk_id):
        revalidate_path(f"/properties/{row['id']}")


async def create_profile(
    db: AsyncSession,
    identity_store: IdentityStore,
    identity: Optional[Identity],
    form: Mapping[str, Any],
) -> ActionResult:
    """Onboard the caller: store their profile and flag the identity as onboarded."""
    try:
        user = require_identity(identity, "Please login to create a profile")
        validated = validate_with_schema(ProfileForm, form)

        if await profile_crud.get_profile_by_clerk_id(db, user.id):
            # Row written on an earlier attempt whose flag update failed
            await identity_store.mark_onboarded(user.id)
            return ActionResult(message="Profile already exists", redirect_to="/")

        await profile_crud.create_profile(
            db,
            clerk_id=user.id,
            email=user.email,
            profile_image=user.image_url or "",
            **validated.model_dump(),
        )
        await identity_store.mark_onboarded(user.id)
    except Exception as e:
        await db.rollback()
        return render_error(e)

    logger.info(f"Created profile for {user.id}")
    return ActionResult(message="Profile created", redirect_to="/")


async def fetch_profile(db: AsyncSession, identity: Optional[Identity]) -> Profile:
    user = get_auth_user(identity)
    profile = await profile_crud.get_profile_by_clerk_id(db, user.id)
    if not profile:
        raise OnboardingRequired()
    return profile


async def fetch_profile_image(db: AsyncSession, identity: Optional[Identity]) -> Optional[str]:
    """Avatar for the nav bar; anonymous callers and missing profiles get None."""
    if identity is None:
        return None
    return await profile_crud.get_profile_image(db, identity.id)


async def update_profile(
    db: AsyncSession,
    identity: Optional[Identity],
    form: Mapping[str, Any],
) -> ActionResult:
    try:
        user = get_auth_user(identity)
        validated = validate_with_schema(ProfileForm, form)
        profile = await profile_crud.update_profile(db, user.id, **validated.model_dump())
        if profile is None:
            raise OnboardingRequired()
    except OnboardingRequired:
        raise
    except Exception as e:
        await db.rollback()
        return render_error(e)

    await _revalidate_profile_views(db, user.id)
    return ActionResult(message="Profile updated successfully")


async def update_profile_image(
    db: AsyncSession,
    storage: ImageStorage,
    identity: Optional[Identity],
    form: Mapping[str, Any],
) -> ActionResult:
    """Validate, check the profile exists, upload, then point the profile at the uploaded image."""
    try:
        user = get_auth_user(identity)
        validated = validate_with_schema(ImageForm, {"image": form.get("image")})
        if await profile_crud.get_profile_by_clerk_id(db, user.id) is None:
            raise OnboardingRequired()
        full_path = await storage.upload(validated.image)
        await profile_crud.update_profile(db, user.id, profile_image=full_path)
    except OnboardingRequired:
        raise
    except Exception as e:
        await db.rollback()
        return render_error(e)

    await _revalidate_profile_views(db, user.id)
    return ActionResult(message="Profile image updated successfully")
