from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from homeaway.actions import profile as profile_actions
from homeaway.core.security import get_current_identity, get_identity_store
from homeaway.database import get_db
from homeaway.dependencies import get_image_storage, read_form
from homeaway.schemas import ActionResult, Identity, ProfileImageResponse, ProfileResponse
from homeaway.services.identity import IdentityStore
from homeaway.services.storage import ImageStorage

router = APIRouter()


@router.post("", response_model=ActionResult)
async def create_profile(
    request: Request,
    identity: Optional[Identity] = Depends(get_current_identity),
    identity_store: IdentityStore = Depends(get_identity_store),
    db: AsyncSession = Depends(get_db),
):
    """Create the caller's profile (onboarding)."""
    form = await read_form(request)
    return await profile_actions.create_profile(db, identity_store, identity, form)


@router.get("", response_model=ProfileResponse)
async def get_profile(
    identity: Optional[Identity] = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await profile_actions.fetch_profile(db, identity)


@router.get("/image", response_model=ProfileImageResponse)
async def get_profile_image(
    identity: Optional[Identity] = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    image = await profile_actions.fetch_profile_image(db, identity)
    return ProfileImageResponse(profile_image=image)


@router.patch("", response_model=ActionResult)
async def update_profile(
    request: Request,
    identity: Optional[Identity] = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    form = await read_form(request)
    return await profile_actions.update_profile(db, identity, form)


@router.post("/image", response_model=ActionResult)
async def update_profile_image(
    request: Request,
    identity: Optional[Identity] = Depends(get_current_identity),
    storage: ImageStorage = Depends(get_image_storage),
    db: AsyncSession = Depends(get_db),
):
    """Upload a new avatar (multipart field `image`)."""
    form = await read_form(request)
    return await profile_actions.update_profile_image(db, storage, identity, form)
