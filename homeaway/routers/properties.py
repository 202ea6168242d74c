from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from homeaway.actions import property as property_actions
from homeaway.core.cache import get_cached_view, set_cached_view
from homeaway.core.security import get_current_identity
from homeaway.database import get_db
from homeaway.dependencies import get_image_storage, read_form
from homeaway.schemas import ActionResult, Identity, PropertyDetails, PropertyListResponse
from homeaway.services.storage import ImageStorage

router = APIRouter()


@router.get("", response_model=PropertyListResponse)
async def list_properties(
    search: str = "",
    category: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """Search listings by name or tagline, optionally within one category."""
    cache_key = f"/?search={search}&category={category or ''}"
    cached = get_cached_view(cache_key)
    if cached is not None:
        return cached

    properties = await property_actions.fetch_properties(db, search=search, category=category)
    response = PropertyListResponse(properties=properties)
    set_cached_view(cache_key, response)
    return response


@router.get("/{property_id}", response_model=Optional[PropertyDetails])
async def get_property(property_id: str, db: AsyncSession = Depends(get_db)):
    """Listing details with owner profile; null when the id is unknown."""
    cache_key = f"/properties/{property_id}"
    cached = get_cached_view(cache_key)
    if cached is not None:
        return cached

    prop = await property_actions.fetch_property_details(db, property_id)
    if prop is None:
        return None
    details = PropertyDetails.model_validate(prop)
    set_cached_view(cache_key, details)
    return details


@router.post("", response_model=ActionResult)
async def create_property(
    request: Request,
    identity: Optional[Identity] = Depends(get_current_identity),
    storage: ImageStorage = Depends(get_image_storage),
    db: AsyncSession = Depends(get_db),
):
    """Create a listing from a multipart form; the `image` field is required."""
    form = await read_form(request)
    return await property_actions.create_property(db, storage, identity, form)
