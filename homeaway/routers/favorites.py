from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from homeaway.actions import favorite as favorite_actions
from homeaway.core.security import get_current_identity
from homeaway.database import get_db
from homeaway.schemas import ActionResult, FavoriteIdResponse, FavoriteToggleRequest, Identity, PropertyCard

router = APIRouter()


@router.get("", response_model=List[PropertyCard])
async def list_favorites(
    identity: Optional[Identity] = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await favorite_actions.fetch_favorites(db, identity)


@router.get("/{property_id}", response_model=FavoriteIdResponse)
async def get_favorite_id(
    property_id: str,
    identity: Optional[Identity] = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Favorite id for the toggle button; null when the property is not favorited."""
    favorite_id = await favorite_actions.fetch_favorite_id(db, identity, property_id)
    return FavoriteIdResponse(favorite_id=favorite_id)


@router.post("/toggle", response_model=ActionResult)
async def toggle_favorite(
    toggle: FavoriteToggleRequest,
    identity: Optional[Identity] = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await favorite_actions.toggle_favorite(
        db,
        identity,
        property_id=toggle.property_id,
        favorite_id=toggle.favorite_id,
        pathname=toggle.pathname,
    )
