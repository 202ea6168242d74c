from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from homeaway.actions import property as property_actions
from homeaway.core.security import get_current_identity
from homeaway.database import get_db
from homeaway.schemas import ActionResult, Identity, PropertyCard

router = APIRouter()


@router.get("", response_model=List[PropertyCard])
async def list_rentals(
    identity: Optional[Identity] = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Listings owned by the caller."""
    return await property_actions.fetch_rentals(db, identity)


@router.delete("/{property_id}", response_model=ActionResult)
async def delete_rental(
    property_id: str,
    identity: Optional[Identity] = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await property_actions.delete_rental(db, identity, property_id)
