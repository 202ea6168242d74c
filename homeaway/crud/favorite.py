from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homeaway.models import Favorite, Property
from homeaway.crud.property import CARD_COLUMNS


async def get_favorite_id(db: AsyncSession, profile_id: str, property_id: str) -> str | None:
    result = await db.execute(
        select(Favorite.id).where(
            Favorite.profile_id == profile_id,
            Favorite.property_id == property_id,
        )
    )
    return result.scalars().first()


async def add_favorite(db: AsyncSession, profile_id: str, property_id: str) -> Favorite:
    """
    Create the favorite unless one already exists for the pair.
    The unique constraint on (profile_id, property_id) settles concurrent inserts.
    """
    result = await db.execute(
        select(Favorite).where(
            Favorite.profile_id == profile_id,
            Favorite.property_id == property_id,
        )
    )
    existing = result.scalars().first()
    if existing:
        return existing

    favorite = Favorite(profile_id=profile_id, property_id=property_id)
    db.add(favorite)
    await db.commit()
    await db.refresh(favorite)
    return favorite


async def remove_favorite(db: AsyncSession, favorite_id: str, profile_id: str) -> bool:
    result = await db.execute(
        select(Favorite).where(
            Favorite.id == favorite_id,
            Favorite.profile_id == profile_id,
        )
    )
    favorite = result.scalar_one_or_none()
    if not favorite:
        return False

    await db.delete(favorite)
    await db.commit()
    return True


async def list_favorite_properties(db: AsyncSession, profile_id: str) -> list[dict]:
    result = await db.execute(
        select(*CARD_COLUMNS)
        .join(Favorite, Favorite.property_id == Property.id)
        .where(Favorite.profile_id == profile_id)
        .order_by(Favorite.created_at.desc())
    )
    return [dict(row._mapping) for row in result.all()]
