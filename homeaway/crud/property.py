from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from homeaway.models import Property

# Columns returned for listing cards
CARD_COLUMNS = (
    Property.id,
    Property.name,
    Property.tagline,
    Property.country,
    Property.image,
    Property.price,
)


async def create_property(db: AsyncSession, profile_id: str, image: str, **fields) -> Property:
    prop = Property(profile_id=profile_id, image=image, **fields)
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    return prop


async def search_properties(
    db: AsyncSession,
    search: str = "",
    category: Optional[str] = None,
) -> list[dict]:
    """Case-insensitive substring match on name or tagline, optionally narrowed to one category."""
    stmt = select(*CARD_COLUMNS)
    if category:
        stmt = stmt.where(Property.category == category)
    if search:
        stmt = stmt.where(
            or_(
                Property.name.icontains(search, autoescape=True),
                Property.tagline.icontains(search, autoescape=True),
            )
        )
    stmt = stmt.order_by(Property.created_at.desc())

    result = await db.execute(stmt)
    return [dict(row._mapping) for row in result.all()]


async def get_property_with_profile(db: AsyncSession, property_id: str) -> Property | None:
    result = await db.execute(
        select(Property)
        .options(selectinload(Property.profile))
        .where(Property.id == property_id)
    )
    return result.scalar_one_or_none()


async def list_properties_by_owner(db: AsyncSession, profile_id: str) -> list[dict]:
    result = await db.execute(
        select(*CARD_COLUMNS)
        .where(Property.profile_id == profile_id)
        .order_by(Property.created_at.desc())
    )
    return [dict(row._mapping) for row in result.all()]


async def delete_owned_property(db: AsyncSession, property_id: str, profile_id: str) -> bool:
    """Delete a property only if profile_id owns it. Favorites go with it."""
    result = await db.execute(
        select(Property).where(
            Property.id == property_id,
            Property.profile_id == profile_id,
        )
    )
    prop = result.scalar_one_or_none()
    if not prop:
        return False

    await db.delete(prop)
    await db.commit()
    return True
