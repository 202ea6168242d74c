import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from homeaway.actions.common import get_auth_user, render_error
from homeaway.core.cache import revalidate_path
from homeaway.core.exceptions import NotFoundError, OnboardingRequired
from homeaway.crud import favorite as favorite_crud
from homeaway.schemas import ActionResult, Identity, PropertyCard

logger = logging.getLogger(__name__)


async def fetch_favorite_id(
    db: AsyncSession,
    identity: Optional[Identity],
    property_id: str,
) -> Optional[str]:
    user = get_auth_user(identity)
    return await favorite_crud.get_favorite_id(db, user.id, property_id)


async def toggle_favorite(
    db: AsyncSession,
    identity: Optional[Identity],
    property_id: str,
    favorite_id: Optional[str],
    pathname: str,
) -> ActionResult:
    """
    Remove the favorite named by favorite_id, or add one when no id is given.

    Removal is limited to the caller's own favorites. Adding is a no-op when
    the pair is already favorited.
    """
    try:
        user = get_auth_user(identity)
        if favorite_id:
            removed = await favorite_crud.remove_favorite(db, favorite_id, user.id)
            if not removed:
                raise NotFoundError("Favorite", favorite_id)
        else:
            await favorite_crud.add_favorite(db, user.id, property_id)
    except OnboardingRequired:
        raise
    except Exception as e:
        await db.rollback()
        return render_error(e)

    revalidate_path(pathname)
    return ActionResult(message="Removed from Faves" if favorite_id else "Added to Faves")


async def fetch_favorites(db: AsyncSession, identity: Optional[Identity]) -> list[PropertyCard]:
    user = get_auth_user(identity)
    rows = await favorite_crud.list_favorite_properties(db, user.id)
    return [PropertyCard(**row) for row in rows]
