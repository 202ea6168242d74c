from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from homeaway.models import Profile


async def get_profile_by_clerk_id(db: AsyncSession, clerk_id: str) -> Profile | None:
    result = await db.execute(select(Profile).where(Profile.clerk_id == clerk_id))
    return result.scalar_one_or_none()


async def get_profile_image(db: AsyncSession, clerk_id: str) -> str | None:
    result = await db.execute(
        select(Profile.profile_image).where(Profile.clerk_id == clerk_id)
    )
    return result.scalar_one_or_none()


async def create_profile(
    db: AsyncSession,
    clerk_id: str,
    email: str,
    profile_image: str,
    first_name: str,
    last_name: str,
    username: str,
) -> Profile:
    profile = Profile(
        clerk_id=clerk_id,
        email=email,
        profile_image=profile_image,
        first_name=first_name,
        last_name=last_name,
        username=username,
    )
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    return profile


async def update_profile(db: AsyncSession, clerk_id: str, **fields) -> Profile | None:
    """Apply `fields` to the profile owned by clerk_id. Returns None if there is no such profile."""
    profile = await get_profile_by_clerk_id(db, clerk_id)
    if not profile:
        return None

    for name, value in fields.items():
        setattr(profile, name, value)

    await db.commit()
    await db.refresh(profile)
    return profile


async def delete_profile(db: AsyncSession, clerk_id: str) -> bool:
    """Delete a profile along with its properties and favorites."""
    profile = await get_profile_by_clerk_id(db, clerk_id)
    if not profile:
        return False
    await db.delete(profile)
    await db.commit()
    return True
