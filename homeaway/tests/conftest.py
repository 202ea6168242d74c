import os

# Settings are read at import time, so the environment must be in place first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-homeaway")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("CLERK_JWKS_URL", "https://clerk.test/.well-known/jwks.json")

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from homeaway.core.cache import clear_view_cache
from homeaway.crud import profile as profile_crud
from homeaway.crud import property as property_crud
from homeaway.models import Base
from homeaway.schemas import Identity, UploadedImage

UPLOADED_URL = "https://test-project.supabase.co/storage/v1/object/public/temp-home-away/1700000000000-cabin.png"


@pytest.fixture(autouse=True)
def _fresh_view_cache():
    clear_view_cache()
    yield
    clear_view_cache()


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _foreign_keys_on(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def owner():
    return Identity(
        id="user_owner",
        email="owner@example.com",
        image_url="https://img.clerk.com/owner.png",
        has_profile=True,
    )


@pytest.fixture
def guest():
    return Identity(id="user_guest", email="guest@example.com", has_profile=True)


@pytest.fixture
def newcomer():
    """Logged in, but has not created a profile yet."""
    return Identity(id="user_new", email="new@example.com", image_url="https://img.clerk.com/new.png")


@pytest.fixture
def identity_store():
    store = AsyncMock()
    store.get_identity.return_value = None
    store.mark_onboarded.return_value = None
    return store


@pytest.fixture
def storage():
    store = AsyncMock()
    store.upload.return_value = UPLOADED_URL
    return store


@pytest.fixture
def png():
    return UploadedImage(filename="cabin.png", content_type="image/png", content=b"\x89PNG\r\n" + b"0" * 512)


async def _create_profile(db, identity: Identity, username: str):
    return await profile_crud.create_profile(
        db,
        clerk_id=identity.id,
        email=identity.email,
        profile_image=identity.image_url or "",
        first_name="Test",
        last_name="User",
        username=username,
    )


@pytest.fixture
async def owner_profile(db, owner):
    return await _create_profile(db, owner, "owner")


@pytest.fixture
async def guest_profile(db, guest):
    return await _create_profile(db, guest, "guest")


@pytest.fixture
def property_fields():
    return {
        "name": "Lakeside Cabin",
        "tagline": "Quiet cabin with a private dock",
        "category": "cabin",
        "country": "US",
        "description": "A quiet cabin by the lake with a dock, a fire pit and plenty of room for the whole family.",
        "price": 120,
        "guests": 4,
        "bedrooms": 2,
        "beds": 3,
        "baths": 1,
        "amenities": "wifi,parking",
    }


@pytest.fixture
def make_property(db, owner_profile, property_fields):
    async def _make(**overrides):
        fields = {**property_fields, **overrides}
        profile_id = fields.pop("profile_id", owner_profile.clerk_id)
        return await property_crud.create_property(
            db,
            profile_id=profile_id,
            image=fields.pop("image", "https://cdn.test/cabin.png"),
            **fields,
        )
    return _make
