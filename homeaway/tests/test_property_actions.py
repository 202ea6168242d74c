import pytest
from sqlalchemy import func, select

from homeaway.actions import property as property_actions
from homeaway.core.cache import get_cached_view, set_cached_view
from homeaway.core.config import settings
from homeaway.core.exceptions import OnboardingRequired
from homeaway.models import Favorite, Property
from homeaway.schemas import UploadedImage

from .conftest import UPLOADED_URL


async def _count(db, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar()


class TestCreateProperty:

    async def test_uploads_image_and_persists(self, db, storage, owner, owner_profile, property_fields, png):
        set_cached_view("/?search=&category=", "stale")

        result = await property_actions.create_property(
            db, storage, owner, {**property_fields, "image": png}
        )

        assert result.redirect_to == "/"
        storage.upload.assert_awaited_once_with(png)
        rows = (await db.execute(select(Property))).scalars().all()
        assert len(rows) == 1
        assert rows[0].profile_id == owner.id
        assert rows[0].image == UPLOADED_URL
        assert get_cached_view("/?search=&category=") is None

    async def test_oversized_image_is_rejected_before_upload(self, db, storage, owner, owner_profile, property_fields):
        big = UploadedImage(
            filename="huge.jpg",
            content_type="image/jpeg",
            content=b"0" * (settings.max_image_size_bytes + 1),
        )

        result = await property_actions.create_property(
            db, storage, owner, {**property_fields, "image": big}
        )

        assert result.message == "File size must be less than 1 MB"
        storage.upload.assert_not_awaited()
        assert await _count(db, Property) == 0

    async def test_invalid_fields_are_rejected_before_upload(self, db, storage, owner, owner_profile, property_fields, png):
        result = await property_actions.create_property(
            db, storage, owner, {**property_fields, "price": "-1", "image": png}
        )

        assert result.message == "price must be a positive number"
        storage.upload.assert_not_awaited()

    async def test_anonymous_gets_message(self, db, storage, property_fields, png):
        result = await property_actions.create_property(db, storage, None, {**property_fields, "image": png})

        assert result.message == "You must be logged in to access this route"

    async def test_not_onboarded_redirects(self, db, storage, newcomer, property_fields, png):
        with pytest.raises(OnboardingRequired):
            await property_actions.create_property(db, storage, newcomer, {**property_fields, "image": png})


class TestFetchProperties:

    @pytest.fixture
    async def listings(self, make_property):
        return [
            await make_property(name="Pool House", tagline="Sunny and bright"),
            await make_property(name="Mountain Lodge", tagline="Heated POOL and sauna", category="lodge"),
            await make_property(name="Old Barn", tagline="Rustic charm", category="lodge"),
        ]

    async def test_search_matches_name_or_tagline_case_insensitively(self, db, listings):
        results = await property_actions.fetch_properties(db, search="pool")

        assert {p.name for p in results} == {"Pool House", "Mountain Lodge"}
        for card in results:
            assert "pool" in card.name.lower() or "pool" in card.tagline.lower()

    async def test_empty_search_returns_whole_category(self, db, listings):
        results = await property_actions.fetch_properties(db, search="", category="lodge")

        assert {p.name for p in results} == {"Mountain Lodge", "Old Barn"}

    async def test_search_and_category_combine(self, db, listings):
        results = await property_actions.fetch_properties(db, search="pool", category="lodge")

        assert [p.name for p in results] == ["Mountain Lodge"]

    async def test_no_filters_returns_everything(self, db, listings):
        assert len(await property_actions.fetch_properties(db)) == 3

    async def test_projection(self, db, listings):
        card = (await property_actions.fetch_properties(db, search="barn"))[0]

        assert set(card.model_dump()) == {
            "id", "name", "tagline", "country", "image", "price", "country_label", "price_label",
        }

    async def test_like_wildcards_are_literal(self, db, listings):
        assert await property_actions.fetch_properties(db, search="%") == []


class TestPropertyDetails:

    async def test_includes_owner_profile(self, db, make_property, owner_profile):
        prop = await make_property()

        details = await property_actions.fetch_property_details(db, prop.id)

        assert details.name == "Lakeside Cabin"
        assert details.profile.username == owner_profile.username

    async def test_missing_id_returns_none(self, db):
        assert await property_actions.fetch_property_details(db, "does-not-exist") is None


class TestRentals:

    async def test_lists_only_own_properties(self, db, make_property, owner, guest, guest_profile):
        await make_property(name="Mine")
        await make_property(name="Theirs", profile_id=guest.id)

        rentals = await property_actions.fetch_rentals(db, owner)

        assert [r.name for r in rentals] == ["Mine"]

    async def test_owner_can_delete_and_favorites_follow(self, db, make_property, owner, guest, guest_profile):
        prop = await make_property()
        db.add(Favorite(profile_id=guest.id, property_id=prop.id))
        await db.commit()

        result = await property_actions.delete_rental(db, owner, prop.id)

        assert result.message == "Rental deleted successfully"
        assert await _count(db, Property) == 0
        assert await _count(db, Favorite) == 0

    async def test_other_users_cannot_delete(self, db, make_property, guest, guest_profile):
        prop = await make_property()

        result = await property_actions.delete_rental(db, guest, prop.id)

        assert result.message == "Rental not found"
        assert await _count(db, Property) == 1
