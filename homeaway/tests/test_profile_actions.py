import pytest

from homeaway.actions import profile as profile_actions
from homeaway.core.cache import get_cached_view, set_cached_view
from homeaway.core.exceptions import OnboardingRequired, UploadError
from homeaway.crud import favorite as favorite_crud
from homeaway.crud import profile as profile_crud
from homeaway.crud import property as property_crud
from homeaway.schemas import UploadedImage

from .conftest import UPLOADED_URL

PROFILE_FORM = {"first_name": "Ada", "last_name": "Lovelace", "username": "ada"}


class TestCreateProfile:

    async def test_creates_row_and_sets_onboarding_flag(self, db, identity_store, newcomer):
        result = await profile_actions.create_profile(db, identity_store, newcomer, PROFILE_FORM)

        assert result.redirect_to == "/"
        profile = await profile_crud.get_profile_by_clerk_id(db, newcomer.id)
        assert profile.username == "ada"
        assert profile.email == newcomer.email
        assert profile.profile_image == newcomer.image_url
        identity_store.mark_onboarded.assert_awaited_once_with(newcomer.id)

    async def test_requires_login(self, db, identity_store):
        result = await profile_actions.create_profile(db, identity_store, None, PROFILE_FORM)

        assert result.message == "Please login to create a profile"
        assert result.redirect_to is None
        identity_store.mark_onboarded.assert_not_awaited()

    async def test_invalid_form_writes_nothing(self, db, identity_store, newcomer):
        result = await profile_actions.create_profile(
            db, identity_store, newcomer, {**PROFILE_FORM, "last_name": ""}
        )

        assert result.message == "last name must be at least 2 characters"
        assert await profile_crud.get_profile_by_clerk_id(db, newcomer.id) is None
        identity_store.mark_onboarded.assert_not_awaited()

    async def test_existing_row_is_reflagged(self, db, identity_store, owner, owner_profile):
        result = await profile_actions.create_profile(db, identity_store, owner, PROFILE_FORM)

        assert result.message == "Profile already exists"
        assert result.redirect_to == "/"
        identity_store.mark_onboarded.assert_awaited_once_with(owner.id)

    async def test_identity_provider_failure_is_reported(self, db, identity_store, newcomer):
        identity_store.mark_onboarded.side_effect = RuntimeError("boom")

        result = await profile_actions.create_profile(db, identity_store, newcomer, PROFILE_FORM)

        assert result.message == "An error occurred"


class TestFetchProfile:

    async def test_returns_profile(self, db, owner, owner_profile):
        profile = await profile_actions.fetch_profile(db, owner)

        assert profile.id == owner_profile.id

    async def test_redirects_when_not_onboarded(self, db, newcomer):
        with pytest.raises(OnboardingRequired) as exc_info:
            await profile_actions.fetch_profile(db, newcomer)

        assert exc_info.value.redirect_to == "/profile/create"

    async def test_redirects_when_row_missing(self, db, guest):
        # Flag says onboarded, but no row was ever written
        with pytest.raises(OnboardingRequired):
            await profile_actions.fetch_profile(db, guest)

    async def test_profile_image(self, db, owner, owner_profile, newcomer):
        assert await profile_actions.fetch_profile_image(db, owner) == owner.image_url
        assert await profile_actions.fetch_profile_image(db, None) is None
        assert await profile_actions.fetch_profile_image(db, newcomer) is None


class TestUpdateProfile:

    async def test_updates_fields(self, db, owner, owner_profile):
        result = await profile_actions.update_profile(
            db, owner, {"first_name": "Grace", "last_name": "Hopper", "username": "grace"}
        )

        assert result.message == "Profile updated successfully"
        profile = await profile_crud.get_profile_by_clerk_id(db, owner.id)
        assert profile.username == "grace"

    async def test_empty_username_does_not_write(self, db, owner, owner_profile):
        result = await profile_actions.update_profile(
            db, owner, {"first_name": "Grace", "last_name": "Hopper", "username": ""}
        )

        assert "username" in result.message
        profile = await profile_crud.get_profile_by_clerk_id(db, owner.id)
        assert profile.first_name == "Test"
        assert profile.username == "owner"

    async def test_owned_listing_views_are_revalidated(self, db, make_property, owner, owner_profile, guest, guest_profile):
        mine = (await make_property(name="Mine")).id
        theirs = (await make_property(name="Theirs", profile_id=guest.id)).id
        set_cached_view(f"/properties/{mine}", "stale owner name")
        set_cached_view(f"/properties/{theirs}", "unrelated")

        await profile_actions.update_profile(
            db, owner, {"first_name": "Grace", "last_name": "Hopper", "username": "grace"}
        )

        assert get_cached_view(f"/properties/{mine}") is None
        assert get_cached_view(f"/properties/{theirs}") == "unrelated"

    async def test_anonymous_gets_message(self, db):
        result = await profile_actions.update_profile(db, None, PROFILE_FORM)

        assert result.message == "You must be logged in to access this route"

    async def test_not_onboarded_redirects(self, db, newcomer):
        with pytest.raises(OnboardingRequired):
            await profile_actions.update_profile(db, newcomer, PROFILE_FORM)


class TestUpdateProfileImage:

    async def test_uploads_then_saves_reference(self, db, storage, owner, owner_profile, png):
        result = await profile_actions.update_profile_image(db, storage, owner, {"image": png})

        assert result.message == "Profile image updated successfully"
        storage.upload.assert_awaited_once_with(png)
        assert await profile_crud.get_profile_image(db, owner.id) == UPLOADED_URL

    async def test_wrong_type_never_uploads(self, db, storage, owner, owner_profile):
        text_file = UploadedImage(filename="notes.txt", content_type="text/plain", content=b"hello")

        result = await profile_actions.update_profile_image(db, storage, owner, {"image": text_file})

        assert result.message == "File must be an image"
        storage.upload.assert_not_awaited()
        assert await profile_crud.get_profile_image(db, owner.id) == owner.image_url

    async def test_upload_failure_leaves_profile_untouched(self, db, storage, owner, owner_profile, png):
        storage.upload.side_effect = UploadError("bucket not found")

        result = await profile_actions.update_profile_image(db, storage, owner, {"image": png})

        assert result.message == "Image upload failed: bucket not found"
        assert await profile_crud.get_profile_image(db, owner.id) == owner.image_url

    async def test_missing_row_redirects_before_upload(self, db, storage, guest, png):
        # Flag says onboarded, but no row was ever written
        with pytest.raises(OnboardingRequired):
            await profile_actions.update_profile_image(db, storage, guest, {"image": png})

        storage.upload.assert_not_awaited()

    async def test_owned_listing_views_are_revalidated(self, db, storage, make_property, owner, png):
        prop_id = (await make_property()).id
        set_cached_view(f"/properties/{prop_id}", "stale avatar")

        await profile_actions.update_profile_image(db, storage, owner, {"image": png})

        assert get_cached_view(f"/properties/{prop_id}") is None


class TestDeleteProfile:

    async def test_removes_properties_and_favorites(self, db, make_property, guest, guest_profile):
        prop = await make_property()
        await favorite_crud.add_favorite(db, profile_id=guest.id, property_id=prop.id)

        assert await profile_crud.delete_profile(db, guest_profile.clerk_id) is True
        assert await favorite_crud.get_favorite_id(db, guest.id, prop.id) is None

        assert await profile_crud.delete_profile(db, "user_owner") is True
        assert await property_crud.get_property_with_profile(db, prop.id) is None

    async def test_unknown_profile(self, db):
        assert await profile_crud.delete_profile(db, "user_nobody") is False


class TestFetchProfileImage:

    async def test_anonymous_gets_none(self, db):
        assert await profile_actions.fetch_profile_image(db, None) is None

    async def test_missing_profile_gets_none(self, db, newcomer):
        assert await profile_actions.fetch_profile_image(db, newcomer) is None

    async def test_returns_stored_image(self, db, owner, owner_profile):
        assert await profile_actions.fetch_profile_image(db, owner) == owner.image_url
