from .common_schema import ActionResult
from .identity_schema import Identity
from .profile_schema import ProfileForm, ProfileResponse, ProfileImageResponse
from .property_schema import PropertyForm, PropertyCard, PropertyDetails, PropertyListResponse
from .image_schema import ImageForm, UploadedImage
from .favorite_schema import FavoriteToggleRequest, FavoriteIdResponse
from .validation import validate_with_schema

__all__ = [
    "ActionResult",
    "Identity",
    "ProfileForm",
    "ProfileResponse",
    "ProfileImageResponse",
    "PropertyForm",
    "PropertyCard",
    "PropertyDetails",
    "PropertyListResponse",
    "ImageForm",
    "UploadedImage",
    "FavoriteToggleRequest",
    "FavoriteIdResponse",
    "validate_with_schema",
]
