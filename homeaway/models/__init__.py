# SQLAlchemy Models
from .base import Base
from .profile import Profile
from .property import Property
from .favorite import Favorite


__all__ = [
    "Base",
    "Profile",
    "Property",
    "Favorite",
]
