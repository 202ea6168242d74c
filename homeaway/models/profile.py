from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin, generate_uuid


class Profile(Base, TimestampMixin):
    __tablename__ = "profiles"

    id = Column(String, primary_key=True, default=generate_uuid)
    # Subject id issued by the identity provider
    clerk_id = Column(String, unique=True, index=True, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    username = Column(String, nullable=False)
    email = Column(String, nullable=False)
    profile_image = Column(String, nullable=False, default="")

    # Relationships
    properties = relationship(
        "Property",
        back_populates="profile",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    favorites = relationship(
        "Favorite",
        back_populates="profile",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Profile {self.username}>"
