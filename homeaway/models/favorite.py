from sqlalchemy import Column, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin, generate_uuid


class Favorite(Base, TimestampMixin):
    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("profile_id", "property_id", name="uq_favorites_profile_property"),
    )

    id = Column(String, primary_key=True, default=generate_uuid)
    profile_id = Column(
        String,
        ForeignKey("profiles.clerk_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    property_id = Column(
        String,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    profile = relationship("Profile", back_populates="favorites")
    property = relationship("Property", back_populates="favorites")

    def __repr__(self):
        return f"<Favorite {self.profile_id} -> {self.property_id}>"
