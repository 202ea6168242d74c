from sqlalchemy import Column, String, Integer, ForeignKey, Text
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin, generate_uuid


class Property(Base, TimestampMixin):
    __tablename__ = "properties"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False)
    tagline = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)
    image = Column(String, nullable=False)
    country = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Integer, nullable=False)
    guests = Column(Integer, nullable=False)
    bedrooms = Column(Integer, nullable=False)
    beds = Column(Integer, nullable=False)
    baths = Column(Integer, nullable=False)
    amenities = Column(Text, nullable=False, default="")

    profile_id = Column(
        String,
        ForeignKey("profiles.clerk_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    profile = relationship("Profile", back_populates="properties")
    favorites = relationship(
        "Favorite",
        back_populates="property",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Property {self.name}>"
