from pydantic import AfterValidator, BaseModel, computed_field, field_validator
from typing import Annotated, Optional, List
from datetime import datetime

from homeaway.schemas.profile_schema import ProfileResponse
from homeaway.utils.categories import is_valid_category
from homeaway.utils.countries import country_flag_and_name, find_country_by_code
from homeaway.utils.format import format_currency


def length_between(label: str, low: int, high: int) -> AfterValidator:
    def check(value: str) -> str:
        value = value.strip()
        if not low <= len(value) <= high:
            raise ValueError(f"{label} must be between {low} and {high} characters")
        return value
    return AfterValidator(check)


def non_negative(label: str) -> AfterValidator:
    def check(value: int) -> int:
        if value < 0:
            raise ValueError(f"{label} must be a positive number")
        return value
    return AfterValidator(check)


class PropertyForm(BaseModel):
    name: Annotated[str, length_between("name", 2, 100)]
    tagline: Annotated[str, length_between("tagline", 2, 100)]
    price: Annotated[int, non_negative("price")]
    category: str
    description: str
    country: str
    guests: Annotated[int, non_negative("guest amount")]
    bedrooms: Annotated[int, non_negative("bedrooms amount")]
    beds: Annotated[int, non_negative("beds amount")]
    baths: Annotated[int, non_negative("baths amount")]
    amenities: str = ""

    @field_validator("category")
    @classmethod
    def category_in_catalog(cls, value: str) -> str:
        if not is_valid_category(value):
            raise ValueError(f"category '{value}' is not supported")
        return value

    @field_validator("description")
    @classmethod
    def description_word_count(cls, value: str) -> str:
        words = len(value.split())
        if not 10 <= words <= 1000:
            raise ValueError("description must be between 10 and 1000 words")
        return value.strip()

    @field_validator("country")
    @classmethod
    def country_known(cls, value: str) -> str:
        value = value.strip().upper()
        if find_country_by_code(value) is None:
            raise ValueError(f"country '{value}' is not a valid country code")
        return value


class PropertyCard(BaseModel):
    """Listing-display projection."""
    id: str
    name: str
    tagline: str
    country: str
    image: str
    price: int

    class Config:
        from_attributes = True

    @computed_field
    @property
    def country_label(self) -> str:
        return country_flag_and_name(self.country)

    @computed_field
    @property
    def price_label(self) -> str:
        return format_currency(self.price)


class PropertyDetails(BaseModel):
    id: str
    name: str
    tagline: str
    category: str
    image: str
    country: str
    description: str
    price: int
    guests: int
    bedrooms: int
    beds: int
    baths: int
    amenities: str
    profile_id: str
    created_at: datetime
    updated_at: datetime
    profile: ProfileResponse

    class Config:
        from_attributes = True


class PropertyListResponse(BaseModel):
    properties: List[PropertyCard]
