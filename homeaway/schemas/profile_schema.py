from pydantic import AfterValidator, BaseModel
from typing import Annotated, Optional
from datetime import datetime


def at_least_two_chars(label: str) -> AfterValidator:
    def check(value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError(f"{label} must be at least 2 characters")
        return value
    return AfterValidator(check)


class ProfileForm(BaseModel):
    first_name: Annotated[str, at_least_two_chars("first name")]
    last_name: Annotated[str, at_least_two_chars("last name")]
    username: Annotated[str, at_least_two_chars("username")]


class ProfileResponse(BaseModel):
    id: str
    clerk_id: str
    first_name: str
    last_name: str
    username: str
    email: str
    profile_image: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProfileImageResponse(BaseModel):
    profile_image: Optional[str] = None
