from pydantic import BaseModel, Field, field_validator
from typing import Optional

from homeaway.core.config import settings


class UploadedImage(BaseModel):
    """An image file lifted off a multipart request."""
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class ImageForm(BaseModel):
    image: Optional[UploadedImage] = Field(default=None, validate_default=True)

    @field_validator("image")
    @classmethod
    def check_image(cls, value: Optional[UploadedImage]) -> UploadedImage:
        if value is None or value.size == 0:
            raise ValueError("image is required")
        if value.size > settings.max_image_size_bytes:
            raise ValueError(f"File size must be less than {settings.MAX_IMAGE_SIZE_MB} MB")
        content_type = (value.content_type or "").lower()
        if not any(content_type.startswith(allowed) for allowed in settings.allowed_image_types_list):
            raise ValueError("File must be an image")
        return value
