from typing import Any

from fastapi import Request
from starlette.datastructures import UploadFile

from homeaway.core.config import settings
from homeaway.schemas.image_schema import UploadedImage
from homeaway.services.storage import ImageStorage, SupabaseImageStorage


def get_image_storage() -> ImageStorage:
    return SupabaseImageStorage()


async def read_form(request: Request) -> dict[str, Any]:
    """
    Raw key-value form submission. Uploaded files are read into memory as
    UploadedImage; empty file inputs become None.
    """
    form = await request.form()
    data: dict[str, Any] = {}
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            # One byte past the limit is enough for ImageForm to reject it
            content = await value.read(settings.max_image_size_bytes + 1)
            data[key] = UploadedImage(
                filename=value.filename or "image",
                content_type=value.content_type or "",
                content=content,
            ) if content else None
        else:
            data[key] = value
    return data
