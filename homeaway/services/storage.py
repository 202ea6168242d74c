"""Image uploads to Supabase Storage."""

import logging
import time
from typing import Protocol

from fastapi.concurrency import run_in_threadpool
from supabase import Client, create_client

from homeaway.core.config import settings
from homeaway.core.exceptions import UploadError
from homeaway.schemas.image_schema import UploadedImage

logger = logging.getLogger(__name__)


class ImageStorage(Protocol):

    async def upload(self, image: UploadedImage) -> str:
        """Store the image and return its public URL."""
        ...


def build_object_name(filename: str, timestamp_ms: int | None = None) -> str:
    """Prefix the original filename with a millisecond timestamp so uploads never collide."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    safe_name = filename.replace("/", "_").replace("\\", "_").strip() or "image"
    return f"{timestamp_ms}-{safe_name}"


class SupabaseImageStorage:
    """ImageStorage backed by a public Supabase Storage bucket."""

    _client: Client | None = None

    def __init__(self, bucket: str | None = None):
        self.bucket = bucket or settings.SUPABASE_BUCKET

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
            logger.info("Supabase client initialized")
        return cls._client

    def _upload_sync(self, image: UploadedImage) -> str:
        client = self.get_client()
        path = build_object_name(image.filename)
        try:
            client.storage.from_(self.bucket).upload(
                path=path,
                file=image.content,
                file_options={"content-type": image.content_type, "cache-control": "3600"},
            )
            url = client.storage.from_(self.bucket).get_public_url(path)
        except Exception as e:
            logger.error(f"Storage upload failed for {path}: {e}")
            raise UploadError(str(e))

        logger.info(f"Uploaded image to storage: {path}")
        return url

    async def upload(self, image: UploadedImage) -> str:
        # supabase-py storage calls block
        return await run_in_threadpool(self._upload_sync, image)
