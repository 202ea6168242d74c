from pydantic import BaseModel
from typing import Optional


class Identity(BaseModel):
    """
    The caller as known by the identity provider.

    has_profile mirrors the provider's private "hasProfile" metadata flag.
    """
    id: str
    email: str
    image_url: Optional[str] = None
    has_profile: bool = False

    class Config:
        frozen = True
