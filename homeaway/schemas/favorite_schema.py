from pydantic import BaseModel
from typing import Optional


class FavoriteToggleRequest(BaseModel):
    property_id: str
    favorite_id: Optional[str] = None
    # Page whose cached view should be refreshed after the toggle
    pathname: str = "/"


class FavoriteIdResponse(BaseModel):
    favorite_id: Optional[str] = None
