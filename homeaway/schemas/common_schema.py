from pydantic import BaseModel
from typing import Optional


class ActionResult(BaseModel):
    """Outcome of a mutating action: a message for display and an optional place to go next."""
    message: str
    redirect_to: Optional[str] = None
