"""Draft and submission records."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from .base import CamelModel


class Draft(CamelModel):
    """Application draft for one grant. Content is stored verbatim."""

    id: str
    grant_id: str
    content: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    remote_id: Optional[str] = Field(None, description="Backend draft id once synced")


class SubmitResponse(CamelModel):
    success: bool
    application_id: Optional[str] = None
    message: str = ""
