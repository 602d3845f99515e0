"""SwipeDecision - One accept/reject verdict recorded against a grant."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import Field

from .base import CamelModel


class Verdict(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"


class SwipeDecision(CamelModel):
    grant_id: str
    verdict: Verdict
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
