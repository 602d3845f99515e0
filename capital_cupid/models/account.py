"""Account and Preferences - records created before onboarding.

Both are validated on read and on write; a record missing any required
field is treated as corrupt.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


class Account(CamelModel):
    business_name: str = Field(..., min_length=1)
    email: Optional[str] = None
    created_at: datetime
    id: str = Field(..., min_length=1)


class Preferences(CamelModel):
    """Preferences captured by the preferences modal."""

    business_type: str = Field(..., min_length=1)
    industry: str = Field(..., min_length=1)
    funding_amount: str = ""
    location: str = ""
    experience: str = ""
    goals: list[str] = Field(default_factory=list)
    timeline: str = ""
    created_at: datetime
