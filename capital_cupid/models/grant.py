"""Grant - A funding opportunity record evaluated by the matcher."""

from datetime import date
from typing import Optional

from pydantic import Field

from .base import CamelModel


class Grant(CamelModel):
    """Grant opportunity from the catalog.

    `score` is only populated on copies returned by the matcher.
    """

    id: str = Field(..., min_length=1, description="Stable unique identifier")
    title: str = Field(..., description="Grant title")
    agency: str = Field(..., description="Issuing agency")
    amount: str = Field(..., description="Funding amount, display string")
    deadline: date = Field(..., description="Application deadline")
    summary: str = Field(..., description="Short description")
    eligibility: list[str] = Field(default_factory=list, description="Eligibility statements, in order")
    timeline: Optional[str] = Field(None, description="Processing time, display string")
    link: Optional[str] = Field(None, description="Link to the official listing")
    tags: list[str] = Field(default_factory=list)
    score: Optional[float] = Field(None, ge=0.0, le=1.0, description="Relevance score")
    logo: Optional[str] = None


class MatchResponse(CamelModel):
    """Ranked match result handed to the deck."""

    grants: list[Grant] = Field(default_factory=list)
    total_count: int = 0
