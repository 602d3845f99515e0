"""Shortlist search and the post-submission funding summary."""

import re
from typing import Iterable, List

from pydantic import BaseModel, Field

from ..models import Grant

_CURRENCY_CHARS = re.compile(r"[RM,]")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

APPLICATION_STAGES = ("Sent", "Received", "In Review", "Decision")
COMPLETED_STAGES = 2


def matches_search(grant: Grant, term: str) -> bool:
    """Case-insensitive substring match over title, agency and tags."""
    needle = term.strip().lower()
    if not needle:
        return True
    haystack = [grant.title, grant.agency, *grant.tags]
    return any(needle in text.lower() for text in haystack)


def filter_grants(grants: Iterable[Grant], term: str) -> List[Grant]:
    return [grant for grant in grants if matches_search(grant, term)]


def parse_amount(amount: str) -> int:
    """Leading ringgit figure of an amount label, 0 when there is none.

    "RM 50,000 - RM 200,000" counts as 50000.
    """
    match = _LEADING_INT.match(_CURRENCY_CHARS.sub("", amount))
    return int(match.group(1)) if match else 0


class ApplicationStage(BaseModel):
    name: str
    completed: bool


class FundingSummary(BaseModel):
    """What the user has in flight after submitting."""

    grant_count: int
    total_funding: int
    stages: List[ApplicationStage] = Field(default_factory=list)
    current_stage: str
    progress_percent: int


def summarize_funding(grants: Iterable[Grant]) -> FundingSummary:
    grants = list(grants)
    stages = [
        ApplicationStage(name=name, completed=index < COMPLETED_STAGES)
        for index, name in enumerate(APPLICATION_STAGES)
    ]
    current = next((i for i, stage in enumerate(stages) if not stage.completed), len(stages) - 1)
    return FundingSummary(
        grant_count=len(grants),
        total_funding=sum(parse_amount(grant.amount) for grant in grants),
        stages=stages,
        current_stage=stages[current].name,
        progress_percent=round(current / len(stages) * 100),
    )
