"""Profile-to-grant matcher.

Scores every catalog grant by case-insensitive substring overlap between the
profile (industry, funding needs) and the grant's tags:

    score = base + industry_bonus + need_bonus * matched_needs

clamped to `max_score`. Grants scoring at or below `min_score` are dropped and
the rest are ranked by descending score, ties keeping catalog order.
"""

import logging
from typing import Iterable, List

from ..models import Grant, SMEProfile
from .weights import DEFAULT_WEIGHTS, MatchWeights

logger = logging.getLogger(__name__)

SCORE_PRECISION = 4


def _tags_contain(tags: List[str], term: str) -> bool:
    """True if any tag contains `term` (case-insensitive). Blank terms never match."""
    needle = term.strip().lower()
    if not needle:
        return False
    return any(needle in tag.lower() for tag in tags)


def calculate_match_score(
    grant: Grant,
    profile: SMEProfile,
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> float:
    """Relevance of `grant` to `profile` in [0, max_score]."""
    tags = grant.tags or []
    score = weights.base

    if _tags_contain(tags, profile.industry):
        score += weights.industry_bonus

    for need in profile.needs:
        if _tags_contain(tags, need.value):
            score += weights.need_bonus

    return round(min(score, weights.max_score), SCORE_PRECISION)


def match_grants(
    profile: SMEProfile,
    grants: Iterable[Grant],
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> List[Grant]:
    """Rank `grants` for `profile`.

    Returns scored copies; the input grants are not modified.
    """
    scored = [
        grant.model_copy(update={"score": calculate_match_score(grant, profile, weights)})
        for grant in grants
    ]
    kept = [grant for grant in scored if grant.score > weights.min_score]

    # sorted() is stable, reverse=True included
    ranked = sorted(kept, key=lambda grant: grant.score, reverse=True)

    logger.debug(
        "match industry=%s needs=%d candidates=%d kept=%d",
        profile.industry or "-",
        len(profile.needs),
        len(scored),
        len(ranked),
    )
    return ranked
