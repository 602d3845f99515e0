"""Page-level controller for the matching funnel."""

from .results import ActionResult, Route
from .session import NO_MATCHES_MESSAGE, SHORTLIST_FAILED_MESSAGE, FunnelSession, field_errors
from .shortlist import (
    APPLICATION_STAGES,
    ApplicationStage,
    FundingSummary,
    filter_grants,
    matches_search,
    parse_amount,
    summarize_funding,
)

__all__ = [
    "ActionResult",
    "Route",
    "NO_MATCHES_MESSAGE",
    "SHORTLIST_FAILED_MESSAGE",
    "FunnelSession",
    "field_errors",
    "APPLICATION_STAGES",
    "ApplicationStage",
    "FundingSummary",
    "filter_grants",
    "matches_search",
    "parse_amount",
    "summarize_funding",
]
