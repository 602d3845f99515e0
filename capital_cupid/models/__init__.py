"""Shared Pydantic models - contract between the matcher, deck and stores."""

from .account import Account, Preferences
from .base import CamelModel
from .decision import SwipeDecision, Verdict
from .draft import Draft, SubmitResponse
from .grant import Grant, MatchResponse
from .profile import FundingNeed, SMEProfile, TeamSize

__all__ = [
    "Account",
    "Preferences",
    "CamelModel",
    "SwipeDecision",
    "Verdict",
    "Draft",
    "SubmitResponse",
    "Grant",
    "MatchResponse",
    "FundingNeed",
    "SMEProfile",
    "TeamSize",
]
