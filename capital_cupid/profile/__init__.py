"""SME profile store and onboarding questionnaire."""

from .onboarding import (
    FUNDING_NEEDS,
    INDUSTRIES,
    LOCATIONS,
    ONBOARDING_STEPS,
    TEAM_SIZES,
    OnboardingStep,
    industry_label,
    search_industries,
    validate_step,
)
from .store import ProfileStore

__all__ = [
    "FUNDING_NEEDS",
    "INDUSTRIES",
    "LOCATIONS",
    "ONBOARDING_STEPS",
    "TEAM_SIZES",
    "OnboardingStep",
    "industry_label",
    "search_industries",
    "validate_step",
    "ProfileStore",
]
