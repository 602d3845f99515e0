"""Onboarding questionnaire: answer options and per-step validation."""

from typing import Dict, List, NamedTuple

from ..models import FundingNeed, SMEProfile, TeamSize


class OnboardingStep(NamedTuple):
    id: int
    title: str
    description: str


ONBOARDING_STEPS: List[OnboardingStep] = [
    OnboardingStep(1, "Industry", "What sector are you in?"),
    OnboardingStep(2, "Location", "Where is your business?"),
    OnboardingStep(3, "Size", "How big is your team?"),
    OnboardingStep(4, "Needs", "What funding do you need?"),
    OnboardingStep(5, "Confirm", "Review your profile"),
]

INDUSTRIES: Dict[str, str] = {
    "technology": "Technology & Software",
    "manufacturing": "Manufacturing",
    "retail": "Retail & E-commerce",
    "healthcare": "Healthcare & Life Sciences",
    "automotive": "Automotive",
    "food": "Food & Beverage",
}

LOCATIONS: List[str] = [
    "Kuala Lumpur", "Selangor", "Penang", "Johor", "Perak", "Kedah",
    "Kelantan", "Terengganu", "Pahang", "Negeri Sembilan", "Melaka",
    "Perlis", "Sabah", "Sarawak", "Putrajaya", "Labuan",
]

TEAM_SIZES: List[TeamSize] = list(TeamSize)
FUNDING_NEEDS: List[FundingNeed] = list(FundingNeed)

CONFIRM_STEP = len(ONBOARDING_STEPS) - 1


def search_industries(term: str) -> Dict[str, str]:
    """Industries whose label contains `term` (case-insensitive)."""
    needle = term.strip().lower()
    return {key: label for key, label in INDUSTRIES.items() if needle in label.lower()}


def industry_label(industry_id: str) -> str:
    return INDUSTRIES.get(industry_id, industry_id)


def validate_step(step: int, profile: SMEProfile) -> Dict[str, str]:
    """Return field errors blocking `step` (0-based) for `profile`.

    The confirm step re-checks every earlier step.
    """
    if not 0 <= step < len(ONBOARDING_STEPS):
        raise ValueError(f"Unknown onboarding step: {step}")

    errors: Dict[str, str] = {}
    if step in (0, CONFIRM_STEP) and profile.industry not in INDUSTRIES:
        errors["industry"] = "Please select your industry"
    if step in (1, CONFIRM_STEP) and profile.location not in LOCATIONS:
        errors["location"] = "Please select your location"
    if step in (3, CONFIRM_STEP) and not profile.needs:
        errors["needs"] = "Please select at least one funding need"
    return errors
