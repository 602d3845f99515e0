"""SMEProfile - Business attributes collected by the onboarding questionnaire."""

from enum import Enum

from pydantic import Field, field_validator

from .base import CamelModel


class TeamSize(str, Enum):
    """Team-size brackets, smallest first."""

    MICRO = "1-10"
    SMALL = "11-50"
    MEDIUM = "51-100"
    LARGE = "101-500"
    ENTERPRISE = "501+"


class FundingNeed(str, Enum):
    GROWTH = "Growth"
    DIGITALISATION = "Digitalisation"
    WORKING_CAPITAL = "Working Capital"
    EXPORT = "Export"
    HIRING = "Hiring"
    RND = "R&D"


class SMEProfile(CamelModel):
    """Matcher input. Immutable for the duration of one match cycle."""

    industry: str = Field(default="", description="Industry category id, e.g. 'technology'")
    location: str = Field(default="", description="State or territory")
    team_size_bracket: TeamSize = Field(default=TeamSize.MICRO)
    needs: list[FundingNeed] = Field(default_factory=list, description="Funding-need tags")
    years: int = Field(default=0, ge=0, description="Years in operation")
    is_complete: bool = Field(default=False)

    @field_validator("needs")
    @classmethod
    def unique_needs(cls, v: list[FundingNeed]) -> list[FundingNeed]:
        """Collapse repeated needs, keeping first-seen order."""
        return list(dict.fromkeys(v))

    def missing_fields(self) -> list[str]:
        """Fields that must be filled before the profile can be completed."""
        missing = []
        if not self.industry.strip():
            missing.append("industry")
        if not self.location.strip():
            missing.append("location")
        if not self.needs:
            missing.append("needs")
        return missing
