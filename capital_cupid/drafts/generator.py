"""Templated application drafts and canned rewrite suggestions.

Stand-in for a language-model drafting service: the output is a fixed
letter addressed to the grant's agency, personalised with whatever the
account and profile know about the business.
"""

import re
from enum import Enum
from typing import Optional, Tuple

from ..models import Account, Grant, SMEProfile
from ..profile.onboarding import industry_label

DRAFT_HEADER = "[AI-Generated Draft Application]"

_TEMPLATE = """{header}

Dear {agency},

I am writing to formally apply for the {title} on behalf of {company}.

Our business operates in the {sector} sector and has been providing innovative solutions to our clients for {tenure}. We believe this grant opportunity aligns perfectly with our growth objectives and strategic vision.

**Project Overview:**
We are seeking funding to expand our operations and enhance our service offerings. The requested funding will be utilized for:

{uses}

**Expected Outcomes:**
With this grant funding, we anticipate achieving significant milestones including increased revenue, job creation, and contribution to the local economy. Our projected timeline for implementation is 12-18 months.

**Company Qualifications:**
Our team possesses the necessary expertise and experience to successfully execute this project. We have a proven track record of delivering results and maintaining high standards of operational excellence.

We are committed to meeting all grant requirements and providing regular progress reports as needed. Thank you for considering our application.

Sincerely,
[Your Name]
{signature}"""

_DEFAULT_USES = [
    "Research and development of new technologies",
    "Expansion of our team and operational capacity",
    "Implementation of sustainable business practices",
    "Market development and customer acquisition",
]

_NEED_USES = {
    "Growth": "Scaling our operations to serve new customers",
    "Digitalisation": "Digital transformation of our core business processes",
    "Working Capital": "Working capital to stabilise day-to-day operations",
    "Export": "Expansion into international markets",
    "Hiring": "Expansion of our team and operational capacity",
    "R&D": "Research and development of new technologies",
}


class SuggestionKind(str, Enum):
    CLARITY = "clarity"
    SHORTEN = "shorten"
    FORMAL = "formal"


def generate_draft(
    grant: Grant,
    account: Optional[Account] = None,
    profile: Optional[SMEProfile] = None,
) -> str:
    """Draft an application letter for `grant`."""
    business_name = account.business_name if account else None

    uses = _DEFAULT_USES
    if profile and profile.needs:
        uses = [_NEED_USES[need.value] for need in profile.needs]

    if profile and profile.years:
        tenure = f"the past {profile.years} year{'s' if profile.years != 1 else ''}"
    else:
        tenure = "the past few years"

    return _TEMPLATE.format(
        header=DRAFT_HEADER,
        agency=grant.agency,
        title=grant.title,
        company=business_name or "my company",
        sector=industry_label(profile.industry).lower() if profile and profile.industry else "technology",
        tenure=tenure,
        uses="\n".join(f"• {use}" for use in uses),
        signature=business_name or "[Company Name]",
    )


def apply_suggestion(content: str, kind: SuggestionKind) -> str:
    """Apply one canned rewrite to `content`."""
    kind = SuggestionKind(kind)
    if kind is SuggestionKind.CLARITY:
        return re.sub(r"[.]\s+", ". Our approach ensures ", content)
    if kind is SuggestionKind.SHORTEN:
        return content[: int(len(content) * 0.7)] + "..."
    formal = re.sub(r"we are", "we remain", content, flags=re.IGNORECASE)
    return re.sub(r"our", "our organization's", formal, flags=re.IGNORECASE)


def draft_stats(content: str) -> Tuple[int, int]:
    """Character and word counts shown under the editor."""
    return len(content), len(content.split())
