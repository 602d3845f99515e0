"""Grants and drafts endpoints.

`GrantsApi` answers from a local CandidateSource; `DraftsApi` talks to the
backend over HTTP.
"""

import logging
import time
from typing import List

from ..catalog import CandidateSource
from ..matching import DEFAULT_WEIGHTS, MatchWeights, match_grants
from ..models import Grant, MatchResponse, SMEProfile, SubmitResponse
from .client import ApiClient, ApiError

logger = logging.getLogger(__name__)


class GrantsApi:
    def __init__(self, catalog: CandidateSource, weights: MatchWeights = DEFAULT_WEIGHTS):
        self.catalog = catalog
        self.weights = weights

    async def match(self, profile: SMEProfile) -> MatchResponse:
        """Ranked grants for `profile`."""
        grants = match_grants(profile, self.catalog.get_all(), self.weights)
        logger.info("match_complete industry=%s count=%d", profile.industry or "-", len(grants))
        return MatchResponse(grants=grants, total_count=len(grants))

    async def get_by_id(self, grant_id: str) -> Grant:
        """Raises GrantNotFoundError for unknown ids."""
        return self.catalog.get_by_id(grant_id)

    async def get_shortlist(self, grant_ids: List[str]) -> List[Grant]:
        return self.catalog.get_many(grant_ids)

    async def submit(self, grant_id: str, content: str) -> SubmitResponse:
        """Accept an application. Blank content is refused."""
        if not content.strip():
            return SubmitResponse(success=False, message="Application content is empty")
        application_id = f"app-{int(time.time() * 1000)}"
        logger.info("submit grant=%s application=%s", grant_id, application_id)
        return SubmitResponse(
            success=True,
            application_id=application_id,
            message="Application submitted successfully",
        )


class DraftsApi:
    """Remote draft persistence. Content is sent and stored verbatim."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def save(self, grant_id: str, content: str) -> str:
        """Create a draft and return its id."""
        data = await self.client.request("POST", "/drafts", {"grantId": grant_id, "content": content})
        try:
            return data["id"]
        except (TypeError, KeyError) as exc:
            raise ApiError("API Error: draft id missing from response") from exc

    async def update(self, draft_id: str, content: str) -> None:
        await self.client.request("PATCH", f"/drafts/{draft_id}", {"content": content})

    async def submit(self, grant_id: str, draft_id: str) -> SubmitResponse:
        data = await self.client.request("POST", "/submit", {"grantId": grant_id, "draftId": draft_id})
        return SubmitResponse.model_validate(data)
