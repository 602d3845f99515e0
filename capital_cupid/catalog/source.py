"""CandidateSource - read-only port onto a grant registry."""

from abc import ABC, abstractmethod
from typing import Iterable, List

from ..models import Grant


class GrantNotFoundError(LookupError):
    """Raised when a grant id is not in the catalog."""

    def __init__(self, grant_id: str):
        super().__init__(f"Grant not found: {grant_id}")
        self.grant_id = grant_id


class CandidateSource(ABC):
    """Abstract read-only grant catalog.

    The matcher only ever calls `get_all`; detail and shortlist views use
    `get_by_id` and `get_many`.
    """

    @abstractmethod
    def get_all(self) -> List[Grant]:
        """Return every grant in catalog order."""
        pass

    def get_by_id(self, grant_id: str) -> Grant:
        for grant in self.get_all():
            if grant.id == grant_id:
                return grant
        raise GrantNotFoundError(grant_id)

    def get_many(self, grant_ids: Iterable[str]) -> List[Grant]:
        """Return the grants whose ids are in `grant_ids`, in catalog order.

        Unknown ids are skipped.
        """
        wanted = set(grant_ids)
        return [grant for grant in self.get_all() if grant.id in wanted]
