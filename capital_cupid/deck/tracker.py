"""Deck / decision tracker.

Walks the user through an ordered list of matched grants, one card at a
time, recording a verdict per card and collecting accepted grants into the
shortlist. The whole state is persisted on every mutation.

States:
    LOADING    no candidate list has been set yet (or the deck was reset)
    ACTIVE     0 <= current_index < len(grants)
    EXHAUSTED  current_index == len(grants); terminal until new candidates
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List, Optional

from pydantic import Field, model_validator

from ..models import Grant, SwipeDecision, Verdict
from ..models.base import CamelModel
from ..storage import KeyValueStore, StorageError, StorageKeys, load_record, save_record

logger = logging.getLogger(__name__)


class DeckState(str, Enum):
    LOADING = "loading"
    ACTIVE = "active"
    EXHAUSTED = "exhausted"


class DeckStateError(RuntimeError):
    """Raised when a swipe is not valid for the current deck state."""


class DeckSnapshot(CamelModel):
    """Serializable tracker state."""

    grants: List[Grant] = Field(default_factory=list)
    current_index: int = Field(default=0, ge=0)
    decisions: List[SwipeDecision] = Field(default_factory=list)
    shortlist_ids: List[str] = Field(default_factory=list)
    loaded: bool = False

    @model_validator(mode="after")
    def check_invariants(self) -> "DeckSnapshot":
        if self.current_index > len(self.grants):
            raise ValueError(
                f"current_index {self.current_index} exceeds deck length {len(self.grants)}"
            )
        if len(set(self.shortlist_ids)) != len(self.shortlist_ids):
            raise ValueError("shortlist_ids must be unique")
        return self


class DeckTracker:
    """State-owning service for the swipe deck and shortlist.

    Args:
        store: Durable store the snapshot is written to.
        dedup_decisions: When True, a new decision for a grant replaces the
            earlier one instead of being appended.
        clock: Returns the timestamp for new decisions (UTC now by default).
    """

    def __init__(
        self,
        store: KeyValueStore,
        dedup_decisions: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._store = store
        self.dedup_decisions = dedup_decisions
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._snapshot = load_record(store, StorageKeys.DECK, DeckSnapshot) or DeckSnapshot()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def state(self) -> DeckState:
        if not self._snapshot.loaded:
            return DeckState.LOADING
        if self._snapshot.current_index >= len(self._snapshot.grants):
            return DeckState.EXHAUSTED
        return DeckState.ACTIVE

    @property
    def current_index(self) -> int:
        return self._snapshot.current_index

    @property
    def grants(self) -> List[Grant]:
        return list(self._snapshot.grants)

    @property
    def current_grant(self) -> Optional[Grant]:
        if self.state is not DeckState.ACTIVE:
            return None
        return self._snapshot.grants[self._snapshot.current_index]

    @property
    def remaining(self) -> int:
        return len(self._snapshot.grants) - self._snapshot.current_index

    @property
    def decisions(self) -> List[SwipeDecision]:
        return list(self._snapshot.decisions)

    @property
    def shortlist_ids(self) -> List[str]:
        return list(self._snapshot.shortlist_ids)

    def is_shortlisted(self, grant_id: str) -> bool:
        return grant_id in self._snapshot.shortlist_ids

    def find_grant(self, grant_id: str) -> Optional[Grant]:
        """Return the grant with `grant_id` from the current list, if present."""
        for grant in self._snapshot.grants:
            if grant.id == grant_id:
                return grant
        return None

    def snapshot(self) -> DeckSnapshot:
        return self._snapshot.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_candidates(self, grants: List[Grant]) -> None:
        """Replace the candidate list and rewind to the first card.

        Decisions and shortlist are kept.
        """
        self._commit(
            self._snapshot.model_copy(
                update={"grants": list(grants), "current_index": 0, "loaded": True}
            )
        )
        logger.info("deck_set count=%d state=%s", len(grants), self.state.value)

    def record_decision(self, grant_id: str, verdict: Verdict) -> SwipeDecision:
        """Log a verdict. Does not move the cursor or touch the shortlist."""
        decision = SwipeDecision(grant_id=grant_id, verdict=Verdict(verdict), timestamp=self._clock())
        self._commit(
            self._snapshot.model_copy(update={"decisions": self._with_decision(decision)})
        )
        return decision

    def advance(self) -> int:
        """Move to the next card, saturating at the end of the deck."""
        index = min(self._snapshot.current_index + 1, len(self._snapshot.grants))
        if index != self._snapshot.current_index:
            self._commit(self._snapshot.model_copy(update={"current_index": index}))
        return index

    def add_to_shortlist(self, grant_id: str) -> None:
        if grant_id in self._snapshot.shortlist_ids:
            return
        self._commit(
            self._snapshot.model_copy(
                update={"shortlist_ids": self._snapshot.shortlist_ids + [grant_id]}
            )
        )

    def remove_from_shortlist(self, grant_id: str) -> None:
        if grant_id not in self._snapshot.shortlist_ids:
            return
        self._commit(
            self._snapshot.model_copy(
                update={"shortlist_ids": [i for i in self._snapshot.shortlist_ids if i != grant_id]}
            )
        )

    def record_swipe(self, grant_id: str, verdict: Verdict) -> SwipeDecision:
        """Decide on the current card in one state transition.

        Appends the decision, shortlists the grant on accept, and advances
        the cursor. Either all three happen or none do.

        Raises:
            DeckStateError: If the deck is not active or `grant_id` is not
                the current card.
        """
        current = self.current_grant
        if current is None:
            raise DeckStateError(f"Cannot swipe while deck is {self.state.value}")
        if current.id != grant_id:
            raise DeckStateError(f"Grant {grant_id} is not the current card ({current.id})")

        verdict = Verdict(verdict)
        decision = SwipeDecision(grant_id=grant_id, verdict=verdict, timestamp=self._clock())
        shortlist = self._snapshot.shortlist_ids
        if verdict is Verdict.ACCEPT and grant_id not in shortlist:
            shortlist = shortlist + [grant_id]

        self._commit(
            self._snapshot.model_copy(
                update={
                    "decisions": self._with_decision(decision),
                    "shortlist_ids": shortlist,
                    "current_index": self._snapshot.current_index + 1,
                }
            )
        )
        logger.info(
            "swipe grant=%s verdict=%s index=%d state=%s",
            grant_id, verdict.value, self.current_index, self.state.value,
        )
        return decision

    def reset(self) -> None:
        """Clear candidates, cursor, decisions and shortlist together."""
        self._commit(DeckSnapshot())
        logger.info("deck_reset")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _with_decision(self, decision: SwipeDecision) -> List[SwipeDecision]:
        decisions = self._snapshot.decisions
        if self.dedup_decisions:
            decisions = [d for d in decisions if d.grant_id != decision.grant_id]
        return decisions + [decision]

    def _commit(self, snapshot: DeckSnapshot) -> None:
        self._snapshot = snapshot
        try:
            save_record(self._store, StorageKeys.DECK, snapshot)
        except StorageError as exc:
            logger.error("deck_persist result=failure error=%s", exc)
