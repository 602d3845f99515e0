"""Persisted application drafts, one per grant."""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from pydantic import Field

from ..models import Draft
from ..models.base import CamelModel
from ..storage import KeyValueStore, StorageKeys, load_record, save_record

logger = logging.getLogger(__name__)


class DraftBook(CamelModel):
    drafts: Dict[str, Draft] = Field(default_factory=dict)


class DraftStore:
    def __init__(self, store: KeyValueStore, clock: Optional[Callable[[], datetime]] = None):
        self._store = store
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._book = load_record(store, StorageKeys.DRAFTS, DraftBook) or DraftBook()

    @property
    def drafts(self) -> Dict[str, Draft]:
        return dict(self._book.drafts)

    def get_draft(self, grant_id: str) -> Optional[Draft]:
        return self._book.drafts.get(grant_id)

    def save_draft(self, grant_id: str, content: str) -> Draft:
        """Create or overwrite the draft for `grant_id`.

        Raises:
            StorageError: If the drafts record cannot be written.
        """
        previous = self._book.drafts.get(grant_id)
        draft = Draft(
            id=f"draft-{grant_id}",
            grant_id=grant_id,
            content=content,
            updated_at=self._clock(),
            remote_id=previous.remote_id if previous else None,
        )
        self._put(draft)
        logger.debug("draft_save grant=%s chars=%d", grant_id, len(content))
        return draft

    def mark_synced(self, grant_id: str, remote_id: str) -> Draft:
        """Remember the backend id of an existing draft."""
        draft = self._book.drafts[grant_id].model_copy(update={"remote_id": remote_id})
        self._put(draft)
        return draft

    def _put(self, draft: Draft) -> None:
        book = DraftBook(drafts={**self._book.drafts, draft.grant_id: draft})
        save_record(self._store, StorageKeys.DRAFTS, book)
        self._book = book

    def delete_draft(self, grant_id: str) -> None:
        if grant_id not in self._book.drafts:
            return
        book = DraftBook(drafts={k: v for k, v in self._book.drafts.items() if k != grant_id})
        save_record(self._store, StorageKeys.DRAFTS, book)
        self._book = book
