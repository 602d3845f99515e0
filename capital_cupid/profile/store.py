"""Persisted SME profile."""

import logging

from ..models import SMEProfile
from ..storage import KeyValueStore, StorageKeys, load_record, save_record

logger = logging.getLogger(__name__)


class ProfileStore:
    """Owns the current SMEProfile and writes it through on every change."""

    def __init__(self, store: KeyValueStore):
        self._store = store
        self._profile = load_record(store, StorageKeys.PROFILE, SMEProfile) or SMEProfile()

    @property
    def profile(self) -> SMEProfile:
        return self._profile

    def set_profile(self, **updates) -> SMEProfile:
        """Merge `updates` into the profile and persist it.

        Raises:
            pydantic.ValidationError: If the merged profile is invalid.
        """
        merged = SMEProfile.model_validate({**self._profile.model_dump(), **updates})
        save_record(self._store, StorageKeys.PROFILE, merged)
        self._profile = merged
        logger.debug("profile_update fields=%s complete=%s", ",".join(sorted(updates)), merged.is_complete)
        return merged

    # The questionnaire saves one step at a time
    update_step = set_profile

    def reset_profile(self) -> None:
        self._profile = SMEProfile()
        save_record(self._store, StorageKeys.PROFILE, self._profile)
