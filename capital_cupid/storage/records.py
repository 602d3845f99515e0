"""Typed load/save of whole records on top of a KeyValueStore."""

import logging
from typing import Optional, Type, TypeVar

from pydantic import ValidationError

from ..models.base import CamelModel
from .local_store import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=CamelModel)


def load_record(store: KeyValueStore, key: str, model: Type[M]) -> Optional[M]:
    """Read and validate the record stored under `key`.

    Returns None when the key is absent. A corrupt record (malformed JSON or
    failed validation) is removed from the store and also reads as None.
    """
    try:
        raw = store.get_item(key)
    except StorageError as exc:
        logger.error("record_read key=%s result=failure error=%s", key, exc)
        return None

    if raw is None:
        return None

    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        logger.warning("record_read key=%s result=corrupt errors=%d, clearing", key, exc.error_count())
        discard_record(store, key)
        return None


def save_record(store: KeyValueStore, key: str, record: CamelModel) -> None:
    """Write `record` under `key`. Raises StorageError on failure."""
    store.set_item(key, record.to_json())


def discard_record(store: KeyValueStore, key: str) -> None:
    try:
        store.remove_item(key)
    except StorageError as exc:
        logger.error("record_remove key=%s result=failure error=%s", key, exc)
