"""Durable local state: key-value stores and typed record helpers."""

from .local_store import FileStore, KeyValueStore, MemoryStore, StorageError, StorageKeys
from .records import discard_record, load_record, save_record
from .structured import read_structured, write_structured

__all__ = [
    "FileStore",
    "KeyValueStore",
    "MemoryStore",
    "StorageError",
    "StorageKeys",
    "discard_record",
    "load_record",
    "save_record",
    "read_structured",
    "write_structured",
]
