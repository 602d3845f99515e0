"""Application drafts: persistence and assisted drafting."""

from .generator import DRAFT_HEADER, SuggestionKind, apply_suggestion, draft_stats, generate_draft
from .store import DraftBook, DraftStore

__all__ = [
    "DRAFT_HEADER",
    "SuggestionKind",
    "apply_suggestion",
    "draft_stats",
    "generate_draft",
    "DraftBook",
    "DraftStore",
]
