"""Backend collaborators: grant matching, submission and remote drafts."""

from .client import API_TIMEOUT, ApiClient, ApiError
from .grants import DraftsApi, GrantsApi

__all__ = ["API_TIMEOUT", "ApiClient", "ApiError", "DraftsApi", "GrantsApi"]
