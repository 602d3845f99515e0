"""Account record and preferences."""

from .store import AccountStore, InvalidAccountError, new_account, validate_account_form

__all__ = ["AccountStore", "InvalidAccountError", "new_account", "validate_account_form"]
