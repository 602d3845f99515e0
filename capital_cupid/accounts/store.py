"""Account and preferences records.

The two records live under separate keys but are cleared together: a
corrupt or invalid copy of either one wipes both.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import ValidationError

from ..models import Account, Preferences
from ..storage import KeyValueStore, StorageError, StorageKeys, discard_record, load_record, save_record

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class InvalidAccountError(ValueError):
    """Raised when saving an account or preferences record missing required fields."""


def validate_account_form(business_name: str, email: Optional[str] = None) -> Dict[str, str]:
    """Field errors for the account creation form (empty dict when valid)."""
    errors: Dict[str, str] = {}
    if not (business_name or "").strip():
        errors["business_name"] = "Business name is required"
    if email and not EMAIL_PATTERN.match(email.strip()):
        errors["email"] = "Please enter a valid email address"
    return errors


def new_account(business_name: str, email: Optional[str] = None, now: Optional[datetime] = None) -> Account:
    """Build an account from form input. Call validate_account_form first."""
    now = now or datetime.now(timezone.utc)
    return Account(
        business_name=business_name.strip(),
        email=(email or "").strip() or None,
        created_at=now,
        id=f"account_{int(now.timestamp() * 1000)}",
    )


class AccountStore:
    def __init__(self, store: KeyValueStore):
        self._store = store

    def get_account(self) -> Optional[Account]:
        return self._read(StorageKeys.ACCOUNT, Account)

    def save_account(self, account: Account) -> None:
        """Persist `account`.

        Raises:
            InvalidAccountError: If a required field is empty.
            StorageError: If the record cannot be written.
        """
        self._write(StorageKeys.ACCOUNT, account)

    def get_preferences(self) -> Optional[Preferences]:
        return self._read(StorageKeys.PREFERENCES, Preferences)

    def save_preferences(self, preferences: Preferences) -> None:
        self._write(StorageKeys.PREFERENCES, preferences)

    def clear_account(self) -> None:
        discard_record(self._store, StorageKeys.ACCOUNT)
        discard_record(self._store, StorageKeys.PREFERENCES)

    def has_account(self) -> bool:
        return self.get_account() is not None

    def _read(self, key, model):
        try:
            if self._store.get_item(key) is None:
                return None
        except StorageError as exc:
            logger.error("account_read key=%s result=failure error=%s", key, exc)
            return None
        record = load_record(self._store, key, model)
        if record is None:
            logger.warning("Invalid %s data found, clearing account", key)
            self.clear_account()
        return record

    def _write(self, key, record) -> None:
        try:
            # Re-validate: model_copy/construct can bypass field checks
            record = type(record).model_validate(record.model_dump())
        except ValidationError as exc:
            raise InvalidAccountError(f"Invalid {key} data: {exc.error_count()} error(s)") from exc
        save_record(self._store, key, record)
