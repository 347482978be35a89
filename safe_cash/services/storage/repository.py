"""
Key-Value Backed Repositories

Maps the ledger's persisted state onto four independently keyed values:
- user:         the signed-in UserProfile, or null
- transactions: the whole transaction list, newest first
- seeded:       set once on the first run, never cleared
- lastStore:    the last public store selection

Each value is JSON and is always read and written whole.
"""

import json
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from safe_cash.config.settings import StorageSettings
from safe_cash.models.ledger import Transaction, UserProfile
from safe_cash.services.storage.interface import (
    CorruptStateError,
    KeyValueStoreInterface,
    TransactionRepository,
)


TRANSACTION_LIST = TypeAdapter(list[Transaction])


class KeyValueTransactionRepository(TransactionRepository):
    """Transaction collection stored as one JSON array."""

    def __init__(self, store: KeyValueStoreInterface, settings: StorageSettings):
        self._store = store
        self._key = settings.transactions_key
        self._seed_key = settings.seed_key

    def load(self) -> list[Transaction]:
        raw = self._store.get(self._key)
        if raw is None:
            return []
        try:
            return TRANSACTION_LIST.validate_json(raw)
        except ValidationError as e:
            raise CorruptStateError(self._key, str(e)) from e

    def append(self, transaction: Transaction) -> None:
        transactions = [transaction, *self.load()]
        self._write(transactions)

    def _write(self, transactions: list[Transaction]) -> None:
        self._store.set(
            self._key,
            TRANSACTION_LIST.dump_json(transactions, by_alias=True).decode("utf-8"),
        )

    def is_seeded(self) -> bool:
        return self._store.get(self._seed_key) is not None

    def seed_once(self, transactions: list[Transaction]) -> bool:
        """
        Initialize the collection on the very first run.

        Gated by the persisted seed marker: once the marker exists this
        is a no-op for the lifetime of the persisted state.

        Returns:
            True if the seed was written by this call
        """
        if self.is_seeded():
            return False

        self._write(transactions)
        self._store.set(self._seed_key, json.dumps(True))
        return True


class SessionStateStore:
    """Persists who is signed in and the last public store selection."""

    def __init__(self, store: KeyValueStoreInterface, settings: StorageSettings):
        self._store = store
        self._user_key = settings.user_key
        self._last_store_key = settings.last_store_key

    def load_user(self) -> Optional[UserProfile]:
        raw = self._store.get(self._user_key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
            if data is None:
                return None
            return UserProfile.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise CorruptStateError(self._user_key, str(e)) from e

    def save_user(self, user: Optional[UserProfile]) -> None:
        if user is None:
            self._store.set(self._user_key, json.dumps(None))
        else:
            self._store.set(self._user_key, user.model_dump_json(by_alias=True))

    def load_last_store(self) -> Optional[str]:
        raw = self._store.get(self._last_store_key)
        if raw is None:
            return None
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStateError(self._last_store_key, str(e)) from e
        if value is not None and not isinstance(value, str):
            raise CorruptStateError(self._last_store_key, "store id is not a string")
        return value

    def save_last_store(self, store_id: str) -> None:
        self._store.set(self._last_store_key, json.dumps(store_id))
