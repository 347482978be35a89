"""
Abstract Storage Interface

DESIGN DECISION: We define abstract interfaces for storage operations.
This allows us to:
1. Swap the JSON state file for a real database later
2. Use in-memory storage for testing
3. Keep ledger logic decoupled from storage implementation

Two levels:
- KeyValueStoreInterface: whole serialized values under string keys.
  Every write replaces the entire value; there are no partial updates.
- TransactionRepository: the ledger's view of storage (load / append).

KNOWN GAP: writes are last-write-wins for the whole transaction list.
Two writers (two browser tabs, two processes) can clobber each other's
appends. There is no version stamp and no locking.
"""

from abc import ABC, abstractmethod
from typing import Optional

from safe_cash.errors import SafeCashError
from safe_cash.models.ledger import Transaction


class KeyValueStoreInterface(ABC):
    """
    Abstract interface for a key-value blob store.

    Values are opaque serialized strings.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the whole value stored under a key.

        Returns:
            The stored value, or None if the key was never written
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Replace the whole value stored under a key.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Removing a missing key is not an error."""
        pass


class TransactionRepository(ABC):
    """
    Abstract interface for the transaction collection.

    The collection is append-only and kept newest first.
    """

    @abstractmethod
    def load(self) -> list[Transaction]:
        """
        Load every transaction, newest first.

        Raises:
            CorruptStateError: If the persisted value cannot be decoded
        """
        pass

    @abstractmethod
    def append(self, transaction: Transaction) -> None:
        """
        Add a transaction in front of all existing ones.

        Implemented as read-whole, prepend, write-whole.
        """
        pass


class StorageError(SafeCashError):
    """Base exception for storage operations."""
    pass


class CorruptStateError(StorageError):
    """A persisted value could not be decoded."""

    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Persisted value under {key!r} is corrupt: {reason}")
