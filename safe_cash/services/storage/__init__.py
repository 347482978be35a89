"""
Storage Services Package

Provides abstract interfaces and concrete implementations for persisted
state. Implements a JSON state file and an in-memory store, and is
designed to be swappable.
"""

from safe_cash.services.storage.interface import (
    CorruptStateError,
    KeyValueStoreInterface,
    StorageError,
    TransactionRepository,
)
from safe_cash.services.storage.json_file import JsonFileKeyValueStore
from safe_cash.services.storage.memory import InMemoryKeyValueStore
from safe_cash.services.storage.repository import (
    KeyValueTransactionRepository,
    SessionStateStore,
)

__all__ = [
    # Interfaces
    "KeyValueStoreInterface",
    "TransactionRepository",
    # Exceptions
    "CorruptStateError",
    "StorageError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueTransactionRepository",
    "SessionStateStore",
]
