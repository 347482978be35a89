"""Services package."""

from safe_cash.services.storage import (
    CorruptStateError,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStoreInterface,
    KeyValueTransactionRepository,
    SessionStateStore,
    StorageError,
    TransactionRepository,
)

__all__ = [
    "CorruptStateError",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStoreInterface",
    "KeyValueTransactionRepository",
    "SessionStateStore",
    "StorageError",
    "TransactionRepository",
]
