"""
Shared fixtures.

Everything runs against an in-memory key-value store, the demo registry
and the demo identity directory. Time is pinned.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from safe_cash.audit import AuditLogger
from safe_cash.config import LedgerSettings, Settings, StorageSettings
from safe_cash.models.audit import AuditEvent, AuditEventType
from safe_cash.models.ledger import Transaction, TransactionType
from safe_cash.orchestrator import SafeCashService
from safe_cash.registry import StoreRegistry
from safe_cash.services.storage import (
    InMemoryKeyValueStore,
    KeyValueTransactionRepository,
    SessionStateStore,
)
from safe_cash.validation import TransactionIntake


FIXED_NOW = datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)


class RecordingAuditLogger(AuditLogger):
    """Keeps every event in memory instead of writing it out."""

    def __init__(self):
        super().__init__()
        self.events: list[AuditEvent] = []

    def log(self, event: AuditEvent) -> None:
        self.events.append(event)

    def types(self) -> list[AuditEventType]:
        return [e.event_type for e in self.events]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep developer environment variables out of the tests."""
    for name in (
        "SAFE_CASH_STORAGE_BACKEND",
        "SAFE_CASH_STORAGE_PATH",
        "SAFE_CASH_STORAGE_KEY_PREFIX",
        "SAFE_CASH_STORAGE_SEED_MARKER_VERSION",
        "SAFE_CASH_LEDGER_OPENING_FLOAT",
        "SAFE_CASH_LEDGER_CURRENCY_SYMBOL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def storage_settings() -> StorageSettings:
    return StorageSettings()


@pytest.fixture
def ledger_settings() -> LedgerSettings:
    return LedgerSettings()


@pytest.fixture
def registry() -> StoreRegistry:
    return StoreRegistry()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(kv_store, storage_settings) -> KeyValueTransactionRepository:
    return KeyValueTransactionRepository(kv_store, storage_settings)


@pytest.fixture
def session_state(kv_store, storage_settings) -> SessionStateStore:
    return SessionStateStore(kv_store, storage_settings)


@pytest.fixture
def intake(registry) -> TransactionIntake:
    return TransactionIntake(registry, clock=lambda: FIXED_NOW)


@pytest.fixture
def audit_logger() -> RecordingAuditLogger:
    return RecordingAuditLogger()


@pytest.fixture
def make_service(kv_store, settings, registry, intake, audit_logger):
    """Build (and initialize) a service over the shared in-memory store."""
    def _make() -> SafeCashService:
        service = SafeCashService(
            kv_store=kv_store,
            settings=settings,
            registry=registry,
            intake=intake,
            audit_logger=audit_logger,
        )
        service.initialize()
        return service
    return _make


@pytest.fixture
def service(make_service) -> SafeCashService:
    return make_service()


@pytest.fixture
def make_tx():
    """Factory for transactions with sensible defaults."""
    def _make(
        store_id: str = "store-a",
        type: TransactionType = TransactionType.ADD,
        amount: str = "10.00",
        comment: str = "test entry",
        employee_name: str = "Ava Patel",
        created_by: str = "staff-a1@store.com",
    ) -> Transaction:
        return Transaction(
            store_id=store_id,
            type=type,
            amount=Decimal(amount),
            comment=comment,
            employee_name=employee_name,
            created_by=created_by,
            created_at=FIXED_NOW,
        )
    return _make
