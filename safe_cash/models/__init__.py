"""
Data Models Package

This package contains all Pydantic models used in the Safe Cash Tracker.
All data flowing through the system must conform to these schemas.
"""

from safe_cash.models.ledger import (
    MAX_AMOUNT,
    Employee,
    LedgerView,
    PublicBalance,
    Role,
    Store,
    Transaction,
    TransactionType,
    UserProfile,
    format_money,
    utcnow,
)
from safe_cash.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "MAX_AMOUNT",
    "Employee",
    "LedgerView",
    "PublicBalance",
    "Role",
    "Store",
    "Transaction",
    "TransactionType",
    "UserProfile",
    "format_money",
    "utcnow",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
