"""
Audit Models for Safe Cash Tracker

Every significant action in the system is logged for audit purposes.
This provides:
1. Traceability of who moved cash and who looked at the ledger
2. Debugging information when things go wrong
3. Accountability for every sign-in attempt

DESIGN DECISION: Audit events never carry passwords. Failed sign-ins
record the attempted email only.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from safe_cash.models.ledger import Transaction, UserProfile, utcnow


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Initialization
    LEDGER_SEEDED = "ledger_seeded"
    SESSION_RESTORED = "session_restored"

    # Authentication
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    LOGGED_OUT = "logged_out"

    # Store selection
    STORE_SELECTED = "store_selected"
    STORE_SELECTION_FORCED = "store_selection_forced"

    # Intake
    TRANSACTION_RECORDED = "transaction_recorded"
    INTAKE_REJECTED = "intake_rejected"

    # Ledger access
    LEDGER_VIEWED = "ledger_viewed"
    ACCESS_DENIED = "access_denied"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'store', 'session')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - one id per viewer session
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate the events of one viewer session"
    )

    # Who did it
    actor: Optional[str] = Field(
        default=None,
        description="Email of the signed-in user, None for anonymous viewers"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=True,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "actor": self.actor,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.login_failed(email, correlation_id)
        event = AuditEventBuilder.transaction_recorded(tx, correlation_id)
    """

    @staticmethod
    def ledger_seeded(
        store_ids: list[str],
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SEEDED,
            entity_type="ledger",
            description=f"Opening float of {amount} seeded for {len(store_ids)} stores",
            details={
                "store_ids": store_ids,
                "amount": amount,
            },
            is_user_action=False,
        )

    @staticmethod
    def session_restored(
        user: UserProfile,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_RESTORED,
            entity_type="session",
            correlation_id=correlation_id,
            actor=user.email,
            description=f"Persisted sign-in restored for {user.email}",
            details={
                "role": user.role.value,
                "store_id": user.store_id,
            },
            is_user_action=False,
        )

    @staticmethod
    def login_succeeded(
        user: UserProfile,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_SUCCEEDED,
            entity_type="session",
            correlation_id=correlation_id,
            actor=user.email,
            description=f"{user.email} signed in as {user.role.value}",
            details={
                "role": user.role.value,
                "store_id": user.store_id,
            },
        )

    @staticmethod
    def login_failed(
        attempted_email: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="session",
            correlation_id=correlation_id,
            description="Sign-in rejected: invalid credentials",
            details={
                "attempted_email": attempted_email,
            },
            error_code="InvalidCredentials",
        )

    @staticmethod
    def logged_out(
        user: UserProfile,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGGED_OUT,
            entity_type="session",
            correlation_id=correlation_id,
            actor=user.email,
            description=f"{user.email} signed out",
        )

    @staticmethod
    def store_selected(
        store_id: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_SELECTED,
            severity=AuditSeverity.DEBUG,
            entity_type="store",
            entity_id=store_id,
            correlation_id=correlation_id,
            description=f"Public store selection changed to {store_id}",
        )

    @staticmethod
    def store_selection_forced(
        user: UserProfile,
        previous_store_id: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_SELECTION_FORCED,
            entity_type="store",
            entity_id=user.store_id,
            correlation_id=correlation_id,
            actor=user.email,
            description=f"Store selection locked to {user.store_id}",
            details={
                "previous_store_id": previous_store_id,
            },
            is_user_action=False,
        )

    @staticmethod
    def transaction_recorded(
        transaction: Transaction,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_RECORDED,
            entity_type="transaction",
            entity_id=str(transaction.id),
            correlation_id=correlation_id,
            actor=transaction.created_by,
            description=(
                f"{transaction.type.value} {transaction.amount} "
                f"recorded for {transaction.store_id}"
            ),
            details={
                "store_id": transaction.store_id,
                "type": transaction.type.value,
                "amount": str(transaction.amount),
                "employee_name": transaction.employee_name,
            },
        )

    @staticmethod
    def intake_rejected(
        actor: str,
        error_code: str,
        error_message: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INTAKE_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            correlation_id=correlation_id,
            actor=actor,
            description=f"Transaction rejected: {error_code}",
            error_code=error_code,
            error_message=error_message,
        )

    @staticmethod
    def ledger_viewed(
        actor: str,
        store_id: str,
        transaction_count: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_VIEWED,
            severity=AuditSeverity.DEBUG,
            entity_type="ledger",
            entity_id=store_id,
            correlation_id=correlation_id,
            actor=actor,
            description=f"Ledger for {store_id} viewed ({transaction_count} entries)",
            details={
                "transaction_count": transaction_count,
            },
        )

    @staticmethod
    def access_denied(
        actor: Optional[str],
        operation: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCESS_DENIED,
            severity=AuditSeverity.WARNING,
            entity_type="session",
            correlation_id=correlation_id,
            actor=actor,
            description=f"Access denied: {operation}",
            details={
                "operation": operation,
            },
            error_code="AccessDenied",
        )
