"""
Audit Logger

DESIGN DECISION: Every significant action in the system is logged.
This provides:
1. Traceability of every cash movement and ledger look-up
2. Debugging capability
3. A record of failed sign-in attempts

The audit logger:
- Writes structured JSON events to the local log only
- Never receives passwords
- Supports correlation IDs to trace one viewer session
"""

import logging
from typing import Optional
from uuid import UUID

import structlog

from safe_cash.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from safe_cash.models.ledger import Transaction, UserProfile


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through the stdlib root logger at `level`."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level, logging.INFO))


class AuditLogger:
    """
    Central audit logging service.

    One instance is shared by the whole application service.
    """

    def __init__(self, logger_name: str = "safe_cash.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> None:
        """Write an audit event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_ledger_seeded(self, store_ids: list[str], amount: str) -> None:
        self.log(AuditEventBuilder.ledger_seeded(store_ids=store_ids, amount=amount))

    def log_session_restored(self, user: UserProfile, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.session_restored(user=user, correlation_id=correlation_id))

    def log_login_succeeded(self, user: UserProfile, correlation_id: UUID) -> None:
        """Log a successful sign-in."""
        self.log(AuditEventBuilder.login_succeeded(user=user, correlation_id=correlation_id))

    def log_login_failed(self, attempted_email: str, correlation_id: UUID) -> None:
        """Log a rejected sign-in. Only the email is recorded."""
        self.log(AuditEventBuilder.login_failed(
            attempted_email=attempted_email,
            correlation_id=correlation_id,
        ))

    def log_logged_out(self, user: UserProfile, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.logged_out(user=user, correlation_id=correlation_id))

    def log_store_selected(self, store_id: str, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.store_selected(store_id=store_id, correlation_id=correlation_id))

    def log_store_selection_forced(
        self,
        user: UserProfile,
        previous_store_id: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.store_selection_forced(
            user=user,
            previous_store_id=previous_store_id,
            correlation_id=correlation_id,
        ))

    def log_transaction_recorded(self, transaction: Transaction, correlation_id: UUID) -> None:
        """Log a transaction appended to the ledger."""
        self.log(AuditEventBuilder.transaction_recorded(
            transaction=transaction,
            correlation_id=correlation_id,
        ))

    def log_intake_rejected(
        self,
        actor: str,
        error_code: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log a submission that failed validation."""
        self.log(AuditEventBuilder.intake_rejected(
            actor=actor,
            error_code=error_code,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_ledger_viewed(
        self,
        actor: str,
        store_id: str,
        transaction_count: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.ledger_viewed(
            actor=actor,
            store_id=store_id,
            transaction_count=transaction_count,
            correlation_id=correlation_id,
        ))

    def log_access_denied(
        self,
        actor: Optional[str],
        operation: str,
        correlation_id: UUID,
    ) -> None:
        """Log a gated operation attempted without the required role."""
        self.log(AuditEventBuilder.access_denied(
            actor=actor,
            operation=operation,
            correlation_id=correlation_id,
        ))
