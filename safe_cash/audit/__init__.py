"""Audit logging package."""

from safe_cash.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
