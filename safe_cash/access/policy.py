"""
Visibility Rules

| View / operation        | Anonymous | Staff | Admin |
|-------------------------|-----------|-------|-------|
| Public balance          | yes       | yes   | yes   |
| Transaction intake      | no        | own   | own   |
| Full ledger table       | no        | no    | any   |

Intake is always scoped to the user's own store. The admin ledger has
its own store selector, separate from the intake store.
"""

from typing import Optional

from safe_cash.access.session import Session, ViewerState
from safe_cash.errors import SafeCashError
from safe_cash.models.ledger import UserProfile


class AccessDeniedError(SafeCashError):
    """The session lacks the role required for an operation."""

    def __init__(self, operation: str, actor: Optional[str] = None):
        self.operation = operation
        self.actor = actor
        who = actor or "anonymous viewer"
        super().__init__(f"{who} may not {operation}")


def can_view_public_balance(session: Session) -> bool:
    return True


def can_record_transactions(session: Session) -> bool:
    return session.state in (
        ViewerState.AUTHENTICATED_STAFF,
        ViewerState.AUTHENTICATED_ADMIN,
    )


def can_view_full_ledger(session: Session) -> bool:
    return session.state == ViewerState.AUTHENTICATED_ADMIN


def require_intake(session: Session) -> UserProfile:
    """Return the signed-in user, or raise if they cannot record transactions."""
    if not can_record_transactions(session):
        raise AccessDeniedError("record transactions")
    return session.identity


def require_full_ledger(session: Session) -> UserProfile:
    """Return the signed-in admin, or raise."""
    if not can_view_full_ledger(session):
        actor = session.identity.email if session.identity else None
        raise AccessDeniedError("view the transaction ledger", actor=actor)
    return session.identity
