"""Access control: viewer sessions and visibility rules."""

from safe_cash.access.policy import (
    AccessDeniedError,
    can_record_transactions,
    can_view_full_ledger,
    can_view_public_balance,
    require_full_ledger,
    require_intake,
)
from safe_cash.access.session import (
    LoggedIn,
    LoggedOut,
    Session,
    SessionEvent,
    SessionStateError,
    StoreSelected,
    ViewerState,
    initial_session,
    transition,
)

__all__ = [
    "AccessDeniedError",
    "LoggedIn",
    "LoggedOut",
    "Session",
    "SessionEvent",
    "SessionStateError",
    "StoreSelected",
    "ViewerState",
    "can_record_transactions",
    "can_view_full_ledger",
    "can_view_public_balance",
    "initial_session",
    "require_full_ledger",
    "require_intake",
    "transition",
]
