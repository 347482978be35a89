"""Ledger engine: balances and per-store views derived from transactions."""

from safe_cash.ledger.engine import (
    compute_balance,
    compute_view,
    opening_float_transactions,
    transactions_for_store,
)

__all__ = [
    "compute_balance",
    "compute_view",
    "opening_float_transactions",
    "transactions_for_store",
]
