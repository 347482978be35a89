"""
Ledger Engine

Pure functions from (transactions, store id) to what a viewer sees.

DESIGN DECISION: There is no stored balance. Every read re-derives it
from the transaction list, so a balance can never disagree with the
ledger it summarizes.

Amounts are Decimal and already quantized to cents at intake, so the
fold below is exact; nothing here re-rounds.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from safe_cash.config.settings import LedgerSettings
from safe_cash.models.ledger import (
    LedgerView,
    Store,
    Transaction,
    TransactionType,
    utcnow,
)


def transactions_for_store(
    transactions: Iterable[Transaction],
    store_id: str,
) -> tuple[Transaction, ...]:
    """Exactly the transactions of one store, in the order given."""
    return tuple(t for t in transactions if t.store_id == store_id)


def compute_balance(transactions: Iterable[Transaction]) -> Decimal:
    """
    Sum of signed amounts: ADD counts up, WITHDRAW counts down.

    Order does not matter. There is no floor at zero; a store's safe can
    go negative on paper.
    """
    return sum((t.signed_amount for t in transactions), Decimal("0"))


def compute_view(
    transactions: Sequence[Transaction],
    store_id: str,
) -> LedgerView:
    """
    Derive one store's ledger view.

    Args:
        transactions: The whole collection, newest first
        store_id: Store to filter to

    Returns:
        LedgerView with that store's transactions (collection order kept)
        and their balance
    """
    scoped = transactions_for_store(transactions, store_id)
    return LedgerView(
        store_id=store_id,
        transactions=scoped,
        balance=compute_balance(scoped),
    )


def opening_float_transactions(
    stores: Iterable[Store],
    settings: LedgerSettings,
    now: Optional[datetime] = None,
) -> list[Transaction]:
    """One opening-float ADD per store, attributed to the seed submitter."""
    created_at = now or utcnow()
    return [
        Transaction(
            store_id=store.id,
            type=TransactionType.ADD,
            amount=settings.opening_float,
            comment=settings.opening_float_comment,
            employee_name=settings.seed_employee_name,
            created_by=settings.seed_submitter,
            created_at=created_at,
        )
        for store in stores
    ]
