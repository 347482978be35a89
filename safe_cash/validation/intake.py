"""
Transaction Intake Validation

DESIGN DECISION: Checks run in a fixed order and the first failure wins:

1. AMOUNT   - parses to a finite number greater than zero
2. COMMENT  - non-empty after trimming
3. EMPLOYEE - named, and on the submitting user's store roster

A submission with a bad amount AND an empty comment reports the amount.
Nothing is built, and nothing is stored, unless every check passes.

The store is never taken from the submission: it is always the signed-in
user's own store.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable, Union
from uuid import UUID, uuid4

from safe_cash.errors import SafeCashError
from safe_cash.models.ledger import (
    MAX_AMOUNT,
    Transaction,
    TransactionType,
    UserProfile,
    utcnow,
)
from safe_cash.registry.stores import StoreRegistry


CENT = Decimal("0.01")

RawAmount = Union[str, int, float, Decimal]


class IntakeValidationError(SafeCashError):
    """
    A submission that cannot become a transaction.

    `code` is stable and machine-readable; the message is for the user.
    """
    code = "IntakeValidation"
    user_message = "The transaction could not be saved"

    def __init__(self, message: str = ""):
        super().__init__(message or self.user_message)


class InvalidAmountError(IntakeValidationError):
    code = "InvalidAmount"
    user_message = "Enter a valid positive amount"


class MissingCommentError(IntakeValidationError):
    code = "MissingComment"
    user_message = "Comment is required (what is this for?)"


class MissingEmployeeError(IntakeValidationError):
    code = "MissingEmployee"
    user_message = "Select the employee name responsible for this transaction"


def parse_amount(raw: RawAmount) -> Decimal:
    """
    Parse user input into a positive amount rounded to cents.

    Rounding is half-up at the cent boundary (10.005 -> 10.01).
    Amounts above MAX_AMOUNT are refused so every stored amount survives
    the trip through a JSON number unchanged.

    Raises:
        InvalidAmountError: Non-numeric, non-finite, zero or negative input,
            input that rounds down to zero, or input above MAX_AMOUNT
    """
    if isinstance(raw, bool):
        raise InvalidAmountError()

    if isinstance(raw, Decimal):
        value = raw
    else:
        text = str(raw).strip()
        if not text:
            raise InvalidAmountError()
        try:
            value = Decimal(text)
        except InvalidOperation:
            raise InvalidAmountError() from None

    if not value.is_finite() or value <= 0 or value > MAX_AMOUNT:
        raise InvalidAmountError()

    amount = value.quantize(CENT, rounding=ROUND_HALF_UP)
    if amount <= 0 or amount > MAX_AMOUNT:
        raise InvalidAmountError()
    return amount


class TransactionIntake:
    """
    Builds validated transactions for a signed-in user.

    The clock and id factory are injectable so tests can pin them.
    """

    def __init__(
        self,
        registry: StoreRegistry,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], UUID] = uuid4,
    ):
        self._registry = registry
        self._clock = clock
        self._id_factory = id_factory

    def build(
        self,
        current_user: UserProfile,
        transaction_type: Union[TransactionType, str],
        raw_amount: RawAmount,
        comment: str,
        employee_name: str,
    ) -> Transaction:
        """
        Validate a submission and construct the transaction.

        Args:
            current_user: Signed-in submitter; their store is the transaction's store
            transaction_type: ADD or WITHDRAW
            raw_amount: Amount as entered
            comment: Free-text reason
            employee_name: Employee responsible, from the store's roster

        Returns:
            The new, not yet persisted, Transaction

        Raises:
            InvalidAmountError, MissingCommentError, MissingEmployeeError
            ValueError: transaction_type is not ADD or WITHDRAW; only checked
                once the user-facing checks pass
        """
        store = self._registry.get_store(current_user.store_id)

        amount = parse_amount(raw_amount)

        cleaned_comment = (comment or "").strip()
        if not cleaned_comment:
            raise MissingCommentError()

        if not employee_name or not self._registry.is_employee_of(store.id, employee_name):
            raise MissingEmployeeError()

        tx_type = TransactionType(transaction_type)

        return Transaction(
            id=self._id_factory(),
            store_id=store.id,
            type=tx_type,
            amount=amount,
            comment=cleaned_comment,
            employee_name=employee_name,
            created_by=current_user.email,
            created_at=self._clock(),
        )
