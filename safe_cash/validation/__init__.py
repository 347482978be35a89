"""Transaction intake validation."""

from safe_cash.validation.intake import (
    IntakeValidationError,
    InvalidAmountError,
    MissingCommentError,
    MissingEmployeeError,
    TransactionIntake,
    parse_amount,
)

__all__ = [
    "IntakeValidationError",
    "InvalidAmountError",
    "MissingCommentError",
    "MissingEmployeeError",
    "TransactionIntake",
    "parse_amount",
]
