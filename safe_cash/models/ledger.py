"""
Core Data Models for Safe Cash Tracker

These models define the strict schemas for everything that flows through
the ledger:
1. Stores and their employees (static registry)
2. User profiles (who is signed in, and for which store)
3. Transactions (the append-only ledger)
4. Read models derived from the ledger (views and public balances)

DESIGN DECISION: Python attributes are snake_case, but the serialized
shape keeps the camelCase field names (storeId, employeeName, createdBy,
createdAt) so previously persisted state loads without migration.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


# Stored as JSON numbers; 15 significant digits always read back exactly
AMOUNT_MAX_DIGITS = 15
MAX_AMOUNT = Decimal("9999999999999.99")


# Shared config for every persisted model
WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    str_strip_whitespace=True,
    frozen=True,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Role(str, Enum):
    """
    User role.

    Fixed when the credential is issued. There is no elevation at runtime.
    """
    ADMIN = "admin"
    STAFF = "staff"


class TransactionType(str, Enum):
    """
    Direction of a transaction.

    Direction is carried here, never by the sign of the amount.
    """
    ADD = "ADD"
    WITHDRAW = "WITHDRAW"


# =============================================================================
# REGISTRY MODELS
# =============================================================================

class Store(BaseModel):
    """A cash safe with its own employees, transactions and balance."""
    model_config = WIRE_CONFIG

    id: str = Field(
        ...,
        min_length=1,
        description="Globally unique store identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display name"
    )


class Employee(BaseModel):
    """
    An employee who can be named as responsible for a transaction.

    Employees never sign in; they only populate the intake selector.
    """
    model_config = WIRE_CONFIG

    id: UUID = Field(default_factory=uuid4)
    store_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


class UserProfile(BaseModel):
    """
    Profile of an authenticated user.

    Exactly one store per user.
    """
    model_config = WIRE_CONFIG

    email: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    role: Role
    store_id: str = Field(..., min_length=1)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


# =============================================================================
# LEDGER MODELS
# =============================================================================

class Transaction(BaseModel):
    """
    A single cash movement in or out of a store's safe.

    CRITICAL: Transactions are immutable. There is no update or delete;
    the store a transaction belongs to never changes.
    """
    model_config = WIRE_CONFIG

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique transaction ID"
    )
    store_id: str = Field(
        ...,
        min_length=1,
        description="Store whose safe this transaction moves cash for"
    )
    type: TransactionType
    amount: Decimal = Field(
        ...,
        gt=0,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=2,
        description="Positive amount; direction comes from type"
    )
    comment: str = Field(
        ...,
        min_length=1,
        description="What the cash was for"
    )
    employee_name: str = Field(
        ...,
        min_length=1,
        description="Employee responsible for the movement"
    )
    created_by: str = Field(
        ...,
        min_length=1,
        description="Submitter email, or 'seed' for the opening float"
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        description="When the transaction was recorded"
    )

    @field_validator("amount", mode="before")
    @classmethod
    def amount_from_float(cls, v):
        # Floats from persisted JSON go through their shortest repr, not binary expansion
        if isinstance(v, float):
            return Decimal(repr(v))
        return v

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> float:
        # Persisted as a JSON number, like the rest of the stored state
        return float(amount)

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by the transaction type."""
        if self.type == TransactionType.ADD:
            return self.amount
        return -self.amount


class LedgerView(BaseModel):
    """
    A store's transactions (newest first) and derived balance.

    Only admins are shown one of these; everyone else gets PublicBalance.
    """
    model_config = ConfigDict(frozen=True)

    store_id: str
    transactions: tuple[Transaction, ...] = Field(default_factory=tuple)
    balance: Decimal = Decimal("0")

    @property
    def transaction_count(self) -> int:
        return len(self.transactions)

    @property
    def is_empty(self) -> bool:
        return not self.transactions


class PublicBalance(BaseModel):
    """
    What anyone, signed in or not, may see about a store.

    Deliberately has no transaction list.
    """
    model_config = ConfigDict(frozen=True)

    store_id: str
    store_name: str
    balance: Decimal

    def formatted(self, currency_symbol: str = "$") -> str:
        return format_money(self.balance, currency_symbol)


def format_money(amount: Decimal, currency_symbol: str = "$") -> str:
    """Format an amount with two decimals, sign before the symbol."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol}{abs(amount):,.2f}"

