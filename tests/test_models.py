"""
Tests for Safe Cash Tracker

Test strategy:
1. Unit tests for individual components (models, engine, intake, session)
2. Service tests for the end-to-end flows (in-memory storage)
3. No disk access outside pytest's tmp_path
"""

import json
from decimal import Decimal
from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from safe_cash.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from safe_cash.models.ledger import (
    PublicBalance,
    Role,
    Transaction,
    TransactionType,
    UserProfile,
    format_money,
)

from tests.conftest import FIXED_NOW


class TestTransactionModel:
    """Tests for the Transaction model and its wire shape."""

    def test_transaction_creation(self, make_tx):
        """Test Transaction model creation with defaults."""
        tx = make_tx(amount="50.25")
        assert tx.store_id == "store-a"
        assert tx.amount == Decimal("50.25")
        assert isinstance(tx.id, UUID)

    def test_transaction_rejects_zero_amount(self):
        """Amount must be strictly positive."""
        with pytest.raises(ValidationError):
            Transaction(
                store_id="store-a",
                type=TransactionType.ADD,
                amount=Decimal("0"),
                comment="nothing",
                employee_name="Ava Patel",
                created_by="seed",
            )

    def test_transaction_rejects_negative_amount(self):
        """Direction comes from type, never from the sign."""
        with pytest.raises(ValidationError):
            Transaction(
                store_id="store-a",
                type=TransactionType.WITHDRAW,
                amount=Decimal("-5"),
                comment="payout",
                employee_name="Ava Patel",
                created_by="seed",
            )

    def test_transaction_rejects_sub_cent_amount(self):
        """At most two decimal places."""
        with pytest.raises(ValidationError):
            Transaction(
                store_id="store-a",
                type=TransactionType.ADD,
                amount=Decimal("1.005"),
                comment="too precise",
                employee_name="Ava Patel",
                created_by="seed",
            )

    def test_transaction_rejects_amount_a_json_number_cannot_hold(self, make_tx):
        """More than 15 significant digits would not survive a float."""
        with pytest.raises(ValidationError):
            make_tx(amount="1000000000000000.01")

    def test_transaction_is_immutable(self, make_tx):
        tx = make_tx()
        with pytest.raises(ValidationError):
            tx.amount = Decimal("1.00")

    def test_signed_amount(self, make_tx):
        assert make_tx(amount="12.50").signed_amount == Decimal("12.50")
        assert make_tx(type=TransactionType.WITHDRAW, amount="12.50").signed_amount == Decimal("-12.50")

    def test_serializes_with_camel_case_fields(self, make_tx):
        """The persisted shape keeps the original field names."""
        data = make_tx(amount="50.25").model_dump(mode="json", by_alias=True)
        assert set(data) == {
            "id", "storeId", "type", "amount", "comment",
            "employeeName", "createdBy", "createdAt",
        }
        assert data["amount"] == 50.25
        assert data["type"] == "ADD"

    def test_loads_legacy_persisted_record(self):
        """Records written by the browser prototype load unchanged."""
        tx_id = str(uuid4())
        raw = json.dumps({
            "id": tx_id,
            "storeId": "store-b",
            "type": "WITHDRAW",
            "amount": 0.1,
            "comment": "Change for register",
            "employeeName": "Sofia Gomez",
            "createdBy": "staff-b1@store.com",
            "createdAt": "2024-05-01T12:00:00.000Z",
        })
        tx = Transaction.model_validate_json(raw)
        assert tx.id == UUID(tx_id)
        assert tx.amount == Decimal("0.1")
        assert tx.type == TransactionType.WITHDRAW
        assert tx.created_at.year == 2024

    def test_accepts_python_field_names(self):
        tx = Transaction(
            store_id="store-a",
            type="ADD",
            amount=100,
            comment="Opening float kept in safe",
            employee_name="System",
            created_by="seed",
            created_at=FIXED_NOW,
        )
        assert tx.amount == Decimal("100")


class TestUserProfile:
    """Tests for the UserProfile model."""

    def test_admin_flag(self):
        admin = UserProfile(email="a@x.com", name="A", role=Role.ADMIN, store_id="store-a")
        staff = UserProfile(email="s@x.com", name="S", role=Role.STAFF, store_id="store-a")
        assert admin.is_admin is True
        assert staff.is_admin is False

    def test_role_must_be_known(self):
        with pytest.raises(ValidationError):
            UserProfile(email="a@x.com", name="A", role="owner", store_id="store-a")

    def test_round_trip_uses_store_id_alias(self):
        profile = UserProfile(email="a@x.com", name="A", role=Role.STAFF, store_id="store-b")
        assert json.loads(profile.model_dump_json(by_alias=True))["storeId"] == "store-b"


class TestReadModels:
    """Tests for PublicBalance and money formatting."""

    def test_public_balance_has_no_transactions(self):
        assert "transactions" not in PublicBalance.model_fields

    def test_format_money(self):
        assert format_money(Decimal("150.25")) == "$150.25"
        assert format_money(Decimal("-100")) == "-$100.00"
        assert format_money(Decimal("1234.5"), "€") == "€1,234.50"

    def test_public_balance_formatted(self):
        balance = PublicBalance(store_id="store-a", store_name="Greenpoint", balance=Decimal("100"))
        assert balance.formatted() == "$100.00"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.LOGGED_OUT,
            description="signed out",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.is_user_action is True

    def test_audit_event_to_log_dict(self, make_tx):
        tx = make_tx(amount="50.25")
        event = AuditEventBuilder.transaction_recorded(tx, correlation_id=uuid4())
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "transaction_recorded"
        assert log_dict["entity_id"] == str(tx.id)
        assert log_dict["details"]["amount"] == "50.25"
        assert log_dict["actor"] == "staff-a1@store.com"

    def test_login_failed_never_carries_password(self):
        event = AuditEventBuilder.login_failed("nobody@store.com", correlation_id=uuid4())
        assert event.severity == AuditSeverity.WARNING
        assert event.error_code == "InvalidCredentials"
        assert "password" not in json.dumps(event.to_log_dict()).lower()

    def test_ledger_seeded_is_system_action(self):
        event = AuditEventBuilder.ledger_seeded(["store-a", "store-b"], "100.00")
        assert event.is_user_action is False
        assert event.details["store_ids"] == ["store-a", "store-b"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
