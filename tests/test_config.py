"""Tests for configuration loading."""

from decimal import Decimal

import pytest

from safe_cash.config import (
    AppSettings,
    LedgerSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestLedgerSettings:
    """Tests for opening float and display settings."""

    def test_defaults(self, ledger_settings):
        assert ledger_settings.opening_float == Decimal("100.00")
        assert ledger_settings.seed_submitter == "seed"
        assert ledger_settings.seed_employee_name == "System"
        assert ledger_settings.currency_symbol == "$"

    def test_opening_float_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("SAFE_CASH_LEDGER_OPENING_FLOAT", "0")
        with pytest.raises(ValueError):
            LedgerSettings()

    def test_opening_float_must_fit_a_stored_amount(self, monkeypatch):
        monkeypatch.setenv("SAFE_CASH_LEDGER_OPENING_FLOAT", "10000000000000.00")
        with pytest.raises(ValueError):
            LedgerSettings()


class TestAppSettings:
    """Tests for application settings."""

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", " debug ")
        assert AppSettings().log_level == "DEBUG"

    def test_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValueError):
            AppSettings()


class TestValidateAllSettings:
    """Tests for the startup check."""

    def test_all_valid_by_default(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        results = validate_all_settings()
        assert results == {"storage": True, "ledger": True, "app": True}

    def test_reports_broken_section(self, monkeypatch):
        monkeypatch.setenv("SAFE_CASH_STORAGE_BACKEND", "redis")
        results = validate_all_settings()
        assert results["storage"] is False
        assert "storage_error" in results
        assert results["ledger"] is True

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()
