"""
Configuration Management for Safe Cash Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage key names, the opening float and logging are all set in one
place and validated at startup.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value state storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SAFE_CASH_STORAGE_",
        extra="ignore"
    )

    backend: str = Field(
        default="json",
        pattern="^(json|memory)$",
        description="Which key-value store to use"
    )
    path: str = Field(
        default=".safe_cash/state.json",
        description="Location of the JSON state file (json backend only)"
    )

    # Key naming, kept compatible with the browser prototype's localStorage
    key_prefix: str = Field(
        default="safeCash.",
        description="Prefix for every persisted key"
    )
    seed_marker_version: str = Field(
        default="v2",
        min_length=1,
        description="Schema version baked into the seed marker key"
    )

    @property
    def user_key(self) -> str:
        return f"{self.key_prefix}user"

    @property
    def transactions_key(self) -> str:
        return f"{self.key_prefix}transactions"

    @property
    def seed_key(self) -> str:
        return f"{self.key_prefix}seeded.{self.seed_marker_version}"

    @property
    def last_store_key(self) -> str:
        return f"{self.key_prefix}lastStore"


class LedgerSettings(BaseSettings):
    """Opening float and display settings."""

    model_config = SettingsConfigDict(
        env_prefix="SAFE_CASH_LEDGER_",
        extra="ignore"
    )

    opening_float: Decimal = Field(
        default=Decimal("100.00"),
        gt=0,
        max_digits=15,
        decimal_places=2,
        description="Amount seeded into every store's safe on first run"
    )
    opening_float_comment: str = Field(
        default="Opening float kept in safe",
        min_length=1,
    )
    seed_employee_name: str = Field(
        default="System",
        min_length=1,
    )
    seed_submitter: str = Field(
        default="seed",
        min_length=1,
    )
    currency_symbol: str = Field(
        default="$",
        description="Symbol used when formatting balances"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum level written to the structured log"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "ledger", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
