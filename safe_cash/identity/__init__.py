"""Identity directory package."""

from safe_cash.identity.directory import (
    DEMO_CREDENTIALS,
    CredentialEntry,
    IdentityDirectory,
    InvalidCredentialsError,
    StaticIdentityDirectory,
    demo_identity_directory,
    normalize_email,
)

__all__ = [
    "DEMO_CREDENTIALS",
    "CredentialEntry",
    "IdentityDirectory",
    "InvalidCredentialsError",
    "StaticIdentityDirectory",
    "demo_identity_directory",
    "normalize_email",
]
