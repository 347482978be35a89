"""
Identity Directory

DESIGN DECISION: Authentication is a single-method capability.
The demo ships a static credential table, but anything implementing
IdentityDirectory (a database, an SSO bridge) can replace it without
touching ledger or access-control code.

There are no tokens, no expiry and no hashing here. The static table
exists for demonstration only.
"""

import hmac
from abc import ABC, abstractmethod
from typing import Mapping

from pydantic import BaseModel, SecretStr

from safe_cash.errors import SafeCashError
from safe_cash.models.ledger import Role, UserProfile


class InvalidCredentialsError(SafeCashError):
    """
    Unknown email or wrong password.

    The two cases are deliberately indistinguishable.
    """
    code = "InvalidCredentials"

    def __init__(self):
        super().__init__("Invalid credentials")


class CredentialEntry(BaseModel):
    """A password and the profile it unlocks."""

    password: SecretStr
    profile: UserProfile


def normalize_email(email: str) -> str:
    """Trim and lower-case an email for lookup."""
    return (email or "").strip().lower()


class IdentityDirectory(ABC):
    """
    Abstract interface for credential verification.
    """

    @abstractmethod
    def authenticate(self, email: str, password: str) -> UserProfile:
        """
        Verify a credential pair.

        Args:
            email: Email as typed (matched case-insensitively after trimming)
            password: Password as typed

        Returns:
            The profile associated with the credential

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        pass


class StaticIdentityDirectory(IdentityDirectory):
    """Identity directory backed by a fixed in-memory table."""

    def __init__(self, entries: Mapping[str, CredentialEntry]):
        self._entries = {normalize_email(email): entry for email, entry in entries.items()}

    def authenticate(self, email: str, password: str) -> UserProfile:
        entry = self._entries.get(normalize_email(email))
        if entry is None:
            raise InvalidCredentialsError()

        expected = entry.password.get_secret_value().encode("utf-8")
        if not hmac.compare_digest(expected, (password or "").encode("utf-8")):
            raise InvalidCredentialsError()

        return entry.profile


def _demo_entry(email: str, password: str, name: str, role: Role, store_id: str) -> CredentialEntry:
    return CredentialEntry(
        password=password,
        profile=UserProfile(email=email, name=name, role=role, store_id=store_id),
    )


DEMO_CREDENTIALS = {
    "admin-a@store.com": _demo_entry(
        "admin-a@store.com", "admin123", "Store A Admin", Role.ADMIN, "store-a"
    ),
    "staff-a1@store.com": _demo_entry(
        "staff-a1@store.com", "staff123", "Ava Patel", Role.STAFF, "store-a"
    ),
    "admin-b@store.com": _demo_entry(
        "admin-b@store.com", "admin123", "Store B Admin", Role.ADMIN, "store-b"
    ),
    "staff-b1@store.com": _demo_entry(
        "staff-b1@store.com", "staff123", "Sofia Gomez", Role.STAFF, "store-b"
    ),
}


def demo_identity_directory() -> StaticIdentityDirectory:
    """The four demo accounts, two per store."""
    return StaticIdentityDirectory(DEMO_CREDENTIALS)
