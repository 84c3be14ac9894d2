"""
Core data models for the webooks service.

Accounts and spaces are owned by the external store; these models are
the shape the access-control core reads and writes. Nothing here
enforces the space encryption invariant at construction time, because
records coming back from the store must be checked, not trusted.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from webooks.core.utils import generate_id, utc_now


# =============================================================================
# Enums
# =============================================================================


class AccountRole(str, Enum):
    """Role fixed at account creation time."""

    ADMIN = "admin"  # The first account ever created
    OWNER = "owner"  # Every later account


# =============================================================================
# Account
# =============================================================================


class Account(BaseModel):
    """A registered account. Owns spaces, folders and bookmarks."""

    id: str = Field(default_factory=lambda: generate_id("user"))
    username: str
    email: str | None = None
    password_hash: str

    role: AccountRole = AccountRole.OWNER

    # Long-lived key for the browser extension
    api_key: str | None = None

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN


class AccountResponse(BaseModel):
    """Account data returned to clients (no secrets)."""

    id: str
    username: str
    email: str | None = None
    role: AccountRole

    @classmethod
    def from_account(cls, account: Account) -> AccountResponse:
        return cls(
            id=account.id,
            username=account.username,
            email=account.email,
            role=account.role,
        )


# =============================================================================
# Space
# =============================================================================


class Space(BaseModel):
    """
    A named container of folders and bookmarks, owned by one account.

    Invariant: ``password_hash`` is set iff ``is_encrypted``.
    """

    id: str = Field(default_factory=lambda: generate_id("space"))
    owner_id: str
    name: str
    description: str | None = None

    is_encrypted: bool = False
    password_hash: str | None = None

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def has_consistent_encryption(self) -> bool:
        """True when the encryption flag and the stored hash agree."""
        return self.is_encrypted == (self.password_hash is not None)

    def to_public(self) -> dict:
        """Client view of the space; the hash never leaves the server."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "userId": self.owner_id,
            "isEncrypted": self.is_encrypted,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
