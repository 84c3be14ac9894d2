"""
Storage abstraction layer.

The durable store that holds accounts and spaces is external to the
access-control core. These interfaces are the only contract the core
relies on; the in-memory implementations in ``memory.py`` back the
development server and the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from webooks.core.models import Account, Space


# =============================================================================
# Storage Interfaces
# =============================================================================


class AccountStore(ABC):
    """
    Storage for accounts.

    ``create`` assigns the account's role: the first account ever
    created becomes admin, every later one is a plain owner. Creation
    must be serialised so that rule holds under concurrent callers.
    """

    @abstractmethod
    async def create(
        self,
        username: str,
        password_hash: str,
        email: str | None = None,
        only_if_empty: bool = False,
    ) -> Account:
        """
        Create an account and assign its role.

        With ``only_if_empty`` the call raises ValueError when any account
        already exists (first-run initialisation).
        """
        pass

    @abstractmethod
    async def get(self, user_id: str) -> Account | None:
        """Get an account by ID."""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Account | None:
        """Get an account by username."""
        pass

    @abstractmethod
    async def get_by_api_key(self, api_key: str) -> Account | None:
        """Get the account an extension API key is bound to."""
        pass

    @abstractmethod
    async def get_admin(self) -> Account | None:
        """Get the admin account, if the system is initialised."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of accounts."""
        pass

    @abstractmethod
    async def update(self, user_id: str, updates: dict[str, Any]) -> Account | None:
        """Partial update of an account."""
        pass


class SpaceStore(ABC):
    """
    Storage for spaces.

    Deleting a space cascades to its folders and bookmarks; that
    cascade is the store's job.
    """

    @abstractmethod
    async def create(self, space: Space) -> Space:
        """Save a new space."""
        pass

    @abstractmethod
    async def get(self, space_id: str) -> Space | None:
        """Get a space by ID."""
        pass

    @abstractmethod
    async def list_for_owner(self, owner_id: str) -> list[Space]:
        """All spaces of one owner, oldest first."""
        pass

    @abstractmethod
    async def update(self, space_id: str, updates: dict[str, Any]) -> Space | None:
        """Partial update of a space."""
        pass

    @abstractmethod
    async def delete(self, space_id: str) -> bool:
        """Delete a space and everything in it."""
        pass


# =============================================================================
# Storage Provider (dependency injection container)
# =============================================================================


class StorageProvider(BaseModel):
    """
    Container for all storage backends.

    Initialize once at app startup with appropriate implementations.
    """

    model_config = {"arbitrary_types_allowed": True}

    accounts: AccountStore
    spaces: SpaceStore
