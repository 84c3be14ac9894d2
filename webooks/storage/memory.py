"""
In-memory storage implementations for development and tests.
"""

from __future__ import annotations

import asyncio
from typing import Any

from webooks.core.models import Account, AccountRole, Space
from webooks.core.utils import utc_now
from webooks.storage.base import AccountStore, SpaceStore, StorageProvider


# =============================================================================
# Accounts
# =============================================================================


class InMemoryAccountStore(AccountStore):
    """In-memory account storage."""

    def __init__(self):
        self._accounts: dict[str, Account] = {}
        self._by_username: dict[str, str] = {}  # username -> user_id
        self._create_lock = asyncio.Lock()

    async def create(
        self,
        username: str,
        password_hash: str,
        email: str | None = None,
        only_if_empty: bool = False,
    ) -> Account:
        async with self._create_lock:
            if only_if_empty and self._accounts:
                raise ValueError("Accounts already exist")
            if username in self._by_username:
                raise ValueError(f"Username already taken: {username}")

            role = AccountRole.ADMIN if not self._accounts else AccountRole.OWNER
            account = Account(
                username=username,
                email=email,
                password_hash=password_hash,
                role=role,
            )
            self._accounts[account.id] = account
            self._by_username[username] = account.id
            return account.model_copy()

    async def get(self, user_id: str) -> Account | None:
        account = self._accounts.get(user_id)
        return account.model_copy() if account else None

    async def get_by_username(self, username: str) -> Account | None:
        user_id = self._by_username.get(username)
        return await self.get(user_id) if user_id else None

    async def get_by_api_key(self, api_key: str) -> Account | None:
        for account in self._accounts.values():
            if account.api_key and account.api_key == api_key:
                return account.model_copy()
        return None

    async def get_admin(self) -> Account | None:
        for account in self._accounts.values():
            if account.role == AccountRole.ADMIN:
                return account.model_copy()
        return None

    async def count(self) -> int:
        return len(self._accounts)

    async def update(self, user_id: str, updates: dict[str, Any]) -> Account | None:
        account = self._accounts.get(user_id)
        if not account:
            return None
        updated = account.model_copy(update={**updates, "updated_at": utc_now()})
        self._accounts[user_id] = updated
        return updated.model_copy()


# =============================================================================
# Spaces
# =============================================================================


class InMemorySpaceStore(SpaceStore):
    """In-memory space storage."""

    def __init__(self):
        self._spaces: dict[str, Space] = {}

    async def create(self, space: Space) -> Space:
        self._spaces[space.id] = space.model_copy()
        return space

    async def get(self, space_id: str) -> Space | None:
        space = self._spaces.get(space_id)
        return space.model_copy() if space else None

    async def list_for_owner(self, owner_id: str) -> list[Space]:
        spaces = [s.model_copy() for s in self._spaces.values() if s.owner_id == owner_id]
        spaces.sort(key=lambda s: s.created_at)
        return spaces

    async def update(self, space_id: str, updates: dict[str, Any]) -> Space | None:
        space = self._spaces.get(space_id)
        if not space:
            return None
        updated = space.model_copy(update={**updates, "updated_at": utc_now()})
        self._spaces[space_id] = updated
        return updated.model_copy()

    async def delete(self, space_id: str) -> bool:
        if space_id in self._spaces:
            del self._spaces[space_id]
            return True
        return False


# =============================================================================
# Factory
# =============================================================================


def create_memory_storage() -> StorageProvider:
    """Create a StorageProvider backed entirely by process memory."""
    return StorageProvider(
        accounts=InMemoryAccountStore(),
        spaces=InMemorySpaceStore(),
    )
