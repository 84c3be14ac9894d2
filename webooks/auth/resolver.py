"""
AuthResolver - turn request credentials into a Principal.

Resolution order:
1. ``x-api-key`` bound to an account -> Owner/Admin (extension path)
2. Bearer token that verifies and names an existing account -> Owner/Admin
3. Anything else -> Anonymous, optionally scoped to the public owner

A bad credential is never an error here. It is logged and the request
continues as anonymous; endpoints that need a logged-in user call
``require_authenticated`` on the result.
"""

from __future__ import annotations

import logging

from webooks.auth.api_keys import is_valid_api_key_format
from webooks.auth.jwt import TokenError, TokenService
from webooks.auth.principal import Admin, Anonymous, Owner, Principal
from webooks.core.models import Account
from webooks.storage.base import AccountStore

logger = logging.getLogger(__name__)

PUBLIC_OWNER_ADMIN = "admin"


class AuthResolver:
    """Maps raw credential material to a Principal. Read-only."""

    def __init__(
        self,
        accounts: AccountStore,
        tokens: TokenService,
        public_owner_id: str | None = None,
    ):
        self.accounts = accounts
        self.tokens = tokens
        self.public_owner_id = public_owner_id or None

    async def resolve(
        self,
        bearer_token: str | None = None,
        api_key: str | None = None,
    ) -> Principal:
        if api_key:
            account = await self._account_for_api_key(api_key)
            if account:
                return self._principal_for(account)

        if bearer_token:
            account = await self._account_for_token(bearer_token)
            if account:
                return self._principal_for(account)

        return Anonymous(default_user_id=await self._public_owner())

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _account_for_api_key(self, api_key: str) -> Account | None:
        if not is_valid_api_key_format(api_key):
            logger.warning("API key rejected: malformed")
            return None
        account = await self.accounts.get_by_api_key(api_key)
        if not account:
            logger.warning("API key rejected: not bound to any account")
        return account

    async def _account_for_token(self, token: str) -> Account | None:
        try:
            user_id = self.tokens.verify(token)
        except TokenError as e:
            logger.info(f"Bearer token rejected ({e.reason}): {e.message}")
            return None

        account = await self.accounts.get(user_id)
        if not account:
            logger.warning(f"Bearer token subject {user_id} has no account")
        return account

    async def _public_owner(self) -> str | None:
        if self.public_owner_id == PUBLIC_OWNER_ADMIN:
            admin = await self.accounts.get_admin()
            return admin.id if admin else None
        return self.public_owner_id

    @staticmethod
    def _principal_for(account: Account) -> Owner:
        if account.is_admin:
            return Admin(user_id=account.id)
        return Owner(user_id=account.id)
