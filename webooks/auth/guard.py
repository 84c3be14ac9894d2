"""
SpaceAccessGuard - may this principal read or change this space?

Decisions are returned, not raised, so each endpoint picks its own
response. Rules, in order:

1. A space whose encryption flag and password hash disagree is corrupt:
   deny everyone with InternalError.
2. Admin: allow, without a password (logged).
3. Owner of some other account's space: NotFoundError, never "forbidden".
4. Owner of the space: allow if unencrypted, otherwise the supplied
   password must verify on this very call. Nothing is remembered
   between requests.
5. Anonymous: any space outside the public owner's is NotFoundError.
   Within it, never writes and reads only unencrypted spaces.

There is no lockout or backoff on wrong passwords.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from webooks.auth.passwords import PasswordVerifier
from webooks.auth.principal import Admin, Anonymous, Owner, Principal
from webooks.core.errors import (
    AuthenticationError,
    InternalError,
    NotFoundError,
    WebooksError,
    WrongPasswordError,
)
from webooks.core.models import Space

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    """Outcome of an access check."""

    allowed: bool
    error: WebooksError | None = None
    bypass: bool = False
    password_checked: bool = False

    @classmethod
    def allow(cls, bypass: bool = False, password_checked: bool = False) -> Decision:
        return cls(allowed=True, bypass=bypass, password_checked=password_checked)

    @classmethod
    def deny(cls, error: WebooksError) -> Decision:
        return cls(allowed=False, error=error)

    def raise_for_denial(self) -> None:
        if not self.allowed:
            raise self.error or InternalError("Denied without a reason")


class SpaceAccessGuard:
    """Applies ownership, admin bypass and space password rules."""

    def __init__(self, passwords: PasswordVerifier):
        self.passwords = passwords

    async def authorize_read(
        self,
        principal: Principal,
        space: Space,
        supplied_password: str | None = None,
    ) -> Decision:
        return await self._authorize(principal, space, supplied_password, write=False)

    async def authorize_write(
        self,
        principal: Principal,
        space: Space,
        supplied_password: str | None = None,
    ) -> Decision:
        return await self._authorize(principal, space, supplied_password, write=True)

    async def _authorize(
        self,
        principal: Principal,
        space: Space,
        supplied_password: str | None,
        write: bool,
    ) -> Decision:
        action = "write" if write else "read"

        if not space.has_consistent_encryption:
            logger.error(
                f"Space {space.id} violates the encryption invariant "
                f"(is_encrypted={space.is_encrypted}, has_hash={space.password_hash is not None})"
            )
            return Decision.deny(InternalError(f"Space {space.id} has inconsistent encryption state"))

        # Admin is tested before Owner: it is a subclass
        if isinstance(principal, Admin):
            logger.warning(f"Admin {principal.user_id} bypassed access checks for {action} on space {space.id}")
            return Decision.allow(bypass=True)

        if isinstance(principal, Owner):
            if principal.user_id != space.owner_id:
                return Decision.deny(NotFoundError(f"Space {space.id} not owned by {principal.user_id}"))
            if not space.is_encrypted:
                return Decision.allow()
            return await self._check_password(space, supplied_password)

        if isinstance(principal, Anonymous):
            # Scope first: outside it, a space must look the same as a missing one
            if principal.default_user_id is None or principal.default_user_id != space.owner_id:
                return Decision.deny(NotFoundError(f"Space {space.id} is not public"))
            if write:
                return Decision.deny(AuthenticationError("Anonymous write", reason="missing"))
            if space.is_encrypted:
                return Decision.deny(AuthenticationError("Anonymous read of encrypted space", reason="missing"))
            return Decision.allow()

        return Decision.deny(InternalError(f"Unknown principal variant: {type(principal).__name__}"))

    async def _check_password(self, space: Space, supplied_password: str | None) -> Decision:
        if not supplied_password:
            return Decision.deny(WrongPasswordError(f"No password supplied for space {space.id}"))
        try:
            valid = await self.passwords.verify_async(supplied_password, space.password_hash)
        except InternalError as e:
            logger.error(f"Space {space.id} has a corrupt password hash: {e.message}")
            return Decision.deny(e)
        if not valid:
            logger.info(f"Wrong password for space {space.id}")
            return Decision.deny(WrongPasswordError(f"Wrong password for space {space.id}"))
        return Decision.allow(password_checked=True)
