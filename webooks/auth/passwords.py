# =============================================================================
# Password Hashing
# =============================================================================
#
# One algorithm for account and space passwords:
#   - PBKDF2-SHA256 with a per-digest random salt
#   - "salt:hash" storage format
#   - constant-time comparison on verify
#
# Hashing is slow on purpose. Async callers go through hash_async /
# verify_async, which run on a bounded thread pool so the event loop
# keeps serving other requests during a burst of password checks.
#
# =============================================================================

from __future__ import annotations

import asyncio
import hashlib
import logging
import secrets
from concurrent.futures import ThreadPoolExecutor

from webooks.config import Settings, get_settings
from webooks.core.errors import InternalError, ValidationError

logger = logging.getLogger(__name__)

# Well formed but matches no password; verifying against it costs one
# full derivation, same as a real account
DUMMY_DIGEST = f"{'0' * 64}:{'0' * 64}"


class PasswordVerifier:
    """Salted, deliberately expensive password hashing."""

    def __init__(
        self,
        min_length: int = 6,
        iterations: int = 100_000,
        max_workers: int = 4,
    ):
        self.min_length = min_length
        self.iterations = iterations
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="password-hash",
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> PasswordVerifier:
        settings = settings or get_settings()
        return cls(
            min_length=settings.min_password_length,
            iterations=settings.password_hash_iterations,
            max_workers=settings.password_hash_workers,
        )

    def check_policy(self, plaintext: str | None) -> None:
        """Raise ValidationError if the password breaks the length policy."""
        if not plaintext:
            raise ValidationError("Password must not be empty")
        if len(plaintext) < self.min_length:
            raise ValidationError(
                f"Password must be at least {self.min_length} characters"
            )

    def _derive(self, plaintext: str, salt: str) -> str:
        hash_bytes = hashlib.pbkdf2_hmac(
            "sha256",
            plaintext.encode("utf-8"),
            salt.encode("utf-8"),
            iterations=self.iterations,
        )
        return hash_bytes.hex()

    def hash(self, plaintext: str) -> str:
        """
        Hash a password.

        Returns: salt:hash format string
        """
        self.check_policy(plaintext)
        salt = secrets.token_hex(32)
        return f"{salt}:{self._derive(plaintext, salt)}"

    def verify(self, plaintext: str, digest: str) -> bool:
        """
        Verify a password against its digest.

        A mismatch is an ordinary False. A digest that is not in
        salt:hash form is corrupt data and raises InternalError.
        """
        if not isinstance(digest, str) or digest.count(":") != 1:
            raise InternalError("Malformed password digest")
        salt, stored_hash = digest.split(":")
        if not salt or not stored_hash:
            raise InternalError("Malformed password digest")
        try:
            bytes.fromhex(stored_hash)
        except ValueError:
            raise InternalError("Malformed password digest") from None

        if plaintext is None:
            return False
        return secrets.compare_digest(self._derive(plaintext, salt), stored_hash)

    async def hash_async(self, plaintext: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.hash, plaintext)

    async def verify_async(self, plaintext: str, digest: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.verify, plaintext, digest)

    async def burn_async(self, plaintext: str | None) -> None:
        """Spend one verification's worth of work for an unknown account."""
        await self.verify_async(plaintext or "", DUMMY_DIGEST)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)
