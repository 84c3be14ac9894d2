# =============================================================================
# JWT Bearer Tokens
# =============================================================================
#
# Stateless credentials:
#   - one signing key per process, loaded from settings at startup
#   - fixed TTL (7 days by default)
#   - no revocation list; logout is the client discarding its token
#
# Expired and invalid tokens raise different exceptions so the reason
# can be logged, but both carry the same public message.
#
# =============================================================================

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable
import logging

from pydantic import BaseModel
import jwt

from webooks.config import Settings, get_settings
from webooks.core.errors import AuthenticationError
from webooks.core.utils import generate_id, utc_now

logger = logging.getLogger(__name__)


# =============================================================================
# Models
# =============================================================================

class TokenPayload(BaseModel):
    """JWT token payload."""
    sub: str  # user_id
    exp: datetime
    iat: datetime
    type: str
    jti: str


# =============================================================================
# Errors
# =============================================================================

class TokenError(AuthenticationError):
    """Base exception for token errors."""


class TokenExpiredError(TokenError):
    """Token has expired."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, reason="expired")


class TokenInvalidError(TokenError):
    """Token is invalid or malformed."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, reason="invalid")


# =============================================================================
# Token Service
# =============================================================================

class TokenService:
    """Issues and verifies signed, time-bounded bearer tokens."""

    TOKEN_TYPE = "access"

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = utc_now,
    ):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> TokenService:
        settings = settings or get_settings()
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(days=settings.token_ttl_days),
        )

    @property
    def expires_in(self) -> int:
        """Seconds until a fresh token expires."""
        return int(self.ttl.total_seconds())

    def issue(self, user_id: str, now: datetime | None = None) -> str:
        """Create a signed token bound to ``user_id``."""
        now = now or self._clock()
        payload = {
            "sub": user_id,
            "iat": now,
            "exp": now + self.ttl,
            "type": self.TOKEN_TYPE,
            "jti": generate_id("tok"),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def decode(self, token: str, now: datetime | None = None) -> TokenPayload:
        """
        Decode and validate a token.

        Raises:
            TokenExpiredError: now >= exp
            TokenInvalidError: bad signature, missing claims, wrong type
        """
        try:
            # Expiry is checked below against our own clock
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "exp", "iat"],
                },
            )
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Invalid token: {e}")

        if payload.get("type") != self.TOKEN_TYPE:
            raise TokenInvalidError(f"Expected {self.TOKEN_TYPE} token, got {payload.get('type')}")

        try:
            exp = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
            iat = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
        except (TypeError, ValueError, OverflowError):
            raise TokenInvalidError("Invalid token timestamps")

        now = now or self._clock()
        if now >= exp:
            raise TokenExpiredError()

        return TokenPayload(
            sub=str(payload["sub"]),
            exp=exp,
            iat=iat,
            type=payload["type"],
            jti=payload.get("jti", ""),
        )

    def verify(self, token: str, now: datetime | None = None) -> str:
        """Return the subject user id of a valid token."""
        return self.decode(token, now=now).sub
