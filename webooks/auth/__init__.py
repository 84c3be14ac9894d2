"""
Access control - who is asking, and may they touch this space.

Pieces, leaf first:
1. PasswordVerifier - account and space password hashing
2. TokenService - stateless bearer tokens
3. AuthResolver - request credentials -> Principal
4. SpaceAccessGuard - Principal + Space -> Decision

The HTTP router is not re-exported here; import it from
``webooks.auth.routes``.
"""

from webooks.auth.api_keys import (
    generate_api_key,
    is_valid_api_key_format,
)
from webooks.auth.guard import Decision, SpaceAccessGuard
from webooks.auth.jwt import (
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    TokenPayload,
    TokenService,
)
from webooks.auth.passwords import PasswordVerifier
from webooks.auth.principal import (
    Admin,
    Anonymous,
    Owner,
    Principal,
    require_authenticated,
)
from webooks.auth.resolver import AuthResolver

__all__ = [
    # Principals
    "Principal",
    "Owner",
    "Admin",
    "Anonymous",
    "require_authenticated",
    # Services
    "PasswordVerifier",
    "TokenService",
    "AuthResolver",
    "SpaceAccessGuard",
    "Decision",
    # Tokens
    "TokenPayload",
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    # API keys
    "generate_api_key",
    "is_valid_api_key_format",
]
