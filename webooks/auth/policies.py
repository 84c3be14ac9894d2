"""
Policies - FastAPI dependencies that resolve the request's Principal.

Usage in routes:
    async def handler(principal: Principal = Depends(get_principal)): ...
    async def handler(owner: Owner = Depends(require_auth)): ...

The resolver lives on ``app.state`` (see ``webooks.api.app``), so tests
can build isolated apps.
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from webooks.auth.principal import Owner, Principal, require_authenticated
from webooks.auth.resolver import AuthResolver


# Optional credentials (don't fail if absent)
optional_bearer = HTTPBearer(auto_error=False)
optional_api_key = APIKeyHeader(name="x-api-key", auto_error=False)


def get_resolver(request: Request) -> AuthResolver:
    return request.app.state.resolver


async def get_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_bearer),
    api_key: str | None = Depends(optional_api_key),
    resolver: AuthResolver = Depends(get_resolver),
) -> Principal:
    """Resolve the caller. Never fails; bad credentials mean Anonymous."""
    token = credentials.credentials if credentials else None
    return await resolver.resolve(bearer_token=token, api_key=api_key)


async def require_auth(principal: Principal = Depends(get_principal)) -> Owner:
    """Resolve the caller and reject Anonymous with AuthenticationError."""
    return require_authenticated(principal)
