"""
Version endpoints.

Clients poll ``GET /version`` and refetch a collection only when its
token changed. Responses must never be cached by intermediaries.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from webooks.api.deps import get_versions
from webooks.versioning import VersionKeyStore

router = APIRouter(prefix="/version", tags=["version"])

NO_STORE = "no-store, max-age=0"


@router.get("")
async def get_version_keys(
    response: Response,
    versions: VersionKeyStore = Depends(get_versions),
):
    """Current token of every category."""
    response.headers["Cache-Control"] = NO_STORE
    return {"success": True, "data": versions.get_all()}


@router.post("")
async def refresh_version_keys(
    response: Response,
    versions: VersionKeyStore = Depends(get_versions),
):
    """
    Force a fresh read of every category.

    Tokens live in memory and are always current, so this returns the
    same snapshot as GET plus a message.
    """
    response.headers["Cache-Control"] = NO_STORE
    return {
        "success": True,
        "data": versions.get_all(),
        "message": "Version keys refreshed",
    }
