"""
Browser extension API key management.

Keys are created by a logged-in user and then sent by the extension
in ``x-api-key``; see ``webooks.auth.resolver``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from webooks.api.deps import get_storage
from webooks.auth.api_keys import generate_api_key, is_valid_api_key_format, mask_api_key
from webooks.auth.policies import require_auth
from webooks.auth.principal import Owner
from webooks.core.errors import NotFoundError, ValidationError
from webooks.storage import StorageProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/extension", tags=["extension"])


class ValidateApiKeyRequest(BaseModel):
    apiKey: str | None = None


@router.post("/api-key")
async def create_api_key(
    owner: Owner = Depends(require_auth),
    storage: StorageProvider = Depends(get_storage),
):
    """Generate a new key for the caller, replacing any previous one."""
    api_key = generate_api_key()
    account = await storage.accounts.update(owner.user_id, {"api_key": api_key})
    if not account:
        raise NotFoundError(f"Account {owner.user_id} not found")

    logger.info(f"API key generated for {owner.user_id}")
    return {
        "success": True,
        "message": "API key generated",
        "apiKey": api_key,
        "maskedKey": mask_api_key(api_key),
    }


@router.get("/api-key")
async def get_api_key(
    owner: Owner = Depends(require_auth),
    storage: StorageProvider = Depends(get_storage),
):
    """Whether the caller has a key, and its masked form."""
    account = await storage.accounts.get(owner.user_id)
    if not account:
        raise NotFoundError(f"Account {owner.user_id} not found")

    has_key = account.api_key is not None
    return {
        "success": True,
        "hasApiKey": has_key,
        "maskedKey": mask_api_key(account.api_key) if has_key else None,
    }


@router.put("/api-key")
async def validate_api_key(
    data: ValidateApiKeyRequest,
    storage: StorageProvider = Depends(get_storage),
):
    """Check that a key is well formed and bound to an account."""
    if not data.apiKey:
        raise ValidationError("apiKey is required")

    is_valid = False
    if is_valid_api_key_format(data.apiKey):
        is_valid = await storage.accounts.get_by_api_key(data.apiKey) is not None

    return {"success": True, "isValid": is_valid}
