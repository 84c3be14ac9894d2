"""
System configuration endpoints (admin tooling).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from webooks.api.deps import get_passwords, get_storage, get_versions
from webooks.auth.passwords import PasswordVerifier
from webooks.core.errors import InternalError, NotFoundError
from webooks.storage import StorageProvider
from webooks.versioning import VersionKeyStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/system-config", tags=["system"])


class ResetPasswordRequest(BaseModel):
    newPassword: str | None = None


@router.post("/reset-password")
async def reset_admin_password(
    data: ResetPasswordRequest,
    storage: StorageProvider = Depends(get_storage),
    passwords: PasswordVerifier = Depends(get_passwords),
    versions: VersionKeyStore = Depends(get_versions),
):
    """
    Reset the admin account's password.

    This endpoint is unauthenticated recovery tooling for single-tenant
    deployments; expose it only where that is acceptable.
    """
    passwords.check_policy(data.newPassword)

    admin = await storage.accounts.get_admin()
    if not admin:
        raise NotFoundError("No account exists yet")

    password_hash = await passwords.hash_async(data.newPassword)
    updated = await storage.accounts.update(admin.id, {"password_hash": password_hash})
    if not updated:
        raise InternalError(f"Admin account {admin.id} vanished during password reset")
    versions.bump("system")

    logger.warning(f"Admin password reset for account {updated.id}")
    return {
        "success": True,
        "message": "Password reset",
        "userId": updated.id,
        "username": updated.username,
    }
