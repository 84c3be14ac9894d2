# =============================================================================
# Space API Routes
# =============================================================================
#
# Endpoints:
#   GET    /spaces                       - Spaces visible to the caller
#   POST   /spaces                       - Create a space (optional password)
#   GET    /spaces/{id}                  - Guarded read (x-space-password)
#   PUT    /spaces/{id}/password         - Set or clear the space password
#   DELETE /spaces/{id}                  - Delete with its folders/bookmarks
#   POST   /spaces/{id}/verify-password  - Check a space password
#
# Every mutation bumps the matching version keys.
#
# =============================================================================

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header
from pydantic import BaseModel

from webooks.api.deps import get_guard, get_passwords, get_storage, get_versions
from webooks.auth.guard import SpaceAccessGuard
from webooks.auth.passwords import PasswordVerifier
from webooks.auth.policies import get_principal, require_auth
from webooks.auth.principal import Admin, Anonymous, Owner, Principal
from webooks.core.errors import (
    AuthenticationError,
    NotFoundError,
    ValidationError,
)
from webooks.core.models import Space
from webooks.storage import StorageProvider
from webooks.versioning import VersionKeyStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/spaces", tags=["spaces"])


# =============================================================================
# Request Models
# =============================================================================

class CreateSpaceRequest(BaseModel):
    name: str
    description: str | None = None
    password: str | None = None


class SpacePasswordRequest(BaseModel):
    password: str | None = None  # None clears encryption
    currentPassword: str | None = None


class VerifyPasswordRequest(BaseModel):
    password: str | None = None


# =============================================================================
# Helpers
# =============================================================================

async def _load_space(storage: StorageProvider, space_id: str) -> Space:
    space = await storage.spaces.get(space_id)
    if not space:
        raise NotFoundError(f"Space {space_id} not found")
    return space


# =============================================================================
# Collection
# =============================================================================

@router.get("")
async def list_spaces(
    principal: Principal = Depends(get_principal),
    storage: StorageProvider = Depends(get_storage),
):
    """
    List the caller's spaces.

    Anonymous callers see the public owner's spaces, or nothing when no
    public owner is configured.
    """
    if isinstance(principal, Owner):
        owner_id = principal.user_id
    elif isinstance(principal, Anonymous):
        owner_id = principal.default_user_id
    else:
        owner_id = None

    spaces = await storage.spaces.list_for_owner(owner_id) if owner_id else []
    return {"spaces": [space.to_public() for space in spaces]}


@router.post("")
async def create_space(
    data: CreateSpaceRequest,
    owner: Owner = Depends(require_auth),
    storage: StorageProvider = Depends(get_storage),
    passwords: PasswordVerifier = Depends(get_passwords),
    versions: VersionKeyStore = Depends(get_versions),
):
    """Create a space. Supplying a password makes it encrypted."""
    name = data.name.strip()
    if not name:
        raise ValidationError("Space name must not be empty")

    existing = await storage.spaces.list_for_owner(owner.user_id)
    if any(space.name == name for space in existing):
        raise ValidationError("A space with this name already exists")

    password_hash = None
    if data.password is not None:
        password_hash = await passwords.hash_async(data.password)

    space = await storage.spaces.create(Space(
        owner_id=owner.user_id,
        name=name,
        description=data.description,
        is_encrypted=password_hash is not None,
        password_hash=password_hash,
    ))
    versions.bump("spaces")

    logger.info(f"Space {space.id} created by {owner.user_id} (encrypted={space.is_encrypted})")
    return {"space": space.to_public()}


# =============================================================================
# Single Space
# =============================================================================

@router.get("/{space_id}")
async def get_space(
    space_id: str,
    x_space_password: str | None = Header(default=None),
    principal: Principal = Depends(get_principal),
    storage: StorageProvider = Depends(get_storage),
    guard: SpaceAccessGuard = Depends(get_guard),
):
    """Read one space. Encrypted spaces need ``x-space-password``."""
    space = await _load_space(storage, space_id)
    decision = await guard.authorize_read(principal, space, x_space_password)
    decision.raise_for_denial()
    return {"space": space.to_public()}


@router.put("/{space_id}/password")
async def set_space_password(
    space_id: str,
    data: SpacePasswordRequest,
    principal: Principal = Depends(get_principal),
    storage: StorageProvider = Depends(get_storage),
    guard: SpaceAccessGuard = Depends(get_guard),
    passwords: PasswordVerifier = Depends(get_passwords),
    versions: VersionKeyStore = Depends(get_versions),
):
    """
    Set, change or clear a space password.

    Owners of an encrypted space must send ``currentPassword``;
    the admin does not.
    """
    space = await _load_space(storage, space_id)
    decision = await guard.authorize_write(principal, space, data.currentPassword)
    decision.raise_for_denial()

    if data.password is None:
        updates = {"is_encrypted": False, "password_hash": None}
    else:
        password_hash = await passwords.hash_async(data.password)
        updates = {"is_encrypted": True, "password_hash": password_hash}

    space = await storage.spaces.update(space_id, updates)
    if not space:
        raise NotFoundError(f"Space {space_id} disappeared during update")
    versions.bump("spaces")

    logger.info(f"Space {space_id} encryption set to {space.is_encrypted}")
    return {"space": space.to_public()}


@router.delete("/{space_id}")
async def delete_space(
    space_id: str,
    x_space_password: str | None = Header(default=None),
    principal: Principal = Depends(get_principal),
    storage: StorageProvider = Depends(get_storage),
    guard: SpaceAccessGuard = Depends(get_guard),
    versions: VersionKeyStore = Depends(get_versions),
):
    """Delete a space; the store removes its folders and bookmarks."""
    space = await _load_space(storage, space_id)
    decision = await guard.authorize_write(principal, space, x_space_password)
    decision.raise_for_denial()

    await storage.spaces.delete(space_id)
    versions.bump_many("spaces", "folders", "bookmarks")

    logger.info(f"Space {space_id} deleted")
    return {"success": True, "message": "Space deleted"}


# =============================================================================
# Password Check
# =============================================================================

@router.post("/{space_id}/verify-password")
async def verify_space_password(
    space_id: str,
    data: VerifyPasswordRequest,
    principal: Principal = Depends(get_principal),
    storage: StorageProvider = Depends(get_storage),
    guard: SpaceAccessGuard = Depends(get_guard),
):
    """
    Check a space password for the caller.

    - 401 without authentication, or on a wrong password
    - 404 if the space is missing or belongs to someone else
    - 200 for the admin without checking the password
    - 200 for an unencrypted space when no password was sent
    - 400 for a password sent to an unencrypted space, or no password
      for an encrypted one
    """
    if isinstance(principal, Anonymous):
        raise AuthenticationError("verify-password requires authentication", reason="missing")

    space = await _load_space(storage, space_id)

    if not isinstance(principal, Admin) and principal.user_id != space.owner_id:
        raise NotFoundError(f"Space {space_id} not owned by {principal.user_id}")

    if space.has_consistent_encryption and not isinstance(principal, Admin):
        if not space.is_encrypted:
            if data.password:
                raise ValidationError("This space is not password protected")
            return {
                "valid": True,
                "passwordRequired": False,
                "message": "This space has no password",
            }
        if not data.password:
            raise ValidationError("Password is required")

    decision = await guard.authorize_read(principal, space, data.password)
    decision.raise_for_denial()

    if decision.bypass:
        return {
            "valid": True,
            "bypass": True,
            "message": "Admin access, password not required",
        }
    return {"valid": True, "message": "Password verified"}
