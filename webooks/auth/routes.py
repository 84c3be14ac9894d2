# =============================================================================
# Auth API Routes
# =============================================================================
#
# Endpoints:
#   GET  /auth/init     - Does the system still need its first account?
#   POST /auth/init     - Create the admin account + default space (first run)
#   POST /auth/login    - Get a bearer token
#   POST /auth/logout   - Client-side discard (tokens are stateless)
#   GET  /auth/me       - Current account
#
# =============================================================================

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr

from webooks.api.deps import get_passwords, get_storage, get_tokens, get_versions
from webooks.auth.jwt import TokenService
from webooks.auth.passwords import PasswordVerifier
from webooks.auth.policies import require_auth
from webooks.auth.principal import Owner
from webooks.core.errors import InvalidCredentialsError, NotFoundError, ValidationError
from webooks.core.models import AccountResponse, Space
from webooks.storage import StorageProvider
from webooks.versioning import VersionKeyStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

DEFAULT_SPACE_NAME = "Default space"
DEFAULT_SPACE_DESCRIPTION = "Your first bookmark space"


# =============================================================================
# Request/Response Models
# =============================================================================

class InitRequest(BaseModel):
    username: str
    password: str
    email: EmailStr | None = None


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    success: bool = True
    token: str
    expires_in: int
    user: AccountResponse


# =============================================================================
# First-run Initialisation
# =============================================================================

@router.get("/init")
async def init_status(storage: StorageProvider = Depends(get_storage)):
    """Report whether the first account still has to be created."""
    return {"needsInit": await storage.accounts.count() == 0}


@router.post("/init", response_model=TokenResponse)
async def initialize(
    data: InitRequest,
    storage: StorageProvider = Depends(get_storage),
    passwords: PasswordVerifier = Depends(get_passwords),
    tokens: TokenService = Depends(get_tokens),
    versions: VersionKeyStore = Depends(get_versions),
):
    """
    Create the admin account and its default space.

    Only works while no account exists.
    """
    if not data.username.strip():
        raise ValidationError("Username must not be empty")
    if await storage.accounts.count() > 0:
        raise ValidationError("System is already initialized")

    password_hash = await passwords.hash_async(data.password)
    try:
        account = await storage.accounts.create(
            username=data.username.strip(),
            password_hash=password_hash,
            email=data.email,
            only_if_empty=True,
        )
    except ValueError:
        raise ValidationError("System is already initialized")

    await storage.spaces.create(Space(
        owner_id=account.id,
        name=DEFAULT_SPACE_NAME,
        description=DEFAULT_SPACE_DESCRIPTION,
    ))
    versions.bump_many("spaces", "system")

    logger.info(f"System initialized with admin account {account.id}")
    return TokenResponse(
        token=tokens.issue(account.id),
        expires_in=tokens.expires_in,
        user=AccountResponse.from_account(account),
    )


# =============================================================================
# Sessions
# =============================================================================

@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    storage: StorageProvider = Depends(get_storage),
    passwords: PasswordVerifier = Depends(get_passwords),
    tokens: TokenService = Depends(get_tokens),
):
    """
    Authenticate and get a token.

    Unknown username and wrong password fail with the same message
    and the same hashing cost.
    """
    account = await storage.accounts.get_by_username(data.username)
    if not account:
        await passwords.burn_async(data.password)
        logger.info("Login failed: unknown username")
        raise InvalidCredentialsError("Unknown username", reason="unknown_user")

    if not await passwords.verify_async(data.password, account.password_hash):
        logger.info(f"Login failed: wrong password for {account.id}")
        raise InvalidCredentialsError("Wrong account password", reason="wrong_password")

    logger.info(f"Login succeeded for {account.id}")
    return TokenResponse(
        token=tokens.issue(account.id),
        expires_in=tokens.expires_in,
        user=AccountResponse.from_account(account),
    )


@router.post("/logout")
async def logout():
    """
    Logout (client should discard its token).

    Tokens are stateless; there is nothing to invalidate server-side.
    """
    return {"success": True, "message": "Logged out"}


@router.get("/me", response_model=AccountResponse)
async def get_current_account(
    owner: Owner = Depends(require_auth),
    storage: StorageProvider = Depends(get_storage),
):
    """Get the current authenticated account."""
    account = await storage.accounts.get(owner.user_id)
    if not account:
        raise NotFoundError(f"Account {owner.user_id} not found")
    return AccountResponse.from_account(account)
