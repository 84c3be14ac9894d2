"""
Core module - data models, errors and shared utilities.
"""

from webooks.core.errors import (
    AuthenticationError,
    AuthorizationError,
    InternalError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
    WebooksError,
    WrongPasswordError,
)
from webooks.core.models import (
    Account,
    AccountResponse,
    AccountRole,
    Space,
)
from webooks.core.utils import generate_id, utc_now

__all__ = [
    # Errors
    "WebooksError",
    "AuthenticationError",
    "AuthorizationError",
    "WrongPasswordError",
    "InvalidCredentialsError",
    "NotFoundError",
    "ValidationError",
    "InternalError",
    # Models
    "Account",
    "AccountResponse",
    "AccountRole",
    "Space",
    # Utils
    "generate_id",
    "utc_now",
]
