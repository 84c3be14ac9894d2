"""
Error taxonomy for the access-control core.

Every error carries two messages: the detailed one passed to the
constructor (logged server-side) and ``public_message`` (sent to the
client). Only ValidationError surfaces its detail verbatim.
"""

from __future__ import annotations


class WebooksError(Exception):
    """Base class for all errors raised by the access-control core."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.public_message
        super().__init__(self.message)

    def to_response(self) -> dict:
        return {"success": False, "error": self.public_message}


class AuthenticationError(WebooksError):
    """Missing, malformed, or expired credential where one is required."""

    status_code = 401
    public_message = "Unauthorized"

    def __init__(self, message: str | None = None, reason: str = "missing"):
        self.reason = reason
        super().__init__(message or f"Authentication failed ({reason})")


class InvalidCredentialsError(AuthenticationError):
    """Login failed. Unknown user and wrong password look the same."""

    public_message = "Invalid username or password"


class AuthorizationError(WebooksError):
    """Credential is valid but does not grant the requested right."""

    status_code = 403
    public_message = "Forbidden"


class WrongPasswordError(AuthorizationError):
    """A space password was missing or did not verify."""

    status_code = 401
    public_message = "Wrong password"


class NotFoundError(WebooksError):
    """Resource is absent or owned by another principal."""

    status_code = 404
    public_message = "Not found or no access"


class ValidationError(WebooksError):
    """Malformed input. The message is shown to the user."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.public_message = message


class InternalError(WebooksError):
    """Invariant violation or unexpected store failure."""

    status_code = 500
    public_message = "Internal server error"
