"""
Principal - who is making the request.

A closed union of three variants. Admin subclasses Owner because an
admin is always an owner first; callers that branch on the variant
must test Admin before Owner.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from webooks.core.errors import AuthenticationError, InternalError


@dataclass(frozen=True)
class Owner:
    """A valid credential resolved to an existing account."""

    user_id: str

    @property
    def kind(self) -> str:
        return "owner"


@dataclass(frozen=True)
class Admin(Owner):
    """The admin account. May act on any space without its password."""

    @property
    def kind(self) -> str:
        return "admin"


@dataclass(frozen=True)
class Anonymous:
    """No valid credential; reads may be scoped to a public owner."""

    default_user_id: str | None = None

    @property
    def kind(self) -> str:
        return "anonymous"


Principal = Union[Owner, Admin, Anonymous]


def require_authenticated(principal: Principal) -> Owner:
    """
    Return the principal if it is an Owner (or Admin).

    Raises AuthenticationError for Anonymous.
    """
    if isinstance(principal, Owner):
        return principal
    if isinstance(principal, Anonymous):
        raise AuthenticationError("Authentication required", reason="missing")
    raise InternalError(f"Unknown principal variant: {type(principal).__name__}")
