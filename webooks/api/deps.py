"""
Dependencies that hand route handlers the services built at startup.
"""

from __future__ import annotations

from fastapi import Request

from webooks.auth.guard import SpaceAccessGuard
from webooks.auth.jwt import TokenService
from webooks.auth.passwords import PasswordVerifier
from webooks.storage import StorageProvider
from webooks.versioning import VersionKeyStore


def get_storage(request: Request) -> StorageProvider:
    return request.app.state.storage


def get_versions(request: Request) -> VersionKeyStore:
    return request.app.state.versions


def get_passwords(request: Request) -> PasswordVerifier:
    return request.app.state.passwords


def get_tokens(request: Request) -> TokenService:
    return request.app.state.tokens


def get_guard(request: Request) -> SpaceAccessGuard:
    return request.app.state.guard
