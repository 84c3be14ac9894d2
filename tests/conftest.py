"""
Shared fixtures.

Password hashing runs with a low iteration count so the suite stays fast.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from webooks.api.app import create_app
from webooks.auth.jwt import TokenService
from webooks.auth.passwords import PasswordVerifier
from webooks.config import Settings
from webooks.storage import create_memory_storage
from webooks.versioning import VersionKeyStore

TEST_SECRET = "test-signing-secret"


@pytest.fixture
def settings():
    return Settings(
        environment="test",
        jwt_secret_key=TEST_SECRET,
        password_hash_iterations=1_000,
        password_hash_workers=2,
        public_owner_id="",
        sentry_dsn="",
    )


@pytest.fixture
def passwords(settings):
    verifier = PasswordVerifier.from_settings(settings)
    yield verifier
    verifier.shutdown()


@pytest.fixture
def tokens(settings):
    return TokenService.from_settings(settings)


@pytest.fixture
def storage():
    return create_memory_storage()


@pytest.fixture
def accounts(storage, passwords):
    """An admin ("admin"/"admin123") and an owner ("bob"/"bobpass1")."""

    async def seed():
        admin = await storage.accounts.create("admin", passwords.hash("admin123"))
        bob = await storage.accounts.create("bob", passwords.hash("bobpass1"))
        return admin, bob

    admin, bob = asyncio.run(seed())
    return {"admin": admin, "bob": bob}


@pytest.fixture
def versions():
    return VersionKeyStore()


@pytest.fixture
def client(settings, storage, versions):
    """Client for an uninitialised system."""
    app = create_app(settings=settings, storage=storage, versions=versions)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_client(settings, storage, accounts, versions):
    """Client for a system that already has an admin and an owner."""
    app = create_app(settings=settings, storage=storage, versions=versions)
    with TestClient(app) as test_client:
        yield test_client


def login(client, username, password):
    response = client.post("/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
