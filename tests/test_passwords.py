"""
Tests for password hashing and verification.
"""

import asyncio

import pytest

from webooks.auth.passwords import DUMMY_DIGEST, PasswordVerifier
from webooks.core.errors import InternalError, ValidationError


class TestHash:
    def test_hash_has_salt_and_digest(self, passwords):
        digest = passwords.hash("secret1")
        salt, hashed = digest.split(":")
        assert len(salt) == 64
        assert len(hashed) == 64

    def test_same_password_gets_independent_salts(self, passwords):
        assert passwords.hash("secret1") != passwords.hash("secret1")

    def test_empty_password_rejected(self, passwords):
        with pytest.raises(ValidationError):
            passwords.hash("")

    def test_short_password_rejected(self, passwords):
        with pytest.raises(ValidationError) as exc_info:
            passwords.hash("abc12")
        assert "at least 6" in exc_info.value.public_message

    def test_minimum_length_accepted(self, passwords):
        assert passwords.verify("abc123", passwords.hash("abc123"))

    def test_configurable_minimum(self):
        verifier = PasswordVerifier(min_length=10, iterations=1_000, max_workers=1)
        try:
            with pytest.raises(ValidationError):
                verifier.hash("ninechars")
        finally:
            verifier.shutdown()


class TestVerify:
    def test_correct_password(self, passwords):
        digest = passwords.hash("secret1")
        assert passwords.verify("secret1", digest) is True

    def test_wrong_password_is_false_not_error(self, passwords):
        digest = passwords.hash("secret1")
        assert passwords.verify("wrong", digest) is False
        assert passwords.verify("", digest) is False

    @pytest.mark.parametrize("digest", [
        "",
        "no-separator",
        "a:b:c",
        ":deadbeef",
        "salt:",
        "salt:not-hex",
    ])
    def test_malformed_digest_raises(self, passwords, digest):
        with pytest.raises(InternalError):
            passwords.verify("secret1", digest)

    def test_digest_from_other_iteration_count_does_not_verify(self, passwords):
        other = PasswordVerifier(iterations=2_000, max_workers=1)
        try:
            assert passwords.verify("secret1", other.hash("secret1")) is False
        finally:
            other.shutdown()


class TestAsync:
    @pytest.mark.asyncio
    async def test_async_round_trip(self, passwords):
        digest = await passwords.hash_async("secret1")
        assert await passwords.verify_async("secret1", digest)
        assert not await passwords.verify_async("secret2", digest)

    @pytest.mark.asyncio
    async def test_async_policy_error_propagates(self, passwords):
        with pytest.raises(ValidationError):
            await passwords.hash_async("short")

    @pytest.mark.asyncio
    async def test_burst_of_checks_leaves_loop_responsive(self, passwords):
        digest = passwords.hash("secret1")
        ticks = 0

        async def ticker():
            nonlocal ticks
            for _ in range(5):
                await asyncio.sleep(0)
                ticks += 1

        results, _ = await asyncio.gather(
            asyncio.gather(*(passwords.verify_async("secret1", digest) for _ in range(8))),
            ticker(),
        )
        assert all(results)
        assert ticks == 5

    @pytest.mark.asyncio
    async def test_burn_matches_nothing(self, passwords):
        assert passwords.verify("secret1", DUMMY_DIGEST) is False
        assert passwords.verify("", DUMMY_DIGEST) is False
        assert await passwords.burn_async(None) is None
