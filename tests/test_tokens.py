"""
Tests for the bearer token service.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from webooks.auth.jwt import (
    TokenExpiredError,
    TokenInvalidError,
    TokenService,
)
from webooks.core.errors import AuthenticationError

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
TTL = timedelta(days=7)


@pytest.fixture
def service():
    return TokenService(secret_key="unit-test-secret", ttl=TTL)


class TestRoundTrip:
    def test_verify_returns_subject(self, service):
        token = service.issue("user_abc")
        assert service.verify(token) == "user_abc"

    def test_decode_carries_claims(self, service):
        payload = service.decode(service.issue("user_abc", now=T0), now=T0)
        assert payload.sub == "user_abc"
        assert payload.iat == T0
        assert payload.exp == T0 + TTL
        assert payload.type == "access"
        assert payload.jti.startswith("tok_")

    def test_default_ttl_from_settings_is_seven_days(self, settings):
        assert TokenService.from_settings(settings).ttl == timedelta(days=7)


class TestExpiry:
    def test_valid_one_second_before_expiry(self, service):
        token = service.issue("user_abc", now=T0)
        assert service.verify(token, now=T0 + TTL - timedelta(seconds=1)) == "user_abc"

    def test_expired_one_second_after_expiry(self, service):
        token = service.issue("user_abc", now=T0)
        with pytest.raises(TokenExpiredError):
            service.verify(token, now=T0 + TTL + timedelta(seconds=1))

    def test_expired_exactly_at_expiry(self, service):
        token = service.issue("user_abc", now=T0)
        with pytest.raises(TokenExpiredError):
            service.verify(token, now=T0 + TTL)

    def test_injected_clock(self):
        now = [T0]
        service = TokenService(secret_key="s", ttl=timedelta(hours=1), clock=lambda: now[0])
        token = service.issue("user_abc")
        now[0] = T0 + timedelta(hours=2)
        with pytest.raises(TokenExpiredError):
            service.verify(token)


class TestInvalid:
    def test_wrong_secret(self, service):
        other = TokenService(secret_key="another-secret", ttl=TTL)
        with pytest.raises(TokenInvalidError):
            service.verify(other.issue("user_abc"))

    def test_garbage(self, service):
        with pytest.raises(TokenInvalidError):
            service.verify("not-a-token")

    def test_tampered_payload(self, service):
        header, payload, signature = service.issue("user_abc").split(".")
        forged = jwt.encode({"sub": "user_evil"}, "guess", algorithm="HS256").split(".")[1]
        with pytest.raises(TokenInvalidError):
            service.verify(f"{header}.{forged}.{signature}")

    def test_missing_claims(self, service):
        token = jwt.encode({"sub": "user_abc"}, "unit-test-secret", algorithm="HS256")
        with pytest.raises(TokenInvalidError):
            service.verify(token)

    def test_wrong_token_type(self, service):
        token = jwt.encode(
            {"sub": "user_abc", "iat": T0, "exp": T0 + TTL, "type": "refresh"},
            "unit-test-secret",
            algorithm="HS256",
        )
        with pytest.raises(TokenInvalidError):
            service.verify(token, now=T0)

    def test_none_algorithm_rejected(self, service):
        token = jwt.encode(
            {"sub": "user_abc", "iat": T0, "exp": T0 + TTL, "type": "access"},
            None,
            algorithm="none",
        )
        with pytest.raises(TokenInvalidError):
            service.verify(token, now=T0)


class TestErrorSurface:
    def test_expired_and_invalid_look_the_same_to_clients(self, service):
        token = service.issue("user_abc", now=T0)
        with pytest.raises(AuthenticationError) as expired:
            service.verify(token, now=T0 + TTL + timedelta(days=1))
        with pytest.raises(AuthenticationError) as invalid:
            service.verify("garbage")

        assert expired.value.reason == "expired"
        assert invalid.value.reason == "invalid"
        assert expired.value.public_message == invalid.value.public_message
        assert expired.value.status_code == invalid.value.status_code == 401
        assert expired.value.to_response() == invalid.value.to_response()

    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            TokenService(secret_key="")
