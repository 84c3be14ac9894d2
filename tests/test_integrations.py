"""
Tests for settings helpers and the Sentry event filters.
"""

from webooks.config import DEFAULT_JWT_SECRET, Settings
from webooks.core.errors import InternalError, NotFoundError, WrongPasswordError
from webooks.integrations.sentry import (
    _filter_events,
    _filter_transactions,
    capture_exception,
    init_sentry,
)


class TestSettings:
    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_default_secret_detection(self):
        assert Settings(jwt_secret_key=DEFAULT_JWT_SECRET).uses_default_secret
        assert not Settings(jwt_secret_key="something-else").uses_default_secret

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("WEBOOKS_TOKEN_TTL_DAYS", "3")
        monkeypatch.setenv("WEBOOKS_PUBLIC_OWNER_ID", "admin")
        settings = Settings()
        assert settings.token_ttl_days == 3
        assert settings.public_owner_id == "admin"


class TestSentryFilters:
    def test_client_errors_are_dropped(self):
        for error in (NotFoundError(), WrongPasswordError()):
            hint = {"exc_info": (type(error), error, None)}
            assert _filter_events({}, hint) is None

    def test_internal_errors_are_kept(self):
        error = InternalError("bad digest")
        event = {"message": "boom"}
        assert _filter_events(event, {"exc_info": (type(error), error, None)}) is event

    def test_credentials_are_scrubbed(self):
        event = {
            "request": {
                "headers": {
                    "Authorization": "Bearer abc",
                    "x-api-key": "webooks_" + "a" * 32,
                    "X-Space-Password": "secret1",
                    "Accept": "application/json",
                },
            },
        }
        headers = _filter_events(event, {})["request"]["headers"]
        assert headers["Authorization"] == "[Filtered]"
        assert headers["x-api-key"] == "[Filtered]"
        assert headers["X-Space-Password"] == "[Filtered]"
        assert headers["Accept"] == "application/json"

    def test_polling_transactions_are_skipped(self):
        assert _filter_transactions({"transaction": "/version"}, {}) is None
        assert _filter_transactions({"transaction": "/health"}, {}) is None
        event = {"transaction": "/spaces"}
        assert _filter_transactions(event, {}) is event

    def test_disabled_without_dsn(self, settings):
        assert init_sentry(settings) is False
        assert capture_exception(InternalError("x")) is None
