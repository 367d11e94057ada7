"""
Tests for Sentry event filtering and initialization.
"""
from unittest.mock import patch

from greenfields.core.sentry import before_send, capture_exception, init_sentry


class TestBeforeSend:
    """Tests for before_send."""

    def test_health_checks_dropped(self):
        """Test health check events are not reported."""
        event = {"request": {"url": "http://localhost:7100/health"}}

        assert before_send(event, {}) is None

    def test_contact_fields_redacted(self):
        """Test contact form contents never leave the process."""
        event = {
            "request": {
                "url": "http://localhost:7100/contact",
                "data": {"name": "Jane", "email": "jane@example.com", "service": "mowing"},
            }
        }

        result = before_send(event, {})

        assert result["request"]["data"]["name"] == "[REDACTED]"
        assert result["request"]["data"]["email"] == "[REDACTED]"
        assert result["request"]["data"]["service"] == "mowing"

    def test_events_without_request_pass(self):
        event = {"message": "boom"}

        assert before_send(event, {}) is event


class TestInitSentry:
    """Tests for init_sentry."""

    def test_disabled_without_dsn(self, settings):
        """Test nothing is initialized when no DSN is configured."""
        with patch("greenfields.core.sentry.sentry_sdk.init") as init:
            assert init_sentry(settings) is False

        init.assert_not_called()

    def test_enabled_with_dsn(self, config_dir, monkeypatch):
        """Test the SDK is initialized with the site's release name."""
        from greenfields.core.config import load_settings

        monkeypatch.setenv("APP_SENTRY_DSN", "https://key@sentry.example.com/1")
        settings = load_settings()

        with patch("greenfields.core.sentry.sentry_sdk.init") as init:
            assert init_sentry(settings) is True

        kwargs = init.call_args.kwargs
        assert kwargs["dsn"] == "https://key@sentry.example.com/1"
        assert kwargs["release"] == f"greenfields-of-cambridge@{settings.metadata.version}"
        assert kwargs["send_default_pii"] is False

    def test_capture_without_client(self):
        """Test capturing is a no-op returning no event id when Sentry is off."""
        assert capture_exception(RuntimeError("boom")) is None
