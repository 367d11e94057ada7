"""
Tests for structured logging configuration.
"""
import json
import logging

import pytest
import structlog

from greenfields.core.config import LogSettings
from greenfields.core.logging_config import configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Put logging back the way pytest expects it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_format(self, capsys):
        """Test json format emits one JSON object per event."""
        configure_logging(LogSettings(level="info", format="json"))

        structlog.get_logger("greenfields.test").info("contact_form_received", email="jane@example.com")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "contact_form_received"
        assert record["email"] == "jane@example.com"
        assert record["level"] == "info"
        assert record["logger"] == "greenfields.test"
        assert "timestamp" in record

    def test_level_filters_events(self, capsys):
        """Test events below the configured level are dropped."""
        configure_logging(LogSettings(level="warning", format="json"))
        logger = structlog.get_logger("greenfields.test")

        logger.info("quiet")
        logger.warning("loud")

        out = capsys.readouterr().out
        assert "quiet" not in out
        assert "loud" in out

    def test_root_level_set(self):
        """Test the stdlib root logger follows the configured level."""
        configure_logging(LogSettings(level="debug", format="pretty"))

        assert logging.getLogger().level == logging.DEBUG

    def test_pretty_format(self, capsys):
        """Test pretty format is human-readable rather than JSON."""
        configure_logging(LogSettings(level="info", format="pretty"))

        structlog.get_logger("greenfields.test").info("server_started", port=7100)

        out = capsys.readouterr().out
        assert "server_started" in out
        assert "port" in out
        with pytest.raises(json.JSONDecodeError):
            json.loads(out.strip().splitlines()[-1])

    def test_stdlib_records_rendered_as_json(self, capsys):
        """Test plain logging.getLogger records come out as JSON in json mode."""
        configure_logging(LogSettings(level="info", format="json"))

        logging.getLogger("greenfields.main").info("Starting %s on port %d", "greenfields", 7100)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "Starting greenfields on port 7100"
        assert record["level"] == "info"
        assert record["logger"] == "greenfields.main"
        assert "timestamp" in record

    def test_uvicorn_records_rendered_as_json(self, capsys):
        """Test uvicorn's propagated records share the JSON output."""
        configure_logging(LogSettings(level="info", format="json"))

        logging.getLogger("uvicorn.error").info("Uvicorn running on %s", "http://0.0.0.0:7100")

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "Uvicorn running on http://0.0.0.0:7100"
        assert record["logger"] == "uvicorn.error"

    def test_stdlib_exception_rendered_in_json(self, capsys):
        """Test tracebacks from logger.exception stay inside the JSON object."""
        configure_logging(LogSettings(level="info", format="json"))

        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logging.getLogger("greenfields.main").exception("Unexpected error")

        lines = capsys.readouterr().out.strip().splitlines()
        record = json.loads(lines[-1])
        assert record["event"] == "Unexpected error"
        assert "RuntimeError: boom" in record["exception"]

    def test_single_root_handler(self):
        """Test reconfiguring replaces the root handler instead of stacking."""
        configure_logging(LogSettings(level="info", format="json"))
        configure_logging(LogSettings(level="info", format="pretty"))

        assert len(logging.getLogger().handlers) == 1
