"""
Greenfields Test Configuration and Fixtures
Shared pytest fixtures for all test modules.
"""
import json
import os
from pathlib import Path
from typing import Any, AsyncGenerator, Callable

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from greenfields.core.config import Settings, get_settings, load_settings
from greenfields.main import create_app

DEFAULT_TOML = """
[server]
host = "127.0.0.1"
port = 7100

[log]
level = "info"
format = "pretty"
"""


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A config directory holding only default.toml, isolated from the real environment."""
    for key in list(os.environ):
        if key.upper().startswith("APP_"):
            monkeypatch.delenv(key)
    monkeypatch.delenv("RUN_ENVIRONMENT", raising=False)

    (tmp_path / "default.toml").write_text(DEFAULT_TOML)
    monkeypatch.setenv("CONFIG_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def settings(config_dir: Path) -> Settings:
    """Settings loaded from the isolated config directory."""
    return load_settings()


@pytest.fixture
def clear_settings_cache():
    """Reset the process-wide settings cache around a test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Application built from the test settings."""
    return create_app(settings)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the app in-process."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# =============================================================================
# SSE Helpers
# =============================================================================


def _parse_sse(body: str) -> list[dict[str, Any]]:
    events = []
    for block in body.split("\n\n"):
        if not block.strip():
            continue
        event: dict[str, Any] = {"event": None, "data": []}
        for line in block.split("\n"):
            if line.startswith("event: "):
                event["event"] = line[len("event: "):]
            elif line.startswith("data: "):
                event["data"].append(line[len("data: "):])
        events.append(event)
    return events


@pytest.fixture
def parse_sse() -> Callable[[str], list[dict[str, Any]]]:
    """Split an event-stream body into [{"event": ..., "data": [lines]}]."""
    return _parse_sse


@pytest.fixture
def read_signals(parse_sse) -> Callable[[str], dict[str, Any]]:
    """Decode the single signal patch carried by an event-stream body."""

    def _read(body: str) -> dict[str, Any]:
        events = parse_sse(body)
        assert len(events) == 1
        assert events[0]["event"] == "datastar-patch-signals"
        (line,) = events[0]["data"]
        assert line.startswith("signals ")
        return json.loads(line[len("signals "):])

    return _read
