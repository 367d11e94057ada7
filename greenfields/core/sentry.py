"""
Sentry Error Tracking Configuration
Optional Sentry SDK initialization for the Greenfields site.
"""

import logging
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from greenfields.core.config import Settings

logger = logging.getLogger(__name__)

# Never forwarded to Sentry
SENSITIVE_FIELDS = ("name", "email", "phone", "message")


def before_send(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any] | None:
    """
    Process events before sending to Sentry.

    Drops health check noise and strips contact form contents.
    """
    request = event.get("request")
    if not request:
        return event

    if request.get("url", "").endswith("/health"):
        return None

    data = request.get("data")
    if isinstance(data, dict):
        for field in SENSITIVE_FIELDS:
            if field in data:
                data[field] = "[REDACTED]"

    return event


def init_sentry(settings: Settings) -> bool:
    """
    Initialize Sentry SDK with FastAPI integration.

    Returns:
        bool: True if Sentry was initialized, False when no DSN is configured.
    """
    if not settings.sentry_dsn:
        logger.info("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        release=f"{settings.metadata.name}@{settings.metadata.version}",
        traces_sample_rate=settings.sentry_traces_sample_rate,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            StarletteIntegration(transaction_style="endpoint"),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR,
            ),
        ],
        before_send=before_send,
        send_default_pii=False,
        attach_stacktrace=True,
    )

    logger.info(f"Sentry initialized (env={settings.environment})")
    return True


def capture_exception(error: Exception, extra: dict[str, Any] | None = None) -> str | None:
    """
    Capture an exception and send to Sentry.

    Returns:
        Event ID if captured, None otherwise (including when Sentry is disabled).
    """
    with sentry_sdk.new_scope() as scope:
        if extra:
            for key, value in extra.items():
                scope.set_extra(key, value)

        return sentry_sdk.capture_exception(error)
