"""
Greenfields FastAPI Application
Main entry point for the Greenfields of Cambridge website.
"""

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from greenfields.api import contact, health, pages
from greenfields.core.config import Settings, get_settings
from greenfields.core.sentry import capture_exception, init_sentry
from greenfields.services.templates import TemplateRenderer

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

# status -> (title, message shown to the visitor)
ERROR_PAGES = {
    status.HTTP_400_BAD_REQUEST: ("Bad Request", "The request could not be understood."),
    status.HTTP_404_NOT_FOUND: ("Page Not Found", "The page you're looking for doesn't exist or has been moved."),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("Method Not Allowed", "That action isn't supported on this page."),
    status.HTTP_500_INTERNAL_SERVER_ERROR: (
        "Internal Server Error",
        "An unexpected error occurred. Please try again later.",
    ),
}
DEFAULT_ERROR_MESSAGE = "The request could not be completed."


# =============================================================================
# Lifespan Events
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handle application startup and shutdown events.

    Startup:
    - Log the loaded configuration
    - Initialize Sentry when a DSN is configured
    """
    settings: Settings = app.state.settings

    logger.info(
        f"Starting {settings.metadata.name} v{settings.metadata.version} "
        f"on {settings.server.host}:{settings.server.port}"
    )
    logger.info(f"Environment: {settings.environment}")

    if init_sentry(settings):
        logger.info("Sentry error tracking enabled")

    health.mark_startup_complete()
    logger.info("Application startup complete")

    yield

    logger.info("Server has shut down gracefully")


# =============================================================================
# Exception Handlers
# =============================================================================


def error_page(request: Request, status_code: int) -> HTMLResponse:
    if status_code in ERROR_PAGES:
        title, message = ERROR_PAGES[status_code]
    else:
        message = DEFAULT_ERROR_MESSAGE
        try:
            title = HTTPStatus(status_code).phrase
        except ValueError:
            title = "Error"
    renderer: TemplateRenderer = request.app.state.templates
    body = renderer.render_error(status=status_code, title=title, message=message)
    return HTMLResponse(body, status_code=status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> HTMLResponse:
    """Render HTTP errors (404, 405, ...) as site pages."""
    response = error_page(request, exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def general_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
    """Handle unexpected exceptions without exposing internals."""
    logger.exception(f"Unexpected error: {exc}")

    capture_exception(
        exc,
        extra={
            "request_method": request.method,
            "request_path": request.url.path,
        },
    )

    return error_page(request, status.HTTP_500_INTERNAL_SERVER_ERROR)


# =============================================================================
# Application Factory
# =============================================================================


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function.

    Args:
        settings: Loaded settings; the cached process-wide settings are used
            when omitted.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Greenfields of Cambridge",
        version=settings.metadata.version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.templates = TemplateRenderer(settings)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    app.include_router(health.router)
    app.include_router(pages.router)
    app.include_router(contact.router)

    return app
