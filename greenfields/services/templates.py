"""
Page Template Service
Jinja2-based rendering of the site's pages and fragments.
"""
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import structlog
from jinja2 import Environment, FileSystemLoader, TemplateError

from greenfields.core.config import Settings
from greenfields.schemas.contact import SERVICE_CHOICES

logger = structlog.get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

SITE_NAME = "Greenfields of Cambridge"

# Used when error.html itself cannot be rendered
FALLBACK_ERROR_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><title>Error {status}</title></head>
<body>
    <h1>Error {status}</h1>
    <p>{message}</p>
    <a href="/">Return to Home</a>
</body>
</html>
"""


class TemplateRenderer:
    """
    Service for rendering page templates.

    The Jinja2 environment is created lazily and is read-only afterwards,
    so one renderer is shared by every request.
    """

    def __init__(self, settings: Settings, templates_dir: Path = TEMPLATES_DIR):
        self.settings = settings
        self.templates_dir = templates_dir
        self._env: Optional[Environment] = None

    @property
    def env(self) -> Environment:
        """Lazy-loaded Jinja2 environment."""
        if self._env is None:
            self._env = Environment(
                loader=FileSystemLoader(str(self.templates_dir)),
                autoescape=True,
                trim_blocks=True,
                lstrip_blocks=True,
            )
        return self._env

    def _get_base_context(self) -> dict[str, Any]:
        """Variables available in every template."""
        return {
            "site_name": SITE_NAME,
            "app_name": self.settings.metadata.name,
            "app_version": self.settings.metadata.version,
            "current_year": datetime.now().year,
            "services": SERVICE_CHOICES,
        }

    def render(self, template_name: str, **context: Any) -> str:
        """
        Render a template with the base context plus the given variables.

        Raises:
            TemplateNotFound: If the template file doesn't exist.
        """
        full_context = {**self._get_base_context(), **context}
        template = self.env.get_template(template_name)
        return template.render(**full_context)

    def render_error(self, status: int, title: str, message: str) -> str:
        """Render error.html, falling back to a bare page if that fails."""
        try:
            return self.render("error.html", status=status, title=title, message=message)
        except TemplateError as e:
            logger.error("error_template_failed", status=status, error=str(e))
            return FALLBACK_ERROR_PAGE.format(status=status, message=message)
