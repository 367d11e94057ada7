"""
Services behind the site's handlers: validation, templates and Datastar patches.
"""

from greenfields.services.contact_validation import ValidationResult, validate_submission
from greenfields.services.datastar import patch_elements_event, patch_signals_event, sse_response
from greenfields.services.templates import TemplateRenderer

__all__ = [
    "TemplateRenderer",
    "ValidationResult",
    "patch_elements_event",
    "patch_signals_event",
    "sse_response",
    "validate_submission",
]
