"""
Greenfields Pydantic Schemas
Request/Response models for the site's endpoints.
"""
from greenfields.schemas.contact import (
    FORM_FIELDS,
    SERVICE_CHOICES,
    ContactSignals,
    ContactSubmission,
)

__all__ = [
    "FORM_FIELDS",
    "SERVICE_CHOICES",
    "ContactSignals",
    "ContactSubmission",
]
