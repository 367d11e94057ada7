"""
Contact Form Validation
Field checks for contact submissions, reporting the first failure only.
"""
import re
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from greenfields.schemas.contact import SERVICE_CHOICES, ContactSubmission

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
MESSAGE_MAX_LENGTH = 5000
PHONE_MIN_DIGITS = 3

PHONE_PATTERN = re.compile(r"^[0-9+\-(). ]+$")


class ValidationResult(BaseModel):
    """Outcome of validating a submission: valid, or invalid with a reason."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool = Field(..., description="Whether every check passed")
    reason: Optional[str] = Field(default=None, description="First failing check's message")

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def invalid(cls, reason: str) -> "ValidationResult":
        return cls(is_valid=False, reason=reason)


def sanitize_input(value: str) -> str:
    """Drop non-ASCII and control characters and trim. Used for log output."""
    return "".join(c for c in value if c.isascii() and c.isprintable()).strip()


def is_valid_email(email: str) -> bool:
    """Basic shape check: exactly one @, non-empty local part, dotted domain."""
    email = email.strip()
    if email.count("@") != 1:
        return False

    local, domain = email.split("@")
    if not local or not domain:
        return False

    # Domain must contain a dot for basic TLD validation
    return "." in domain


def is_valid_phone(phone: str) -> bool:
    phone = phone.strip()
    if not PHONE_PATTERN.match(phone):
        return False
    return sum(c.isdigit() for c in phone) >= PHONE_MIN_DIGITS


def _check_name(submission: ContactSubmission) -> Optional[str]:
    name = submission.name.strip()
    if not name:
        return "Name is required"
    if len(name) < NAME_MIN_LENGTH:
        return f"Name must be at least {NAME_MIN_LENGTH} characters"
    if len(name) > NAME_MAX_LENGTH:
        return f"Name must be at most {NAME_MAX_LENGTH} characters"
    return None


def _check_email(submission: ContactSubmission) -> Optional[str]:
    if not submission.email.strip():
        return "Email is required"
    if not is_valid_email(submission.email):
        return "Please enter a valid email address"
    return None


def _check_phone(submission: ContactSubmission) -> Optional[str]:
    # Optional field
    if submission.phone.strip() and not is_valid_phone(submission.phone):
        return "Please enter a valid phone number"
    return None


def _check_service(submission: ContactSubmission) -> Optional[str]:
    service = submission.service.strip()
    if service and service not in SERVICE_CHOICES:
        return "Please choose a service from the list"
    return None


def _check_message(submission: ContactSubmission) -> Optional[str]:
    message = submission.message.strip()
    if not message:
        return "Message is required"
    if len(message) > MESSAGE_MAX_LENGTH:
        return f"Message must be at most {MESSAGE_MAX_LENGTH} characters"
    return None


# Order matters: the first failing check is reported
CHECKS: tuple[Callable[[ContactSubmission], Optional[str]], ...] = (
    _check_name,
    _check_email,
    _check_phone,
    _check_service,
    _check_message,
)


def validate_submission(submission: ContactSubmission) -> ValidationResult:
    """
    Validate a contact submission.

    Args:
        submission: The submitted form fields.

    Returns:
        ValidationResult.valid() if every check passes, otherwise
        ValidationResult.invalid() carrying the first failure's message.
    """
    for check in CHECKS:
        reason = check(submission)
        if reason is not None:
            return ValidationResult.invalid(reason)
    return ValidationResult.valid()
