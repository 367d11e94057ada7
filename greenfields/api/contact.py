"""Contact form endpoints."""

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from starlette.datastructures import FormData
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from greenfields.api.deps import RendererDep
from greenfields.core.exceptions import MalformedSubmissionError
from greenfields.schemas.contact import FORM_FIELDS, ContactSignals, ContactSubmission
from greenfields.services.contact_validation import sanitize_input, validate_submission
from greenfields.services.datastar import patch_elements_event, patch_signals_event, sse_response

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/contact", tags=["contact"])

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
MALFORMED_SUBMISSION_MESSAGE = "We couldn't read your submission. Please try again."


async def read_submission(request: Request) -> ContactSubmission:
    """
    Parse a form-encoded request body into a submission.

    Raises:
        MalformedSubmissionError: If the body is not a readable form or a
            field is not plain text.
    """
    content_type = request.headers.get("content-type", "")
    if not content_type.lower().startswith(FORM_CONTENT_TYPES):
        raise MalformedSubmissionError(f"unsupported content type '{content_type or 'none'}'")

    try:
        async with request.form() as form:
            return submission_from_form(form)
    except (MultiPartException, StarletteHTTPException, UnicodeDecodeError, ValueError) as e:
        raise MalformedSubmissionError(str(e)) from e


def submission_from_form(form: FormData) -> ContactSubmission:
    values = {}
    for field in FORM_FIELDS:
        value = form.get(field, "")
        if not isinstance(value, str):
            raise MalformedSubmissionError(f"field '{field}' must be text")
        values[field] = value

    return ContactSubmission(**values)


def log_submission(submission: ContactSubmission) -> None:
    logger.info(
        "contact_form_received",
        name=sanitize_input(submission.name),
        email=sanitize_input(submission.email),
        phone=sanitize_input(submission.phone) or None,
        service=sanitize_input(submission.service) or None,
        message_length=len(submission.message),
    )


def signals_response(signals: ContactSignals) -> StreamingResponse:
    return sse_response(patch_signals_event(signals.to_patch()))


@router.get("/form")
async def contact_form_fragment(renderer: RendererDep) -> StreamingResponse:
    """
    Serve the contact form as an element patch.

    Called by @get('/contact/form') from pages that load the form lazily.
    """
    html = renderer.render("contact_form.html")
    return sse_response(patch_elements_event(html))


@router.post("")
async def submit_contact_form(request: Request) -> StreamingResponse:
    """
    Validate a contact submission and patch the form's signals.

    Valid submissions show the thank-you panel and clear the fields. Invalid
    ones show the first validation failure and leave the fields as typed.
    Nothing is stored.
    """
    try:
        submission = await read_submission(request)
    except MalformedSubmissionError as e:
        logger.warning("contact_form_malformed", reason=e.reason)
        return signals_response(ContactSignals.failure(MALFORMED_SUBMISSION_MESSAGE))

    log_submission(submission)

    result = validate_submission(submission)
    if not result.is_valid:
        logger.info("contact_form_invalid", reason=result.reason)
        return signals_response(ContactSignals.failure(result.reason))

    logger.info(
        "contact_form_accepted",
        name=sanitize_input(submission.name),
        email=sanitize_input(submission.email),
    )
    return signals_response(ContactSignals.success())
