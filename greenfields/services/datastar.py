"""
Datastar Server-Sent Events
Formatting of signal and element patches for the Datastar client.

Each patch is one SSE event: an "event:" line naming the patch type, one or
more "data:" lines, and a blank line. See https://data-star.dev/reference/sse_events.
"""
import json
from typing import Any, Iterable, Optional

from fastapi.responses import StreamingResponse

PATCH_SIGNALS_EVENT = "datastar-patch-signals"
PATCH_ELEMENTS_EVENT = "datastar-patch-elements"

# Element patch modes understood by the client; "outer" is its default
ELEMENT_PATCH_MODES = ("outer", "inner", "replace", "prepend", "append", "before", "after", "remove")

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable nginx buffering
}


def format_event(event_type: str, data_lines: Iterable[str]) -> str:
    """Render a single SSE event."""
    lines = [f"event: {event_type}"]
    lines.extend(f"data: {line}" for line in data_lines)
    return "\n".join(lines) + "\n\n"


def encode_signals(signals: dict[str, Any]) -> str:
    """
    Serialize signals as single-line JSON.

    String values are JSON-escaped, so a double quote goes over the wire as
    \\" and JSON.parse on the client gives back the submitted text.
    """
    return json.dumps(signals, separators=(",", ":"))


def patch_signals_event(signals: dict[str, Any]) -> str:
    """Event setting the given signals in the browser."""
    return format_event(PATCH_SIGNALS_EVENT, [f"signals {encode_signals(signals)}"])


def patch_elements_event(
    html: str,
    selector: Optional[str] = None,
    mode: Optional[str] = None,
) -> str:
    """
    Event morphing an HTML fragment into the page.

    Without a selector the client matches top-level elements by id.
    """
    data_lines = []
    if selector:
        data_lines.append(f"selector {selector}")
    if mode and mode != "outer":
        if mode not in ELEMENT_PATCH_MODES:
            raise ValueError(f"Unknown element patch mode: {mode}")
        data_lines.append(f"mode {mode}")
    data_lines.extend(f"elements {line}" for line in html.strip().splitlines())
    return format_event(PATCH_ELEMENTS_EVENT, data_lines)


def sse_response(*events: str) -> StreamingResponse:
    """Stream pre-formatted events and close the response."""

    async def generate_sse():
        for event in events:
            yield event

    return StreamingResponse(
        generate_sse(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
