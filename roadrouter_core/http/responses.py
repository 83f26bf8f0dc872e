"""Response helpers - JSON and standard status responses.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Any, Callable, List

from roadrouter_core.http.request import Request, Response

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

# Body used when the real payload cannot be serialized.
SERIALIZATION_ERROR_BODY = b'{"errors":["Internal Server Error"]}'


def json_response(content: Any, status: int = 200) -> Response:
    """Encode content as a JSON response.

    Serialization failures never propagate: the response is downgraded
    to a fixed error payload with status 500.
    """
    try:
        body = json.dumps(content, indent="\t").encode()
    except (TypeError, ValueError) as e:
        logger.error(f"Cannot serialize JSON response: {e}")
        status = 500
        body = SERIALIZATION_ERROR_BODY

    return Response(
        status=status,
        body=body,
        headers={"Content-Type": JSON_CONTENT_TYPE},
    )


def json_error(text: str, status: int) -> Response:
    """Single error as JSON response."""
    return json_errors([text], status)


def json_errors(errors: List[str], status: int) -> Response:
    """Multiple errors as JSON response."""
    return json_response({"code": status, "errors": list(errors)}, status)


def std_json_response(status: int) -> Response:
    """JSON encoded standard text for status.

    Error statuses (>= 400) use the error format, anything else is
    encoded as a bare JSON string.
    """
    text = Response.status_text(status)
    if status >= 400:
        return json_error(text, status)
    return json_response(text, status)


def json_redirect(location: str, status: int = 302) -> Response:
    """Redirect response with a JSON formatted body."""
    response = json_response({"code": status, "location": location}, status)
    response.set_header("Location", location)
    return response


def std_text_response(status: int) -> Response:
    """Plain text response with the standard text for status."""
    return Response(
        status=status,
        body=(Response.status_text(status) + "\n").encode(),
        headers={
            "Content-Type": TEXT_CONTENT_TYPE,
            "X-Content-Type-Options": "nosniff",
        },
    )


def std_text_handler(status: int) -> Callable[[Request], Response]:
    """Handler always answering with the plain text for status."""

    def handler(request: Request) -> Response:
        return std_text_response(status)

    handler.__name__ = f"std_text_{status}"
    return handler


def std_json_handler(status: int) -> Callable[[Request], Response]:
    """Handler always answering with the JSON encoded text for status."""

    def handler(request: Request) -> Response:
        return std_json_response(status)

    handler.__name__ = f"std_json_{status}"
    return handler


def modified(request: Request, response: Response, modtime: datetime) -> bool:
    """Conditional GET check against If-Modified-Since.

    Returns False and turns ``response`` into ``304 Not Modified`` when
    the client copy is current. Otherwise sets ``Last-Modified`` and
    returns True.
    """
    if modtime.tzinfo is None:
        modtime = modtime.replace(tzinfo=timezone.utc)

    since = _parse_http_date(request.get_header("If-Modified-Since"))
    # HTTP dates have one second resolution
    if since is not None and modtime.replace(microsecond=0) <= since:
        response.del_header("Content-Type")
        response.del_header("Content-Length")
        response.status = 304
        response.body = b""
        return False

    response.set_header(
        "Last-Modified",
        format_datetime(modtime.astimezone(timezone.utc), usegmt=True),
    )
    return True


def _parse_http_date(value: str):
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


__all__ = [
    "JSON_CONTENT_TYPE",
    "TEXT_CONTENT_TYPE",
    "SERIALIZATION_ERROR_BODY",
    "json_response",
    "json_error",
    "json_errors",
    "std_json_response",
    "json_redirect",
    "std_text_response",
    "std_text_handler",
    "std_json_handler",
    "modified",
]
