"""HTTP module - Request/response objects and response helpers."""

from roadrouter_core.http.request import Request, Response
from roadrouter_core.http.responses import (
    json_response,
    json_error,
    json_errors,
    json_redirect,
    std_json_response,
    std_text_response,
    std_json_handler,
    std_text_handler,
    modified,
)

__all__ = [
    "Request",
    "Response",
    "json_response",
    "json_error",
    "json_errors",
    "json_redirect",
    "std_json_response",
    "std_text_response",
    "std_json_handler",
    "std_text_handler",
    "modified",
]
