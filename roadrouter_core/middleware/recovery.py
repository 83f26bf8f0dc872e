"""Recovery Middleware - Turn handler failures into 500 responses.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any

from roadrouter_core.http.request import Request, Response
from roadrouter_core.http.responses import std_text_response
from roadrouter_core.middleware.base import Middleware
from roadrouter_core.routing.handlers import Handler, as_handler, handler_name

logger = logging.getLogger(__name__)


class RecoveryMiddleware(Middleware):
    """Isolates each request from failures in its handler.

    Any ``Exception`` escaping the wrapped handler is logged with its
    traceback and answered with a plain text 500. ``KeyboardInterrupt``
    and ``SystemExit`` are not recovered.
    """

    def wrap(self, handler: Any) -> Handler:
        return RecoveringHandler(as_handler(handler))


class RecoveringHandler(Handler):
    """Handler that never lets an exception escape."""

    def __init__(self, inner: Handler):
        self.inner = inner

    def serve(self, request: Request) -> Response:
        try:
            return self.inner.serve(request)
        except Exception:
            logger.exception(
                f"Handler {handler_name(self.inner)} failed: "
                f"{request.method} {request.path}"
            )
            return std_text_response(500)

    def __repr__(self) -> str:
        return f"RecoveringHandler({handler_name(self.inner)})"


def recovery(handler: Any) -> Handler:
    """Wrap handler with recovery."""
    return RecoveringHandler(as_handler(handler))


__all__ = [
    "RecoveryMiddleware",
    "RecoveringHandler",
    "recovery",
]
