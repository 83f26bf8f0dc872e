"""Middleware Base - Base classes for middleware.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from roadrouter_core.http.request import Request, Response
from roadrouter_core.routing.handlers import Handler, as_handler, handler_name

logger = logging.getLogger(__name__)


class Middleware:
    """Middleware base class.

    Middleware wraps a handler. The default wrapping runs
    ``pre_request`` before the handler and ``post_request`` after it;
    subclasses that need to surround execution override ``wrap``.

    Pipeline:
    ┌────────────────────────────────────────────────────────────┐
    │                  Middleware Pipeline                        │
    │                                                             │
    │  Request ──▶ MW1 ──▶ MW2 ──▶ ... ──▶ Router ──▶ Handler    │
    │                                                  │          │
    │  Response ◀── MW1 ◀── MW2 ◀── ... ◀──────────────┘          │
    └────────────────────────────────────────────────────────────┘
    """

    def pre_request(
        self,
        request: Request,
    ) -> Optional[Union[Request, Response]]:
        """Process request before the handler.

        Returns:
            Modified request, Response to short-circuit, or None
        """
        return None

    def post_request(
        self,
        request: Request,
        response: Response,
    ) -> Optional[Response]:
        """Process response before sending.

        Returns:
            Modified response or None
        """
        return None

    def wrap(self, handler: Any) -> Handler:
        """Return a handler running this middleware around handler."""
        return HookedHandler(self, as_handler(handler))


class HookedHandler(Handler):
    """Handler running a middleware's hooks around an inner handler."""

    def __init__(self, middleware: Middleware, inner: Handler):
        self.middleware = middleware
        self.inner = inner

    def serve(self, request: Request) -> Response:
        result = self.middleware.pre_request(request)
        if isinstance(result, Response):
            return result
        if result is not None:
            request = result

        response = self.inner.serve(request)

        result = self.middleware.post_request(request, response)
        if result is not None:
            response = result
        return response

    def __repr__(self) -> str:
        return (
            f"{type(self.middleware).__name__}"
            f"({handler_name(self.inner)})"
        )


class MiddlewareChain:
    """Chain of middleware. The first added runs outermost."""

    def __init__(self, middleware: Optional[List[Middleware]] = None):
        self._middleware = list(middleware or [])

    def add(self, middleware: Middleware) -> "MiddlewareChain":
        """Add middleware to chain."""
        self._middleware.append(middleware)
        return self

    def remove(self, middleware: Middleware) -> bool:
        """Remove middleware from chain."""
        try:
            self._middleware.remove(middleware)
            return True
        except ValueError:
            return False

    def wrap(self, handler: Any) -> Handler:
        """Wrap handler with every middleware in the chain."""
        wrapped = as_handler(handler)
        for mw in reversed(self._middleware):
            wrapped = mw.wrap(wrapped)
        return wrapped

    def __len__(self) -> int:
        return len(self._middleware)


__all__ = [
    "Middleware",
    "HookedHandler",
    "MiddlewareChain",
]
