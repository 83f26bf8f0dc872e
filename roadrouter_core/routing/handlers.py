"""Handlers - The single interface every route target is adapted to.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from roadrouter_core.http.request import Request, Response
from roadrouter_core.routing.args import PathArgs, path_args
from roadrouter_core.routing.errors import RouteDefinitionError


class Handler(ABC):
    """Serves one request.

    Registration forms are adapted to this interface when a route is
    added, so dispatch always makes the same call.
    """

    @abstractmethod
    def serve(self, request: Request) -> Response:
        """Produce the response for request."""
        pass

    def __call__(self, request: Request) -> Response:
        return self.serve(request)


class FunctionHandler(Handler):
    """Adapts ``func(request)``."""

    def __init__(self, func: Callable[[Request], Response]):
        self.func = func

    def serve(self, request: Request) -> Response:
        return self.func(request)

    def __repr__(self) -> str:
        return f"FunctionHandler({handler_name(self.func)})"


class ArgsFunctionHandler(Handler):
    """Adapts ``func(request, args)``."""

    def __init__(self, func: Callable[[Request, PathArgs], Response]):
        self.func = func

    def serve(self, request: Request) -> Response:
        return self.func(request, path_args(request))

    def __repr__(self) -> str:
        return f"ArgsFunctionHandler({handler_name(self.func)})"


def as_handler(target: Any) -> Handler:
    """Adapt a registration target to Handler.

    Accepted forms:
    - Handler instances (returned unchanged)
    - objects with a callable ``serve`` attribute
    - callables taking ``(request)``
    - callables taking ``(request, args)``

    Raises:
        RouteDefinitionError: for anything else
    """
    if isinstance(target, Handler):
        return target

    if target is None or inspect.isclass(target):
        raise RouteDefinitionError(f"not a handler: {target!r}")

    serve = getattr(target, "serve", None)
    func = serve if callable(serve) else target
    if not callable(func):
        raise RouteDefinitionError(f"not a handler: {target!r}")

    arity = _arity(func)
    if arity == 2:
        return ArgsFunctionHandler(func)
    if arity == 1:
        return FunctionHandler(func)

    raise RouteDefinitionError(
        f"handler {handler_name(target)} must accept (request) "
        f"or (request, args)"
    )


def handler_name(target: Any) -> str:
    """Readable name for logs and reprs."""
    if isinstance(target, (FunctionHandler, ArgsFunctionHandler)):
        return handler_name(target.func)
    name = getattr(target, "__qualname__", None) or getattr(target, "__name__", None)
    if name:
        return name
    return type(target).__name__


def _arity(func: Callable) -> Optional[int]:
    """Number of positional arguments the handler should receive."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Signature unavailable (some builtins); assume (request)
        return 1

    required = 0
    accepted = 0
    for param in signature.parameters.values():
        if param.kind is param.VAR_POSITIONAL:
            accepted = max(accepted, 2)
        elif param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            accepted += 1
            if param.default is param.empty:
                required += 1
        elif param.kind is param.KEYWORD_ONLY and param.default is param.empty:
            return None

    if required == 2:
        return 2
    if required <= 1 <= accepted:
        return 1
    return None


__all__ = [
    "Handler",
    "FunctionHandler",
    "ArgsFunctionHandler",
    "as_handler",
    "handler_name",
]
