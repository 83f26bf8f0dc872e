"""Router - Request routing engine.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, FrozenSet, Iterable, List, Optional, Tuple, Union

from roadrouter_core.http.request import Request, Response
from roadrouter_core.http.responses import std_text_response
from roadrouter_core.routing.args import EMPTY_ARGS, PathArgs, with_path_args
from roadrouter_core.routing.errors import RouteDefinitionError, RoutingError
from roadrouter_core.routing.handlers import Handler, as_handler, handler_name
from roadrouter_core.routing.methods import MethodSet, parse_methods
from roadrouter_core.routing.pattern import PathPattern, compile_pattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    """Route definition: path template, accepted methods, handler."""

    path: str
    methods: Union[str, Iterable[str]]
    handler: Any


@dataclass(frozen=True)
class CompiledRoute:
    """Route ready for matching. Built once, never modified."""

    pattern: PathPattern
    methods: MethodSet
    handler: Handler

    @property
    def path(self) -> str:
        return self.pattern.template

    @property
    def names(self) -> Tuple[str, ...]:
        return self.pattern.names

    def __repr__(self) -> str:
        return (
            f"CompiledRoute({self.path!r}, {str(self.methods)!r}, "
            f"{handler_name(self.handler)})"
        )


class Outcome(Enum):
    """Dispatch outcomes."""

    HANDLED = auto()
    METHOD_NOT_ALLOWED = auto()
    NOT_FOUND = auto()


@dataclass(frozen=True)
class Dispatch:
    """Result of resolving one (method, path) pair."""

    outcome: Outcome
    route: Optional[CompiledRoute] = None
    args: PathArgs = EMPTY_ARGS
    allowed: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def handler(self) -> Optional[Handler]:
        return self.route.handler if self.route else None

    @property
    def found(self) -> bool:
        return self.outcome is Outcome.HANDLED


class _AllowedMethodsKey:
    def __repr__(self) -> str:
        return "<allowed methods>"


ALLOWED_METHODS = _AllowedMethodsKey()


def default_not_found(request: Request) -> Response:
    """Plain text 404."""
    return std_text_response(404)


def default_method_not_allowed(request: Request) -> Response:
    """Plain text 405 with an Allow header when methods are known."""
    response = std_text_response(405)
    allowed = request.value(ALLOWED_METHODS)
    if allowed:
        response.set_header("Allow", ", ".join(sorted(allowed)))
    return response


RouteLike = Union[Route, Tuple[str, Any, Any]]


class Router(Handler):
    """Request Router.

    Routes are scanned in declaration order and the first route whose
    path and method both match serves the request. When some route
    matched the path but none accepted the method, the method-not-allowed
    handler runs; when no path matched, the not-found handler runs.

    Features:
    - Placeholders (/users/{id}, /users/{id:\\d+})
    - Method sets ("GET", "GET,POST", "*")
    - Replaceable 404/405 handlers
    - Optional strict validation of the route table

    Usage:
        router = Router([
            Route("/fruits", "*", list_fruits),
            Route("/fruits/{name}", "GET", get_fruit),
            Route("/fruits/{name}", "DELETE", delete_fruit),
        ])

        router.add("/health", "GET", health)

        @router.route("/fruits/{name}/seeds", "GET")
        def seeds(request, args):
            ...

        response = router.serve(Request(method="GET", path="/fruits/apple"))
    """

    def __init__(
        self,
        routes: Iterable[RouteLike] = (),
        *,
        not_found: Optional[Any] = None,
        method_not_allowed: Optional[Any] = None,
        strict: bool = False,
    ):
        self.strict = strict
        self._routes: Tuple[CompiledRoute, ...] = ()
        self._frozen = False
        self._lock = threading.RLock()

        if not_found is None:
            not_found = default_not_found
        if method_not_allowed is None:
            method_not_allowed = default_method_not_allowed
        self.not_found = as_handler(not_found)
        self.method_not_allowed = as_handler(method_not_allowed)

        for route in routes:
            self._add(_as_route(route))

    def add(
        self,
        path: str,
        methods: Union[str, Iterable[str]],
        handler: Any,
    ) -> "Router":
        """Add a route.

        Args:
            path: Path template
            methods: Comma separated methods, or "*" for any
            handler: Request handler

        Raises:
            PatternError: if the template does not compile
            RouteDefinitionError: if methods or handler are invalid
            RuntimeError: if the router already serves requests
        """
        self._add(Route(path, methods, handler))
        return self

    def _add(self, route: Route) -> None:
        with self._lock:
            if self._frozen:
                raise RuntimeError("Cannot add routes after the router is frozen")

            try:
                compiled = self._compile(route)
            except RoutingError as e:
                logger.error(f"Rejected route {route.path!r}: {e}")
                raise

            # Replace, never mutate, the published table
            self._routes = self._routes + (compiled,)

        logger.debug(f"Route registered: {compiled.methods} {compiled.path}")

    def _compile(self, route: Route) -> CompiledRoute:
        pattern = compile_pattern(route.path)
        methods = parse_methods(route.methods, strict=self.strict)
        handler = as_handler(route.handler)
        compiled = CompiledRoute(pattern=pattern, methods=methods, handler=handler)

        if self.strict:
            for earlier in self._routes:
                if earlier.path == compiled.path and earlier.methods.covers(methods):
                    raise RouteDefinitionError(
                        f"route {methods} {compiled.path} is unreachable, "
                        f"shadowed by {earlier!r}"
                    )

        return compiled

    def route(
        self,
        path: str,
        methods: Union[str, Iterable[str]] = "GET",
    ) -> Callable[[Any], Any]:
        """Decorator form of add. Returns the function unchanged."""

        def decorator(func: Any) -> Any:
            self.add(path, methods, func)
            return func

        return decorator

    def get(self, path: str, handler: Any) -> "Router":
        """Add GET route."""
        return self.add(path, "GET", handler)

    def post(self, path: str, handler: Any) -> "Router":
        """Add POST route."""
        return self.add(path, "POST", handler)

    def put(self, path: str, handler: Any) -> "Router":
        """Add PUT route."""
        return self.add(path, "PUT", handler)

    def patch(self, path: str, handler: Any) -> "Router":
        """Add PATCH route."""
        return self.add(path, "PATCH", handler)

    def delete(self, path: str, handler: Any) -> "Router":
        """Add DELETE route."""
        return self.add(path, "DELETE", handler)

    def freeze(self) -> None:
        """Stop accepting routes."""
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> Tuple[CompiledRoute, ...]:
        """Compiled routes in declaration order."""
        return self._routes

    def dispatch(self, method: str, path: str) -> Dispatch:
        """Resolve method and path against the route table.

        Never raises. Scanning continues past a route whose path matched
        but whose methods did not, because a later route may accept the
        method for the same path.
        """
        if not self._frozen:
            self.freeze()

        method = method.upper()
        allowed: List[str] = []
        path_matched = False

        for route in self._routes:
            values = route.pattern.match(path)
            if values is None:
                continue

            path_matched = True
            if not route.methods.accepts(method):
                allowed.extend(route.methods.methods)
                continue

            return Dispatch(
                outcome=Outcome.HANDLED,
                route=route,
                args=PathArgs(values=values, names=route.names),
            )

        if path_matched:
            return Dispatch(
                outcome=Outcome.METHOD_NOT_ALLOWED,
                allowed=frozenset(allowed),
            )
        return Dispatch(outcome=Outcome.NOT_FOUND)

    def serve(self, request: Request) -> Response:
        """Dispatch request and invoke exactly one handler."""
        result = self.dispatch(request.method, request.path)

        if result.outcome is Outcome.HANDLED:
            return result.route.handler.serve(with_path_args(request, result.args))

        if result.outcome is Outcome.METHOD_NOT_ALLOWED:
            logger.debug(f"Method not allowed: {request.method} {request.path}")
            return self.method_not_allowed.serve(
                request.with_value(ALLOWED_METHODS, result.allowed)
            )

        logger.debug(f"Route not found: {request.method} {request.path}")
        return self.not_found.serve(request)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"Router({len(self._routes)} routes)"


def _as_route(route: RouteLike) -> Route:
    if isinstance(route, Route):
        return route
    try:
        path, methods, handler = route
    except (TypeError, ValueError):
        raise RouteDefinitionError(
            f"expected Route or (path, methods, handler), got {route!r}"
        ) from None
    return Route(path, methods, handler)


__all__ = [
    "Route",
    "CompiledRoute",
    "Outcome",
    "Dispatch",
    "Router",
    "ALLOWED_METHODS",
    "default_not_found",
    "default_method_not_allowed",
]
