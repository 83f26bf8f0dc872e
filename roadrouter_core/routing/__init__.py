"""Routing module - Pattern compilation, route table and dispatch."""

from roadrouter_core.routing.args import PathArgs, EMPTY_ARGS, path_args
from roadrouter_core.routing.errors import (
    RoutingError,
    PatternError,
    RouteDefinitionError,
)
from roadrouter_core.routing.handlers import Handler, as_handler
from roadrouter_core.routing.methods import ANY_METHOD, MethodSet, parse_methods
from roadrouter_core.routing.pattern import PathPattern, compile_pattern
from roadrouter_core.routing.router import (
    Route,
    CompiledRoute,
    Dispatch,
    Outcome,
    Router,
)

__all__ = [
    "PathArgs",
    "EMPTY_ARGS",
    "path_args",
    "RoutingError",
    "PatternError",
    "RouteDefinitionError",
    "Handler",
    "as_handler",
    "ANY_METHOD",
    "MethodSet",
    "parse_methods",
    "PathPattern",
    "compile_pattern",
    "Route",
    "CompiledRoute",
    "Dispatch",
    "Outcome",
    "Router",
]
