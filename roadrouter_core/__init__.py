"""RoadRouter - Ordered HTTP request router.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

RoadRouter selects the single handler responsible for a request and
extracts the values embedded in its path:
- Path templates with placeholders (/users/{id}, /files/{path:.+})
- Method sets per route, including "*" for any method
- First declared match wins
- 404 when no path matched, 405 when only the method did not
- Recovery, logging and JSON helpers around handlers

Architecture Overview:
┌─────────────────────────────────────────────────────────────────────────────┐
│                              RoadRouter                                      │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                              │
│  Construction:                                                               │
│    Route definitions ──▶ Pattern compiler ──▶ Route table (immutable)        │
│                                                                              │
│  Per request:                                                                │
│    Gateway ──▶ Recovery ──▶ Logging ──▶ Router.dispatch ──▶ Handler          │
│                                             │                                │
│                                             ├──▶ 405 handler                 │
│                                             └──▶ 404 handler                 │
│                                                                              │
│  ┌─────────────────┐  ┌─────────────────┐  ┌─────────────────────────────┐ │
│  │    Routing      │  │   Middleware    │  │        HTTP                 │ │
│  │                 │  │                 │  │                             │ │
│  │ - Patterns      │  │ - Recovery      │  │ - Request / Response        │ │
│  │ - Method sets   │  │ - Logging       │  │ - JSON helpers              │ │
│  │ - Dispatch      │  │ - Access log    │  │ - Conditional GET           │ │
│  │ - Path args     │  │                 │  │                             │ │
│  └─────────────────┘  └─────────────────┘  └─────────────────────────────┘ │
│                                                                              │
└─────────────────────────────────────────────────────────────────────────────┘

Usage:
    from roadrouter_core import Gateway, Route, Router, json_response, path_args

    def get_fruit(request):
        name = path_args(request).by_name("name")
        return json_response({"name": name})

    router = Router([
        Route("/fruits/{name}", "GET", get_fruit),
    ])

    Gateway(router).run(host="127.0.0.1", port=8000)
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# HTTP
from roadrouter_core.http.request import Request, Response
from roadrouter_core.http.responses import (
    json_response,
    json_error,
    json_errors,
    json_redirect,
    std_json_response,
    std_json_handler,
    std_text_handler,
    modified,
)

# Routing
from roadrouter_core.routing.args import PathArgs, path_args
from roadrouter_core.routing.errors import (
    RoutingError,
    PatternError,
    RouteDefinitionError,
)
from roadrouter_core.routing.handlers import Handler, as_handler
from roadrouter_core.routing.pattern import PathPattern, compile_pattern
from roadrouter_core.routing.router import Dispatch, Outcome, Route, Router

# Middleware
from roadrouter_core.middleware.base import Middleware, MiddlewareChain
from roadrouter_core.middleware.logging import LoggingMiddleware, AccessLogMiddleware
from roadrouter_core.middleware.recovery import RecoveryMiddleware, recovery

# Gateway
from roadrouter_core.gateway.server import Gateway, WSGIAdapter

# Utils
from roadrouter_core.utils.config import RouterConfig, load_config
from roadrouter_core.utils.loader import router_from_config
from roadrouter_core.utils.log import configure_logging

__all__ = [
    # Version
    "__version__",
    # HTTP
    "Request",
    "Response",
    "json_response",
    "json_error",
    "json_errors",
    "json_redirect",
    "std_json_response",
    "std_json_handler",
    "std_text_handler",
    "modified",
    # Routing
    "PathArgs",
    "path_args",
    "RoutingError",
    "PatternError",
    "RouteDefinitionError",
    "Handler",
    "as_handler",
    "PathPattern",
    "compile_pattern",
    "Dispatch",
    "Outcome",
    "Route",
    "Router",
    # Middleware
    "Middleware",
    "MiddlewareChain",
    "LoggingMiddleware",
    "AccessLogMiddleware",
    "RecoveryMiddleware",
    "recovery",
    # Gateway
    "Gateway",
    "WSGIAdapter",
    # Utils
    "RouterConfig",
    "load_config",
    "router_from_config",
    "configure_logging",
]
