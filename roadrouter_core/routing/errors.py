"""Routing errors.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations


class RoutingError(Exception):
    """Base for all routing errors.

    Raised while building a router only. Dispatch never raises.
    """


class PatternError(RoutingError):
    """Raised when a path template cannot be compiled."""

    def __init__(self, template: str, reason: str):
        self.template = template
        self.reason = reason
        super().__init__(f"invalid routing path {template!r}: {reason}")


class RouteDefinitionError(RoutingError):
    """Raised when a route definition is rejected."""


__all__ = [
    "RoutingError",
    "PatternError",
    "RouteDefinitionError",
]
