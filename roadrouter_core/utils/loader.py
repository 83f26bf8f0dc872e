"""Route Loader - Build a router from configured route definitions.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Dict, List

from roadrouter_core.routing.errors import RouteDefinitionError
from roadrouter_core.routing.router import Route, Router
from roadrouter_core.utils.config import RouterConfig

logger = logging.getLogger(__name__)


def resolve(reference: str) -> Any:
    """Import ``"package.module:attribute"`` and return the attribute.

    Dotted attribute paths (``module:Class.method``) are followed.
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise RouteDefinitionError(
            f"handler reference must look like 'module:attribute', got {reference!r}"
        )

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise RouteDefinitionError(f"cannot import {module_name!r}: {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError:
            raise RouteDefinitionError(
                f"{module_name!r} has no attribute {attr_path!r}"
            ) from None

    return target


def route_from_dict(data: Dict[str, Any]) -> Route:
    """Route from a ``{path, methods, handler}`` mapping."""
    try:
        path = data["path"]
        handler = data["handler"]
    except KeyError as e:
        raise RouteDefinitionError(f"route definition missing {e}: {data!r}") from None

    if isinstance(handler, str):
        handler = resolve(handler)
    return Route(path, data.get("methods", "GET"), handler)


def load_routes(definitions: List[Dict[str, Any]]) -> List[Route]:
    """Routes from configured definitions, in order."""
    return [route_from_dict(data) for data in definitions]


def router_from_config(config: RouterConfig, **kwargs: Any) -> Router:
    """Build a router from ``config.routes``."""
    routes = load_routes(config.routes)
    router = Router(routes, strict=config.strict_routes, **kwargs)
    logger.info(f"Loaded {len(router)} routes from {config.source.name.lower()} config")
    return router


__all__ = [
    "resolve",
    "route_from_dict",
    "load_routes",
    "router_from_config",
]
