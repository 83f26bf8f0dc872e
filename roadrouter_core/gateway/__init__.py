"""Gateway module - Serve handlers over HTTP."""

from roadrouter_core.gateway.server import Gateway, WSGIAdapter

__all__ = [
    "Gateway",
    "WSGIAdapter",
]
