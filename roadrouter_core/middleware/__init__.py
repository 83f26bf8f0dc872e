"""Middleware module - Handler wrapping, recovery and logging."""

from roadrouter_core.middleware.base import Middleware, MiddlewareChain
from roadrouter_core.middleware.logging import (
    AccessLogMiddleware,
    LoggingConfig,
    LoggingMiddleware,
)
from roadrouter_core.middleware.recovery import RecoveryMiddleware, recovery

__all__ = [
    "Middleware",
    "MiddlewareChain",
    "AccessLogMiddleware",
    "LoggingConfig",
    "LoggingMiddleware",
    "RecoveryMiddleware",
    "recovery",
]
