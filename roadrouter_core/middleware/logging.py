"""Logging Middleware - Request/response logging.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from roadrouter_core.http.request import Request, Response
from roadrouter_core.middleware.base import Middleware

logger = logging.getLogger(__name__)


class _LogKey:
    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"<{self.name}>"


_REQUEST_ID = _LogKey("request id")
_START_TIME = _LogKey("start time")


def request_id(request: Request) -> str:
    """Request id assigned by LoggingMiddleware, or empty."""
    return request.value(_REQUEST_ID, "")


@dataclass
class LoggingConfig:
    """Logging middleware configuration."""

    log_headers: bool = False
    log_query: bool = True
    skip_paths: List[str] = field(default_factory=list)


class LoggingMiddleware(Middleware):
    """Logging middleware for requests and responses."""

    def __init__(self, config: Optional[LoggingConfig] = None):
        self.config = config or LoggingConfig()

    def pre_request(self, request: Request) -> Optional[Request]:
        """Log incoming request."""
        if request.path in self.config.skip_paths:
            return None

        rid = str(uuid.uuid4())[:8]
        request = request.with_value(_REQUEST_ID, rid)
        request = request.with_value(_START_TIME, time.time())

        log_parts = [f"[{rid}] --> {request.method} {request.path}"]

        if self.config.log_query and request.query:
            log_parts.append(f"query={request.query}")

        if self.config.log_headers:
            log_parts.append(f"headers={request.headers}")

        logger.info(" ".join(log_parts), extra={"request_id": rid})
        return request

    def post_request(
        self,
        request: Request,
        response: Response,
    ) -> Optional[Response]:
        """Log outgoing response."""
        rid = request_id(request)
        if not rid:
            return None

        duration_ms = (time.time() - request.value(_START_TIME, time.time())) * 1000
        logger.info(
            f"[{rid}] <-- {response.status} ({duration_ms:.2f}ms)",
            extra={"request_id": rid},
        )
        response.set_header("X-Request-Id", rid)
        return None


class AccessLogMiddleware(Middleware):
    """Apache/Nginx style access logging."""

    def __init__(self, format_string: Optional[str] = None):
        # Common log format by default
        self.format = format_string or (
            '{remote_addr} - - [{time}] '
            '"{method} {path} {protocol}" {status} {body_bytes} '
            '"{referer}" "{user_agent}"'
        )

    def post_request(
        self,
        request: Request,
        response: Response,
    ) -> Optional[Response]:
        """Log in access log format."""
        log_data = {
            "remote_addr": request.remote_addr or "-",
            "time": time.strftime("%d/%b/%Y:%H:%M:%S %z"),
            "method": request.method,
            "path": request.path,
            "protocol": request.protocol,
            "status": response.status,
            "body_bytes": len(response.body),
            "referer": request.get_header("Referer", "-"),
            "user_agent": request.get_header("User-Agent", "-"),
        }

        logger.info(self.format.format(**log_data))
        return None


__all__ = [
    "LoggingMiddleware",
    "AccessLogMiddleware",
    "LoggingConfig",
    "request_id",
]
