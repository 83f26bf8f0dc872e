"""Gateway Server - Serve a handler over HTTP.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from socketserver import ThreadingMixIn
from typing import Any, Callable, Dict, Iterable, List, Optional
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from roadrouter_core.http.request import Request, Response
from roadrouter_core.middleware.base import Middleware, MiddlewareChain
from roadrouter_core.middleware.logging import LoggingConfig, LoggingMiddleware
from roadrouter_core.middleware.recovery import RecoveryMiddleware
from roadrouter_core.routing.handlers import Handler, as_handler
from roadrouter_core.utils.config import RouterConfig

logger = logging.getLogger(__name__)


class WSGIAdapter:
    """Expose a Handler as a WSGI application."""

    def __init__(self, handler: Any):
        self.handler = as_handler(handler)

    def __call__(
        self,
        environ: Dict[str, Any],
        start_response: Callable[..., Any],
    ) -> Iterable[bytes]:
        request = Request.from_environ(environ)
        response = self.handler.serve(request)
        return self._write(request, response, start_response)

    def _write(
        self,
        request: Request,
        response: Response,
        start_response: Callable[..., Any],
    ) -> List[bytes]:
        headers = [(key, str(value)) for key, value in response.headers.items()]
        if not response.get_header("Content-Length"):
            headers.append(("Content-Length", str(len(response.body))))

        start_response(f"{response.status} {response.status_message}", headers)

        if request.method.upper() == "HEAD" or response.status in (204, 304):
            return []
        return [response.body]


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    """One thread per request."""

    daemon_threads = True


class _LoggingRequestHandler(WSGIRequestHandler):
    def log_message(self, format: str, *args: Any) -> None:
        logger.debug(f"{self.address_string()} {format % args}")


class Gateway:
    """HTTP server for a router (or any handler).

    Features:
    - Thread per request
    - Recovery from handler failures (outermost)
    - Request logging
    - Extra middleware

    Usage:
        gateway = Gateway(router, RouterConfig(port=8000))
        gateway.use(MyMiddleware())
        gateway.run()
    """

    def __init__(self, handler: Any, config: Optional[RouterConfig] = None):
        self.config = config or RouterConfig()
        self.handler = as_handler(handler)
        self._middleware: List[Middleware] = []
        self._server: Optional[_ThreadingWSGIServer] = None
        self._app: Optional[WSGIAdapter] = None
        self._lock = threading.RLock()

    def use(self, middleware: Middleware) -> "Gateway":
        """Add middleware inside the built-in recovery and logging layers."""
        with self._lock:
            if self._app is not None:
                raise RuntimeError("Cannot add middleware after the app is built")
            self._middleware.append(middleware)
        return self

    def build(self) -> Handler:
        """Compose built-in and user middleware around the handler."""
        chain = MiddlewareChain()
        if self.config.recover:
            chain.add(RecoveryMiddleware())
        if self.config.access_log:
            chain.add(
                LoggingMiddleware(LoggingConfig(skip_paths=list(self.config.skip_log_paths)))
            )
        for mw in self._middleware:
            chain.add(mw)
        return chain.wrap(self.handler)

    @property
    def app(self) -> WSGIAdapter:
        """WSGI application, built once."""
        with self._lock:
            if self._app is None:
                self._app = WSGIAdapter(self.build())
            return self._app

    def run(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
    ) -> None:
        """Serve until stop() is called.

        Args:
            host: Override host
            port: Override port
        """
        host = host or self.config.host
        port = self.config.port if port is None else port

        self._server = make_server(
            host,
            port,
            self.app,
            server_class=_ThreadingWSGIServer,
            handler_class=_LoggingRequestHandler,
        )
        logger.info(f"Serving on http://{host}:{self._server.server_port}")

        try:
            self._server.serve_forever()
        finally:
            self._server.server_close()
            self._server = None
            logger.info("Server stopped")

    def stop(self) -> None:
        """Stop the server started by run()."""
        server = self._server
        if server is not None:
            server.shutdown()

    @property
    def running(self) -> bool:
        return self._server is not None

    def get_stats(self) -> Dict[str, Any]:
        """Get gateway statistics."""
        return {
            "middleware": len(self._middleware),
            "recover": self.config.recover,
            "running": self.running,
        }


__all__ = [
    "Gateway",
    "WSGIAdapter",
]
