"""Request/Response - HTTP request and response objects.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import dataclasses
import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl


@dataclass
class Request:
    """HTTP Request object.

    Carries a per-request context mapping. Values are never written in
    place: ``with_value`` returns a copy, so whatever a handler sees is
    scoped to that single invocation.
    """

    method: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    remote_addr: str = ""
    protocol: str = "HTTP/1.1"
    timestamp: float = field(default_factory=time.time)

    # Internal
    _context: Dict[Any, Any] = field(default_factory=dict, repr=False)

    @property
    def content_type(self) -> str:
        """Get Content-Type header."""
        return self.get_header("Content-Type")

    @property
    def content_length(self) -> int:
        """Get Content-Length header."""
        try:
            return int(self.get_header("Content-Length", "0") or 0)
        except ValueError:
            return 0

    @property
    def is_json(self) -> bool:
        """Check if request is JSON."""
        return "application/json" in self.content_type

    def json(self) -> Any:
        """Parse body as JSON."""
        return json.loads(self.body.decode())

    def text(self) -> str:
        """Get body as text."""
        return self.body.decode()

    def get_header(self, name: str, default: str = "") -> str:
        """Get header value (case-insensitive)."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return default

    def value(self, key: Any, default: Any = None) -> Any:
        """Get a value propagated with this request."""
        return self._context.get(key, default)

    def with_value(self, key: Any, value: Any) -> "Request":
        """Return a copy of the request carrying an extra context value."""
        context = dict(self._context)
        context[key] = value
        return dataclasses.replace(self, _context=context)

    @classmethod
    def from_raw(cls, data: bytes) -> "Request":
        """Parse request from raw HTTP data."""
        head, _, body = data.partition(b"\r\n\r\n")
        lines = head.split(b"\r\n")

        # Parse request line
        parts = lines[0].decode("latin-1").split(" ")
        method = parts[0]
        target = parts[1] if len(parts) > 1 else "/"
        protocol = parts[2] if len(parts) > 2 else "HTTP/1.1"

        path, _, query_string = target.partition("?")

        headers = {}
        for line in lines[1:]:
            if b":" in line:
                key, value = line.decode("latin-1").split(":", 1)
                headers[key.strip()] = value.strip()

        return cls(
            method=method,
            path=path or "/",
            headers=headers,
            query=dict(parse_qsl(query_string, keep_blank_values=True)),
            body=body,
            protocol=protocol,
        )

    @classmethod
    def from_environ(cls, environ: Dict[str, Any]) -> "Request":
        """Build a request from a WSGI environ."""
        headers = {}
        for key, value in environ.items():
            if key.startswith("HTTP_"):
                headers[key[5:].replace("_", "-").title()] = value
        for key in ("CONTENT_TYPE", "CONTENT_LENGTH"):
            if environ.get(key):
                headers[key.replace("_", "-").title()] = environ[key]

        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        stream = environ.get("wsgi.input")
        body = stream.read(length) if stream is not None and length > 0 else b""

        return cls(
            method=environ.get("REQUEST_METHOD", "GET"),
            path=_decode_path(environ.get("PATH_INFO", "")) or "/",
            headers=headers,
            query=dict(
                parse_qsl(environ.get("QUERY_STRING", ""), keep_blank_values=True)
            ),
            body=body,
            remote_addr=environ.get("REMOTE_ADDR", ""),
            protocol=environ.get("SERVER_PROTOCOL", "HTTP/1.1"),
        )


def _decode_path(path: str) -> str:
    """Undo the latin-1 decoding WSGI servers apply to PATH_INFO."""
    try:
        return path.encode("latin-1").decode("utf-8", "replace")
    except UnicodeEncodeError:
        return path


@dataclass
class Response:
    """HTTP Response object.

    Represents an outgoing HTTP response.
    """

    status: int = 200
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    # Common status messages
    STATUS_MESSAGES = {
        200: "OK",
        201: "Created",
        202: "Accepted",
        204: "No Content",
        301: "Moved Permanently",
        302: "Found",
        303: "See Other",
        304: "Not Modified",
        307: "Temporary Redirect",
        308: "Permanent Redirect",
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        408: "Request Timeout",
        409: "Conflict",
        413: "Request Entity Too Large",
        415: "Unsupported Media Type",
        418: "I'm a teapot",
        422: "Unprocessable Entity",
        429: "Too Many Requests",
        500: "Internal Server Error",
        501: "Not Implemented",
        502: "Bad Gateway",
        503: "Service Unavailable",
        504: "Gateway Timeout",
    }

    @classmethod
    def status_text(cls, status: int) -> str:
        """Standard reason phrase for a status code."""
        return cls.STATUS_MESSAGES.get(status, "Unknown")

    @property
    def status_message(self) -> str:
        """Get status message."""
        return self.status_text(self.status)

    @property
    def is_success(self) -> bool:
        """Check if response is successful (2xx)."""
        return 200 <= self.status < 300

    @property
    def is_redirect(self) -> bool:
        """Check if response is redirect (3xx)."""
        return 300 <= self.status < 400

    @property
    def is_error(self) -> bool:
        """Check if response is error (4xx or 5xx)."""
        return self.status >= 400

    def get_header(self, name: str, default: str = "") -> str:
        """Get header value (case-insensitive)."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return default

    def set_header(self, name: str, value: str) -> "Response":
        """Set header value, replacing any differently-cased duplicate."""
        self.del_header(name)
        self.headers[name] = value
        return self

    def del_header(self, name: str) -> None:
        for key in [k for k in self.headers if k.lower() == name.lower()]:
            del self.headers[key]

    def to_bytes(self) -> bytes:
        """Convert to raw HTTP response."""
        lines = [f"HTTP/1.1 {self.status} {self.status_message}"]

        if not self.get_header("Content-Length"):
            self.headers["Content-Length"] = str(len(self.body))

        for key, value in self.headers.items():
            lines.append(f"{key}: {value}")

        lines.append("")
        header_bytes = "\r\n".join(lines).encode("latin-1")

        return header_bytes + b"\r\n" + self.body

    @classmethod
    def json(
        cls,
        data: Any,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create JSON response.

        Same encoding as ``json_response``: content that cannot be
        serialized gives a 500 with a fixed error body.
        """
        from roadrouter_core.http.responses import json_response

        response = json_response(data, status)
        for key, value in (headers or {}).items():
            response.set_header(key, value)
        return response

    @classmethod
    def text(
        cls,
        text: str,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create text response."""
        body = text.encode()
        resp_headers = dict(headers or {})
        resp_headers.setdefault("Content-Type", "text/plain; charset=utf-8")
        return cls(status=status, body=body, headers=resp_headers)

    @classmethod
    def html(
        cls,
        html: str,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create HTML response."""
        body = html.encode()
        resp_headers = dict(headers or {})
        resp_headers["Content-Type"] = "text/html; charset=utf-8"
        return cls(status=status, body=body, headers=resp_headers)

    @classmethod
    def redirect(
        cls,
        location: str,
        status: int = 302,
    ) -> "Response":
        """Create redirect response."""
        return cls(
            status=status,
            headers={"Location": location},
        )


__all__ = [
    "Request",
    "Response",
]
