"""Entries - Example in-memory CRUD application.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Run with:
    python -m examples.entries
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple

from roadrouter_core import (
    Gateway,
    PathArgs,
    Request,
    Response,
    Route,
    Router,
    RouterConfig,
    configure_logging,
    json_error,
    json_response,
    std_json_handler,
    std_json_response,
)

logger = logging.getLogger(__name__)


@dataclass
class Entry:
    id: str
    content: str
    created: float
    updated: float


class Database:
    """Thread-safe in-memory entry store."""

    def __init__(self):
        self._lock = threading.Lock()
        self._index: Dict[str, Entry] = {}
        self._counter = 0

    def list(self) -> List[Entry]:
        with self._lock:
            return sorted(self._index.values(), key=lambda e: e.created)

    def get(self, entry_id: str) -> Optional[Entry]:
        with self._lock:
            return self._index.get(entry_id)

    def create(self, content: str) -> Entry:
        with self._lock:
            self._counter += 1
            now = time.time()
            entry = Entry(
                id=f"entry-{self._counter}",
                content=content,
                created=now,
                updated=now,
            )
            self._index[entry.id] = entry
            return entry

    def set(self, entry_id: str, content: str) -> Optional[Entry]:
        with self._lock:
            entry = self._index.get(entry_id)
            if entry is None:
                return None
            entry.content = content
            entry.updated = time.time()
            return entry


def _content(request: Request) -> Tuple[Optional[str], Optional[Response]]:
    """Read the "content" field of a JSON body."""
    try:
        data = request.json()
    except (ValueError, UnicodeDecodeError) as e:
        return None, json_error(f"cannot decode: {e}", 400)

    content = data.get("content") if isinstance(data, dict) else None
    if not content or not isinstance(content, str):
        return None, json_error('"content" is required', 400)
    return content, None


class EntriesApp:
    """Route handlers bound to a database."""

    def __init__(self, db: Optional[Database] = None):
        self.db = db or Database()

    def list_entries(self, request: Request) -> Response:
        return json_response({"entries": [asdict(e) for e in self.db.list()]})

    def create_entry(self, request: Request) -> Response:
        content, error = _content(request)
        if error:
            return error
        return json_response(asdict(self.db.create(content)), 201)

    def get_entry(self, request: Request, args: PathArgs) -> Response:
        entry = self.db.get(args.by_index(0))
        if entry is None:
            return std_json_response(404)
        return json_response(asdict(entry))

    def set_entry(self, request: Request, args: PathArgs) -> Response:
        content, error = _content(request)
        if error:
            return error
        entry = self.db.set(args.by_name("entry-id"), content)
        if entry is None:
            return std_json_response(404)
        return json_response(asdict(entry))

    def router(self) -> Router:
        return Router(
            [
                Route("/", "GET", self.list_entries),
                Route("/", "POST", self.create_entry),
                Route("/{entry-id}", "GET", self.get_entry),
                Route("/{entry-id}", "PUT", self.set_entry),
            ],
            not_found=std_json_handler(404),
            method_not_allowed=std_json_handler(405),
        )


def main() -> None:
    config = RouterConfig(port=8000)
    configure_logging(config.log_level, config.log_format)

    gateway = Gateway(EntriesApp().router(), config)
    try:
        gateway.run()
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
