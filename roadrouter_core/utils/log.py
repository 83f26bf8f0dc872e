"""Logging setup.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime
from typing import Any, Dict, Optional

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def __init__(self, **static_fields: Any):
        super().__init__()
        self.static_fields = static_fields

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }

        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        request_id = getattr(record, "request_id", None)
        if request_id:
            log_data["request_id"] = request_id

        log_data.update(self.static_fields)
        return json.dumps(log_data, default=str)


def configure_logging(
    level: str = "INFO",
    fmt: str = "text",
    logger_name: str = "roadrouter_core",
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Args:
        level: Level name, e.g. "DEBUG"
        fmt: "text" or "json"
        logger_name: Logger to configure
        handler: Handler to use instead of a stderr stream handler

    Raises:
        ValueError: for unknown level or format names
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    if fmt == "json":
        formatter: logging.Formatter = JSONFormatter()
    elif fmt == "text":
        formatter = logging.Formatter(TEXT_FORMAT)
    else:
        raise ValueError(f"Unknown log format: {fmt}")

    logger = logging.getLogger(logger_name)
    for existing in list(logger.handlers):
        if getattr(existing, "_roadrouter", False):
            logger.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    handler.setFormatter(formatter)
    handler._roadrouter = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    return logger


__all__ = [
    "JSONFormatter",
    "configure_logging",
]
