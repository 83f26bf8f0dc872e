"""Utils module - Configuration, logging setup and route loading."""

from roadrouter_core.utils.config import (
    RouterConfig,
    load_config,
    ConfigSource,
)
from roadrouter_core.utils.log import JSONFormatter, configure_logging

__all__ = [
    "RouterConfig",
    "load_config",
    "ConfigSource",
    "JSONFormatter",
    "configure_logging",
]
