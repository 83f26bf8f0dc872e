"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from enum import Enum, auto
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="RouterConfig")


class ConfigSource(Enum):
    """Configuration sources."""

    FILE = auto()
    ENV = auto()
    DICT = auto()
    DEFAULT = auto()


@dataclass
class RouterConfig:
    """Router and server configuration.

    ``routes`` holds route definitions as mappings with ``path``,
    ``methods`` and ``handler`` keys, where ``handler`` is a
    ``"package.module:attribute"`` reference.
    """

    # Server settings
    host: str = "127.0.0.1"
    port: int = 8000

    # Routing
    strict_routes: bool = False
    routes: List[Dict[str, Any]] = field(default_factory=list)

    # Request handling
    recover: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"
    access_log: bool = True
    skip_log_paths: List[str] = field(default_factory=list)

    source: ConfigSource = field(default=ConfigSource.DEFAULT, compare=False)

    @classmethod
    def from_dict(
        cls: Type[T],
        data: Dict[str, Any],
        source: ConfigSource = ConfigSource.DICT,
    ) -> T:
        """Create config from dictionary."""
        # Filter to only valid fields
        valid_fields = {f.name for f in fields(cls) if f.name != "source"}
        filtered = {k: v for k, v in (data or {}).items() if k in valid_fields}
        unknown = set(data or {}) - valid_fields
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
        return cls(source=source, **filtered)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load config from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data, ConfigSource.FILE)

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load config from YAML file."""
        try:
            import yaml
        except ImportError:
            raise ImportError("PyYAML required for YAML config")

        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {}, ConfigSource.FILE)

    @classmethod
    def from_env(cls: Type[T], prefix: str = "ROADROUTER_") -> T:
        """Load config from environment variables.

        Only scalar settings are read; lists use comma separated values.
        """
        data: Dict[str, Any] = {}
        types = {f.name: f.type for f in fields(cls)}

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            config_key = key[len(prefix):].lower()
            if config_key not in types or config_key in ("routes", "source"):
                continue
            data[config_key] = _convert(value, str(types[config_key]))

        return cls.from_dict(data, ConfigSource.ENV)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            f.name: getattr(self, f.name) for f in fields(self) if f.name != "source"
        }

    def merge(self, other: "RouterConfig") -> "RouterConfig":
        """Merge with another config.

        Values of other that differ from the defaults take precedence.
        """
        defaults = type(self)().to_dict()
        data = self.to_dict()
        for key, value in other.to_dict().items():
            if value != defaults[key]:
                data[key] = value
        return type(self).from_dict(data, self.source)


def _convert(value: str, type_name: str) -> Any:
    """Convert an environment string to the field's type."""
    if "bool" in type_name:
        return value.strip().lower() in ("1", "true", "yes", "on")
    if "int" in type_name:
        return int(value)
    if "List" in type_name:
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "ROADROUTER_",
) -> RouterConfig:
    """Load configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (if provided)
    3. Defaults
    """
    config = RouterConfig()

    # Load from file if provided
    if path:
        if not Path(path).exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        if path.endswith(".json"):
            config = RouterConfig.from_json(path)
        elif path.endswith((".yaml", ".yml")):
            config = RouterConfig.from_yaml(path)
        else:
            raise ValueError(f"Unknown config format: {path}")

    # Override with environment variables
    env_config = RouterConfig.from_env(env_prefix)
    config = config.merge(env_config)

    return config


__all__ = [
    "RouterConfig",
    "ConfigSource",
    "load_config",
]
