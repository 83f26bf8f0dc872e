"""Path Arguments - Values extracted from a matched path.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Tuple

from roadrouter_core.http.request import Request


@dataclass(frozen=True)
class PathArgs:
    """Read-only view over the values captured for one request.

    Values are kept in placeholder declaration order. Lookups never
    fail: a missing name or an out of range index yields the default.

    Usage:
        args = path_args(request)
        args.by_index(0)      # "apple"
        args.by_name("name")  # "apple"
    """

    values: Tuple[str, ...] = ()
    names: Tuple[str, ...] = ()

    def by_index(self, index: int, default: str = "") -> str:
        """Value at position, counted from the first placeholder."""
        if 0 <= index < len(self.values):
            return self.values[index]
        return default

    def by_name(self, name: str, default: str = "") -> str:
        """Value of the first placeholder with this name."""
        for i, placeholder in enumerate(self.names):
            if placeholder == name:
                return self.by_index(i, default)
        return default

    def count(self) -> int:
        return len(self.values)

    def as_dict(self) -> Dict[str, str]:
        """Name to value mapping; the first of duplicate names wins."""
        result: Dict[str, str] = {}
        for name, value in zip(self.names, self.values):
            result.setdefault(name, value)
        return result

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __bool__(self) -> bool:
        return bool(self.values)


EMPTY_ARGS = PathArgs()


class _PathArgsKey:
    """Context key owned by this module."""

    def __repr__(self) -> str:
        return "<path args>"


_PATH_ARGS = _PathArgsKey()


def with_path_args(request: Request, args: PathArgs) -> Request:
    """Copy of request carrying args for a single handler invocation."""
    return request.with_value(_PATH_ARGS, args)


def path_args(request: Request) -> PathArgs:
    """Arguments extracted for request.

    Outside of a dispatched request the result is empty.
    """
    args = request.value(_PATH_ARGS)
    if isinstance(args, PathArgs):
        return args
    return EMPTY_ARGS


__all__ = [
    "PathArgs",
    "EMPTY_ARGS",
    "path_args",
    "with_path_args",
]
