"""Method sets - Accepted HTTP methods for a route.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Union

from roadrouter_core.routing.errors import RouteDefinitionError

ANY_METHOD = "*"


@dataclass(frozen=True)
class MethodSet:
    """Upper-cased method tokens, or the accept-any marker."""

    methods: FrozenSet[str] = frozenset()
    wildcard: bool = False

    def accepts(self, method: str) -> bool:
        return self.wildcard or method.upper() in self.methods

    def covers(self, other: "MethodSet") -> bool:
        """Check if every method accepted by other is accepted here."""
        if self.wildcard:
            return True
        if other.wildcard:
            return False
        return other.methods <= self.methods

    def __str__(self) -> str:
        if self.wildcard:
            return ANY_METHOD
        return ",".join(sorted(self.methods))


def parse_methods(
    spec: Union[str, Iterable[str], MethodSet],
    strict: bool = False,
) -> MethodSet:
    """Parse a method specification.

    Accepts a comma separated string ("GET, POST") or an iterable of
    tokens. A lone "*" accepts any method.

    Args:
        spec: Method specification
        strict: Reject empty and duplicate tokens instead of ignoring them

    Raises:
        RouteDefinitionError: if no method remains after parsing
    """
    if isinstance(spec, MethodSet):
        return spec

    raw = spec.split(",") if isinstance(spec, str) else list(spec)

    tokens = []
    for token in raw:
        token = str(token).strip().upper()
        if not token:
            if strict:
                raise RouteDefinitionError(f"empty method token in {spec!r}")
            continue
        if token in tokens and strict:
            raise RouteDefinitionError(f"duplicate method {token!r} in {spec!r}")
        tokens.append(token)

    if not tokens:
        raise RouteDefinitionError(f"no methods in {spec!r}")

    if ANY_METHOD in tokens:
        if len(tokens) > 1 and strict:
            raise RouteDefinitionError(
                f"{ANY_METHOD!r} cannot be combined with other methods in {spec!r}"
            )
        return MethodSet(wildcard=True)

    return MethodSet(methods=frozenset(tokens))


__all__ = [
    "ANY_METHOD",
    "MethodSet",
    "parse_methods",
]
