"""Path Pattern - Route template compilation.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Templates mix literal text with placeholders:

    /users                  literal only
    /users/{id}             one segment, any characters but "/"
    /users/{id:\\d+}        custom sub-pattern
    /files/{path:.+}        sub-pattern may span segments
    /codes/{code:[A-Z]{3}}  braces inside a sub-pattern must balance

Placeholder names are for documentation and lookup only. They do not
have to be unique.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from roadrouter_core.routing.errors import PatternError

# Placeholders without a sub-pattern never cross a segment separator.
DEFAULT_SUBPATTERN = r"[^/]+"


@dataclass(frozen=True)
class PathPattern:
    """Compiled path template.

    ``names[i]`` is the name of capture group ``i + 1``.
    """

    template: str
    regex: "re.Pattern[str]"
    names: Tuple[str, ...] = ()

    @property
    def is_literal(self) -> bool:
        return not self.names

    def match(self, path: str) -> Optional[Tuple[str, ...]]:
        """Match the whole path.

        Returns:
            Captured values in declaration order, or None
        """
        match = self.regex.match(path)
        if match is None:
            return None
        return tuple(value or "" for value in match.groups())


def compile_pattern(template: str) -> PathPattern:
    """Compile a path template.

    Raises:
        PatternError: if the template is malformed or a sub-pattern is
            not a valid regular expression.
    """
    regex_parts: List[str] = []
    names: List[str] = []

    for literal, placeholder in _split(template):
        regex_parts.append(re.escape(literal))
        if placeholder is None:
            continue

        name, sep, subpattern = placeholder.partition(":")
        _check_name(template, name)
        if not sep:
            subpattern = DEFAULT_SUBPATTERN
        else:
            _check_subpattern(template, name, subpattern)

        regex_parts.append(f"({subpattern})")
        names.append(name)

    source = r"\A" + "".join(regex_parts) + r"\Z"
    try:
        regex = re.compile(source)
    except re.error as e:
        raise PatternError(template, str(e)) from e

    if regex.groups != len(names):
        raise PatternError(
            template,
            f"expected {len(names)} capture groups, compiled {regex.groups}",
        )

    return PathPattern(template=template, regex=regex, names=tuple(names))


def _split(template: str) -> Iterator[Tuple[str, Optional[str]]]:
    """Yield (literal, placeholder body) pairs.

    The last pair has a None placeholder when the template ends with
    literal text.
    """
    literal: List[str] = []
    pos = 0

    while pos < len(template):
        char = template[pos]
        if char == "}":
            raise PatternError(template, f"unexpected '}}' at position {pos}")
        if char != "{":
            literal.append(char)
            pos += 1
            continue

        end = _closing_brace(template, pos)
        yield "".join(literal), template[pos + 1:end]
        literal = []
        pos = end + 1

    if literal:
        yield "".join(literal), None


def _closing_brace(template: str, start: int) -> int:
    depth = 0
    pos = start

    while pos < len(template):
        char = template[pos]
        if char == "\\":
            pos += 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return pos
        pos += 1

    raise PatternError(template, f"unclosed '{{' at position {start}")


def _check_name(template: str, name: str) -> None:
    if not name:
        raise PatternError(template, "placeholder without a name")
    for char in "/{}\\":
        if char in name:
            raise PatternError(
                template, f"placeholder name {name!r} must not contain {char!r}"
            )


def _check_subpattern(template: str, name: str, subpattern: str) -> None:
    try:
        compiled = re.compile(subpattern)
    except re.error as e:
        raise PatternError(
            template, f"placeholder {name!r}: {e}"
        ) from e

    if compiled.groups:
        raise PatternError(
            template,
            f"placeholder {name!r} sub-pattern must not contain capturing "
            f"groups, use (?:...) instead",
        )


__all__ = [
    "DEFAULT_SUBPATTERN",
    "PathPattern",
    "compile_pattern",
]
