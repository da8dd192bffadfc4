"""Regex-driven placeholder substitution for paths and file content.

Two placeholder syntaxes are recognised: ``{{ name }}`` inside file content
and ``__name__`` inside file and directory names. Both patterns carry a
single capture group holding a dotted property path that is looked up in the
template data; the substitution algorithm is the same for both.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, Final

__all__ = [
    "CONTENT_PATTERN",
    "FILENAME_PATTERN",
    "MISSING",
    "render",
    "resolve_path",
]


CONTENT_PATTERN: Final = re.compile(r"\{\{\s*([A-Za-z0-9_.\-]+)\s*\}\}")
FILENAME_PATTERN: Final = re.compile(r"__([A-Za-z0-9\-]+(?:_[A-Za-z0-9\-]+)*)__")


class _Missing:
    """Marker for a property path that does not resolve."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def resolve_path(data: Any, dotted_path: str) -> Any:
    """Look up ``a.b.0.c`` style paths in nested mappings and sequences.

    Returns :data:`MISSING` instead of raising when any segment is absent.
    """
    value: Any = data
    for segment in dotted_path.split("."):
        if isinstance(value, Mapping):
            if segment not in value:
                return MISSING
            value = value[segment]
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            try:
                value = value[int(segment)]
            except (ValueError, IndexError):
                return MISSING
        else:
            return MISSING
    return value


def _stringify(value: Any) -> str:
    if value is MISSING or value is None:
        return ""
    if callable(value):
        produced = value()
        return "" if produced is None else str(produced)
    return str(value)


def render(template: str, data: Mapping[str, Any], pattern: re.Pattern[str]) -> str:
    """Replace every *pattern* match in *template* with its value in *data*.

    Unresolvable placeholders and ``None`` values are removed, zero-argument
    callables are invoked and anything else is converted with ``str``.
    """

    def substitute(match: re.Match[str]) -> str:
        return _stringify(resolve_path(data, match.group(1).strip()))

    return pattern.sub(substitute, template)
