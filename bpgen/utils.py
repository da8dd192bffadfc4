"""Shared utility functions for bpgen.

Provides Rich-based console output, the per-invocation log buffer, JSON
I/O, file-system helpers and the parsing of positional ``key=value``
template arguments.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from io import StringIO
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.tree import Tree

console = Console()
error_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    error_console.print(f"[bold red]{message}[/bold red]")


def render_tree(value: Mapping[str, Any], label: str = ".") -> str:
    """Render a nested mapping as an indented tree and return the text.

    Mapping values become branches; any other value is shown next to its key
    (``None`` values are shown as bare leaves).
    """
    tree = Tree(label)

    def _add(branch: Tree, node: Mapping[str, Any]) -> None:
        for key, child in node.items():
            if isinstance(child, Mapping):
                _add(branch.add(str(key)), child)
            elif child is None:
                branch.add(str(key))
            else:
                branch.add(f"{key}: {child}")

    _add(tree, value)
    buffer = StringIO()
    Console(file=buffer, width=120, no_color=True, highlight=False).print(tree)
    return buffer.getvalue().rstrip("\n")


class LogBuffer:
    """Accumulates user-facing messages for a single invocation.

    Actions write into the buffer and return its joined text so callers (and
    tests) can inspect it; :meth:`flush` prints the accumulated output through
    the Rich console and empties the buffer.
    """

    def __init__(self, *, quiet: bool = False) -> None:
        self.quiet = quiet
        self.queue: list[str] = []

    def text(self, *values: Any) -> None:
        self.queue.extend(str(value) for value in values)

    def tree(self, value: Mapping[str, Any], label: str = ".") -> None:
        self.queue.append(render_tree(value, label))

    def info(self, value: Any) -> None:
        self.queue.append(f"ℹ️ {value}")

    def warning(self, value: Any) -> None:
        self.queue.append(f"⚠️ {value}")

    def success(self, value: Any) -> None:
        self.queue.append(f"✅ {value}")

    def error(self, value: Any) -> str:
        message = f"❌ {value}"
        self.queue.append(message)
        return message

    def output(self) -> str:
        """Return everything logged so far as a single string."""
        return "\n".join(self.queue)

    def flush(self) -> str:
        """Print the buffered output (unless quiet) and clear the buffer."""
        text = self.output()
        if text and not self.quiet:
            console.print(text, markup=False, highlight=False)
        self.clear()
        return text

    def clear(self) -> None:
        self.queue = []


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> Any:
    """Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return json.loads(raw)


def save_json(data: Any, path: str | Path) -> Path:
    """Save *data* as pretty-printed JSON, creating parent directories."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False, default=str) + "\n",
        encoding="utf-8",
    )
    return file_path


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


# ---------------------------------------------------------------------------
# Template arguments
# ---------------------------------------------------------------------------

_ARRAY_KEY = re.compile(r"^([\w.]+)\[(\d*)\]$")


def get_template_args(argv: Iterable[str] = ()) -> list[str]:
    """Drop option-style arguments (``--flag``) from *argv*."""
    return [arg for arg in argv if not arg.startswith("--")]


def parse_key_values(args: Iterable[str] = ()) -> list[tuple[str, str | None]]:
    """Split ``key=value`` arguments on the first ``=``.

    An argument without ``=`` yields ``(arg, None)``.
    """
    pairs: list[tuple[str, str | None]] = []
    for arg in args:
        key, sep, value = arg.partition("=")
        pairs.append((key, value if sep else None))
    return pairs


def _get_property(data: Mapping[str, Any], dotted: str) -> Any:
    value: Any = data
    for segment in dotted.split("."):
        if not isinstance(value, Mapping) or segment not in value:
            return None
        value = value[segment]
    return value


def _set_property(data: MutableMapping[str, Any], dotted: str, value: Any) -> None:
    *parents, last = dotted.split(".")
    node = data
    for segment in parents:
        child = node.get(segment)
        if not isinstance(child, MutableMapping):
            child = {}
            node[segment] = child
        node = child
    node[last] = value


def set_value(data: MutableMapping[str, Any], key: str, value: Any) -> MutableMapping[str, Any]:
    """Assign *value* at *key* inside *data*, building lists for ``[]`` keys.

    ``a.b`` addresses nested mappings, ``items[2]`` sets index 2 of the list
    stored under ``items`` (padding with ``None``) and ``items[]`` appends.
    """
    match = _ARRAY_KEY.match(key)
    if match is None:
        _set_property(data, key, value)
        return data

    name, index = match.group(1), match.group(2)
    current = _get_property(data, name)
    if not isinstance(current, list):
        current = []
        _set_property(data, name, current)

    if index:
        position = int(index)
        if position >= len(current):
            current.extend([None] * (position + 1 - len(current)))
        current[position] = value
    else:
        current.append(value)
    return data


def build_object(pairs: Sequence[tuple[str, Any]]) -> dict[str, Any]:
    """Fold ``(key, value)`` pairs into a nested dictionary."""
    result: dict[str, Any] = {}
    for key, value in pairs:
        set_value(result, key, value)
    return result


def get_template_data(argv: Iterable[str] = ()) -> dict[str, Any]:
    """Turn positional CLI arguments into template data."""
    return build_object(parse_key_values(get_template_args(argv)))
