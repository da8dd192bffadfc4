"""Scaffold engine: renders a blueprint's template tree into a destination.

Discovery, reads, directory creation and writes each run concurrently in
worker threads. Every template is read before anything is written, and every
directory is created before the first file write is issued. Files that are
not valid UTF-8 are copied byte for byte without placeholder rendering.
"""

from __future__ import annotations

import asyncio
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from bpgen.errors import ScaffoldError

from .placeholders import CONTENT_PATTERN, FILENAME_PATTERN, render


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class ScaffoldResult(BaseModel):
    """Bookkeeping returned by :func:`scaffold`."""

    destination: Path = Field(..., description="Absolute destination root")
    files: list[Path] = Field(default_factory=list, description="Source files processed")
    dirs: list[Path] = Field(default_factory=list, description="Source directories processed")
    templates: list[str | bytes] = Field(
        default_factory=list,
        description="Pre-render file contents (bytes for non-UTF-8 files), index-aligned with ``files``",
    )
    written: list[Path] = Field(
        default_factory=list,
        description="Rendered destination paths, index-aligned with ``files``",
    )


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


async def scaffold(
    source: str | Path,
    destination: str | Path,
    data: Mapping[str, Any],
    *,
    content_pattern: re.Pattern[str] = CONTENT_PATTERN,
    filename_pattern: re.Pattern[str] = FILENAME_PATTERN,
    cwd: str | Path | None = None,
) -> ScaffoldResult:
    """Render every file and directory under *source* into *destination*.

    Args:
        source: Template root. Relative paths resolve against *cwd*.
        destination: Output root. Relative paths resolve against *cwd*.
        data: Template data used for both path and content placeholders.
        content_pattern: Placeholder pattern applied to file content.
        filename_pattern: Placeholder pattern applied to destination paths.
        cwd: Base for relative paths (defaults to the process working
            directory).

    Returns:
        A :class:`ScaffoldResult` describing what was processed.

    Raises:
        ScaffoldError: If discovery, a read, a directory creation or a write
            fails. Output already written is left in place.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    source_root = _absolute(source, base)
    destination_root = _absolute(destination, base)

    try:
        files, dirs = await asyncio.to_thread(_discover, source_root)

        templates = await asyncio.gather(
            *(asyncio.to_thread(_read_template, f) for f in files)
        )

        rendered_dirs = [
            _destination_path(d, source_root, destination_root, data, filename_pattern)
            for d in dirs
        ]
        await asyncio.gather(*(asyncio.to_thread(_mkdir, d) for d in rendered_dirs))

        written = [
            _destination_path(f, source_root, destination_root, data, filename_pattern)
            for f in files
        ]
        await asyncio.gather(
            *(
                asyncio.to_thread(_write_output, target, template, data, content_pattern)
                for target, template in zip(written, templates)
            )
        )
    except ScaffoldError:
        raise
    except Exception as exc:
        raise ScaffoldError(f"could not scaffold {source_root}: {exc}") from exc

    return ScaffoldResult(
        destination=destination_root,
        files=files,
        dirs=dirs,
        templates=list(templates),
        written=written,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _absolute(path: str | Path, base: Path) -> Path:
    candidate = Path(path)
    return candidate if candidate.is_absolute() else base / candidate


def _discover(root: Path) -> tuple[list[Path], list[Path]]:
    """Walk *root* (hidden entries included, directory links followed)."""
    if not root.is_dir():
        raise ScaffoldError(f"template directory not found: {root}")

    files: list[Path] = []
    dirs: list[Path] = []

    def _raise(error: OSError) -> None:
        raise error

    for current, dir_names, file_names in os.walk(root, followlinks=True, onerror=_raise):
        current_path = Path(current)
        dirs.extend(current_path / name for name in dir_names)
        files.extend(current_path / name for name in file_names)
    return sorted(files), sorted(dirs)


def _destination_path(
    path: Path,
    source_root: Path,
    destination_root: Path,
    data: Mapping[str, Any],
    pattern: re.Pattern[str],
) -> Path:
    target = destination_root / path.relative_to(source_root)
    return Path(render(str(target), data, pattern))


def _read_template(path: Path) -> str | bytes:
    """Return the file as text, or as raw bytes when it is not UTF-8."""
    raw = path.read_bytes()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw


def _mkdir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _write_text(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)


def _write_bytes(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


def _write_output(
    path: Path,
    template: str | bytes,
    data: Mapping[str, Any],
    pattern: re.Pattern[str],
) -> None:
    # binary files are copied verbatim
    if isinstance(template, bytes):
        _write_bytes(path, template)
    else:
        _write_text(path, render(template, data, pattern))
