"""Helper libraries injected into blueprint hook scripts.

Hooks receive exactly three handles: ``fs`` (file helpers below),
``collections`` (pydash) and ``date`` (arrow).
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType, SimpleNamespace
from typing import Any

import arrow
import pydash

from bpgen.utils import ensure_dir, load_json, save_json


def output_file(path: str | Path, content: str) -> Path:
    """Write *content* to *path*, creating missing parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    return target


def read_file(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def path_exists(path: str | Path) -> bool:
    return Path(path).exists()


def copy(source: str | Path, destination: str | Path) -> Path:
    """Copy a file or directory tree, merging into existing directories."""
    src, dest = Path(source), Path(destination)
    if src.is_dir():
        shutil.copytree(src, dest, dirs_exist_ok=True)
    else:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dest)
    return dest


def move(source: str | Path, destination: str | Path) -> Path:
    dest = Path(destination)
    dest.parent.mkdir(parents=True, exist_ok=True)
    return Path(shutil.move(str(source), str(dest)))


def remove(path: str | Path) -> None:
    """Delete a file or directory tree; missing paths are ignored."""
    target = Path(path)
    if target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
    else:
        target.unlink(missing_ok=True)


fs = SimpleNamespace(
    ensure_dir=ensure_dir,
    output_file=output_file,
    read_file=read_file,
    path_exists=path_exists,
    copy=copy,
    move=move,
    remove=remove,
    read_json=load_json,
    write_json=lambda path, data: save_json(data, path),
)


@dataclass(frozen=True)
class HookLibraries:
    """The only capabilities the runner hands to a hook script."""

    fs: Any = field(default_factory=lambda: fs)
    collections: ModuleType = pydash
    date: ModuleType = arrow
