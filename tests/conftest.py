"""Shared pytest fixtures for the bpgen test suite.

Provides reusable fixtures for:
- An isolated Config (project and global blueprint roots under tmp_path)
- A quiet LogBuffer
- A factory that writes blueprint directories (files, blueprint.json, hooks)
"""

from __future__ import annotations

import json
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from bpgen.config import Config
from bpgen.utils import LogBuffer


# ---------------------------------------------------------------------------
# Paths & configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Project directory acting as the current working directory."""
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def config(tmp_path: Path, workdir: Path) -> Config:
    """Config whose project and global blueprint roots live under tmp_path."""
    return Config(
        current_path=workdir,
        project_root=workdir,
        global_blueprints_path=tmp_path / "global-blueprints",
        quiet=True,
    )


@pytest.fixture
def log() -> LogBuffer:
    return LogBuffer(quiet=True)


# ---------------------------------------------------------------------------
# Blueprint factory
# ---------------------------------------------------------------------------


def write_hook(path: Path, body: str) -> Path:
    """Write a hook script whose ``run`` function body is *body*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    source = "def run(data, libraries):\n" + textwrap.indent(textwrap.dedent(body), "    ")
    path.write_text(source, encoding="utf-8")
    return path


@pytest.fixture
def make_blueprint(config: Config) -> Callable[..., Path]:
    """Create a blueprint directory and return its location.

    Args (of the returned factory):
        name: Blueprint name.
        files: Mapping of template-relative path -> content.
        blueprint_json: Contents of ``blueprint.json`` (omitted when None).
        hooks: Mapping of script-relative path -> ``run`` body.
        global_: Create under the global root instead of the project.
    """

    def _make(
        name: str,
        files: dict[str, str] | None = None,
        *,
        blueprint_json: dict[str, Any] | None = None,
        hooks: dict[str, str] | None = None,
        global_: bool = False,
    ) -> Path:
        location = config.blueprint_path(name, global_=global_)
        instance_root = location / config.instance_dir
        instance_root.mkdir(parents=True, exist_ok=True)
        for relative, content in (files or {}).items():
            target = instance_root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        for relative, body in (hooks or {}).items():
            write_hook(location / relative, body)
        if blueprint_json is not None:
            (location / config.blueprint_file).write_text(
                json.dumps(blueprint_json), encoding="utf-8"
            )
        return location

    return _make


@pytest.fixture
def hook_writer() -> Callable[[Path, str], Path]:
    """Expose :func:`write_hook` to tests that place hooks themselves."""
    return write_hook
