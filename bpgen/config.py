"""bpgen configuration.

Centralised, typed configuration for locating blueprints. Settings use
Pydantic v2 models so they can be validated at construction time and built
from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


def find_project_root(start: Path | None = None, marker: str = ".blueprints") -> Path:
    """Return the nearest ancestor of *start* containing *marker*.

    Falls back to *start* itself (the current working directory by default)
    when no ancestor holds a blueprints directory.
    """
    origin = (start or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if (candidate / marker).is_dir():
            return candidate
    return origin


class Config(BaseModel):
    """Global bpgen configuration.

    Instances are typically created once by the CLI entry point and then
    passed through the actions.
    """

    current_path: Path = Field(default_factory=Path.cwd)
    project_root: Path = Field(default_factory=find_project_root)
    blueprints_dir: str = Field(default=".blueprints")
    global_blueprints_path: Path = Field(
        default_factory=lambda: Path.home() / ".blueprints"
    )
    blueprint_file: str = Field(default="blueprint.json")
    instance_dir: str = Field(default="files/__blueprintInstance__")
    quiet: bool = Field(default=False, description="Suppress buffered console output")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def project_blueprints_path(self) -> Path:
        """Root of the project-local ``.blueprints/`` directory."""
        return self.project_root / self.blueprints_dir

    def blueprint_path(self, name: str, *, global_: bool = False) -> Path:
        """Location a blueprint called *name* would occupy."""
        root = self.global_blueprints_path if global_ else self.project_blueprints_path
        return (root / name).resolve()

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            BP_PROJECT_ROOT, BP_GLOBAL_BLUEPRINTS_PATH, BP_QUIET.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("BP_PROJECT_ROOT"):
            kwargs["project_root"] = Path(os.environ["BP_PROJECT_ROOT"]).expanduser()
        if os.environ.get("BP_GLOBAL_BLUEPRINTS_PATH"):
            kwargs["global_blueprints_path"] = Path(
                os.environ["BP_GLOBAL_BLUEPRINTS_PATH"]
            ).expanduser()
        if os.environ.get("BP_QUIET"):
            kwargs["quiet"] = os.environ["BP_QUIET"].strip().lower() in {"1", "true", "yes"}
        return cls(**kwargs)
