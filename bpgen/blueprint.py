"""Blueprints: a template tree plus the hook scripts wrapped around it.

A blueprint lives in a directory holding ``blueprint.json`` (hook
configuration), ``files/__blueprintInstance__/`` (the instance template) and,
by convention, ``scripts/`` (hook scripts).

File and directory names are rendered with ``__name__`` placeholders, so a
literal ``__init__.py`` needs ``"data": {"init": "__init__"}`` in
``blueprint.json``; unresolved names render empty.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from bpgen.config import Config
from bpgen.errors import BlueprintConfigError
from bpgen.hooks import HookRunner
from bpgen.scaffolder import ScaffoldResult, scaffold
from bpgen.utils import load_json

EXCLUDED_NAMES = frozenset({".git", "node_modules", "__pycache__", ".gitignore", ".DS_Store"})


# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class BlueprintConfig(BaseModel):
    """Contents of ``blueprint.json``."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    pre_generate: list[str] = Field(default_factory=list, alias="preGenerate")
    post_generate: list[str] = Field(default_factory=list, alias="postGenerate")
    description: str = Field(default="")
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Default template data; ``{\"init\": \"__init__\"}`` keeps ``__init__.py`` literal",
    )

    @field_validator("pre_generate", "post_generate", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("data", mode="before")
    @classmethod
    def _null_as_no_data(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("description", mode="before")
    @classmethod
    def _description_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def load(cls, path: str | Path) -> "BlueprintConfig":
        """Read *path*; a missing file is an empty configuration.

        Raises:
            BlueprintConfigError: If the file is not valid JSON or does not
                match the expected shape.
        """
        file_path = Path(path)
        if not file_path.exists():
            return cls()
        try:
            raw = load_json(file_path)
        except (OSError, json.JSONDecodeError) as exc:
            raise BlueprintConfigError(file_path, str(exc)) from exc
        if not isinstance(raw, dict):
            raise BlueprintConfigError(file_path, "expected a JSON object")
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise BlueprintConfigError(file_path, str(exc)) from exc


# ---------------------------------------------------------------------------
# Blueprint
# ---------------------------------------------------------------------------


class Blueprint:
    """A named blueprint rooted at *location*."""

    def __init__(
        self,
        name: str,
        location: str | Path,
        *,
        config_file: str = "blueprint.json",
        instance_dir: str = "files/__blueprintInstance__",
        runner: HookRunner | None = None,
    ) -> None:
        self.name = name
        self.location = Path(location)
        self.config_path = self.location / config_file
        self.files_path = self.location / instance_dir
        self.runner = runner or HookRunner()
        self._config: BlueprintConfig | None = None

    def __repr__(self) -> str:
        return f"Blueprint(name={self.name!r}, location={str(self.location)!r})"

    @property
    def config(self) -> BlueprintConfig:
        """The parsed ``blueprint.json``, read on first access."""
        if self._config is None:
            self._config = BlueprintConfig.load(self.config_path)
        return self._config

    # -- Lifecycle ---------------------------------------------------------

    async def pre_generate(self, destination: str | Path, data: Mapping[str, Any]) -> list[Path]:
        """Run the ``preGenerate`` hooks."""
        return await self.runner.run(
            self.config.pre_generate, data, base_path=self.location, phase="preGenerate"
        )

    async def generate(self, destination: str | Path, data: Mapping[str, Any]) -> ScaffoldResult:
        """Render the instance template into *destination*."""
        return await scaffold(self.files_path, destination, data)

    async def post_generate(self, destination: str | Path, data: Mapping[str, Any]) -> list[Path]:
        """Run the ``postGenerate`` hooks."""
        return await self.runner.run(
            self.config.post_generate, data, base_path=self.location, phase="postGenerate"
        )


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def _make_blueprint(name: str, location: Path, config: Config) -> Blueprint:
    return Blueprint(
        name,
        location,
        config_file=config.blueprint_file,
        instance_dir=config.instance_dir,
    )


def find_blueprint(name: str, config: Config) -> Blueprint | None:
    """Locate *name*, preferring the project blueprints over global ones."""
    for global_ in (False, True):
        location = config.blueprint_path(name, global_=global_)
        if location.exists():
            return _make_blueprint(name, location, config)
    return None


def _blueprints_in(root: Path, config: Config) -> list[Blueprint]:
    if not root.is_dir():
        return []
    return [
        _make_blueprint(entry.name, entry.resolve(), config)
        for entry in sorted(root.iterdir(), key=lambda p: p.name)
        if entry.is_dir() and entry.name not in EXCLUDED_NAMES
    ]


def discover_blueprints(config: Config, namespace: str = "") -> dict[str, list[Blueprint]]:
    """Return the global and project blueprints found under *namespace*."""
    return {
        "global": _blueprints_in(config.global_blueprints_path / namespace, config),
        "project": _blueprints_in(config.project_blueprints_path / namespace, config),
    }
