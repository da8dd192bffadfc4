"""Create new blueprints, either blank or from an existing directory."""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from bpgen.config import Config
from bpgen.errors import BlueprintError, BlueprintExistsError
from bpgen.scaffolder import SkeletonRenderer
from bpgen.utils import LogBuffer, ensure_dir, save_json

from .result import ActionResult

HOOK_SCRIPTS = {
    "preGenerate": "scripts/pre_generate.py",
    "postGenerate": "scripts/post_generate.py",
}


async def create_blank(
    blueprint_name: str,
    *,
    global_: bool = False,
    config: Config | None = None,
    log: LogBuffer | None = None,
    renderer: SkeletonRenderer | None = None,
) -> ActionResult:
    """Create an empty blueprint with starter hook scripts."""
    config = config or Config.from_env()
    log = log or LogBuffer(quiet=config.quiet)
    renderer = renderer or SkeletonRenderer()
    log.clear()

    try:
        if not blueprint_name:
            raise BlueprintError("requires a name")

        location = config.blueprint_path(blueprint_name, global_=global_)
        if location.exists():
            raise BlueprintExistsError(blueprint_name)

        await asyncio.to_thread(ensure_dir, location / config.instance_dir)
        for phase, script in HOOK_SCRIPTS.items():
            await renderer.render_to_file(
                "hook_script.py.j2",
                location / script,
                {"blueprint_name": blueprint_name, "phase": phase},
            )
        await asyncio.to_thread(
            save_json,
            {phase: [script] for phase, script in HOOK_SCRIPTS.items()},
            location / config.blueprint_file,
        )
    except BlueprintError as exc:
        log.error(exc)
        return ActionResult(success=False, output=log.output())

    log.success(f"{blueprint_name} was created at {location}")
    return ActionResult(success=True, output=log.output())


async def create_from_directory(
    blueprint_name: str,
    *,
    source: str | Path | None = None,
    global_: bool = False,
    config: Config | None = None,
    log: LogBuffer | None = None,
) -> ActionResult:
    """Create a blueprint whose instance template is a copy of *source*.

    A failed copy removes the partially-created blueprint directory.
    """
    config = config or Config.from_env()
    log = log or LogBuffer(quiet=config.quiet)
    log.clear()

    origin = Path(source) if source else config.current_path
    if not origin.is_absolute():
        origin = config.current_path / origin

    location = config.blueprint_path(blueprint_name, global_=global_)
    if location.exists():
        log.error(BlueprintExistsError(blueprint_name))
        return ActionResult(success=False, output=log.output())
    if not origin.is_dir():
        log.error(f"Source directory not found: {origin}")
        return ActionResult(success=False, output=log.output())

    try:
        await asyncio.to_thread(save_json, {}, location / config.blueprint_file)
        await asyncio.to_thread(
            shutil.copytree,
            origin,
            location / config.instance_dir,
            ignore=_ignore_location(location),
        )
    except OSError as exc:
        await asyncio.to_thread(shutil.rmtree, location, ignore_errors=True)
        log.error(f"Could not create {blueprint_name}: {exc}")
        return ActionResult(success=False, output=log.output())

    log.success(f"{blueprint_name} was created at {location}")
    return ActionResult(success=True, output=log.output())


def _ignore_location(location: Path):
    """Skip the new blueprint itself when it sits inside the copied source."""
    resolved = location.resolve()

    def _ignore(directory: str, names: list[str]) -> list[str]:
        return [name for name in names if (Path(directory) / name).resolve() == resolved]

    return _ignore
