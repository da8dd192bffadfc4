"""List the global and project blueprints."""

from __future__ import annotations

import asyncio

from bpgen.blueprint import Blueprint, discover_blueprints
from bpgen.config import Config
from bpgen.errors import BlueprintError
from bpgen.utils import LogBuffer

from .result import ActionResult


def _log_section(log: LogBuffer, blueprints: list[Blueprint], scope: str, long: bool) -> None:
    if not blueprints:
        log.text(f"no {scope} blueprints found")
        return
    for blueprint in blueprints:
        log.text(f"\n{blueprint.name} - {blueprint.location}")
        if long:
            try:
                description = blueprint.config.description
            except BlueprintError as exc:
                log.warning(exc)
                continue
            if description:
                log.text(f"  Description: {description}")


async def list_blueprints(
    namespace: str = "",
    *,
    long: bool = False,
    config: Config | None = None,
    log: LogBuffer | None = None,
) -> ActionResult:
    """List blueprints, optionally restricted to a *namespace* sub-directory."""
    config = config or Config.from_env()
    log = log or LogBuffer(quiet=config.quiet)
    log.clear()

    blueprints = await asyncio.to_thread(discover_blueprints, config, namespace)

    log.text("--- Global Blueprints ---")
    _log_section(log, blueprints["global"], "global", long)

    log.text("\n--- Project Blueprints ---")
    _log_section(log, blueprints["project"], "project", long)

    return ActionResult(success=True, output=log.output())
