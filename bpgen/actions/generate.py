"""Generate a blueprint instance.

Runs the three lifecycle phases in order, each fully completing before the
next starts: ``preGenerate`` hooks, scaffolding, ``postGenerate`` hooks.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType

from bpgen.blueprint import find_blueprint
from bpgen.config import Config
from bpgen.errors import BlueprintError, InvalidInstanceNameError
from bpgen.scaffolder import derive_metadata
from bpgen.utils import LogBuffer, get_template_data

from .result import ActionResult


def _file_tree(paths: Iterable[Path], root: Path) -> dict[str, dict]:
    tree: dict[str, dict] = {}
    for path in paths:
        if not path.is_relative_to(root):
            continue
        node = tree
        for part in path.relative_to(root).parts:
            node = node.setdefault(part, {})
    return tree


async def generate(
    blueprint_name: str,
    instance_name: str,
    *,
    destination: str | Path | None = None,
    args: Iterable[str] = (),
    config: Config | None = None,
    log: LogBuffer | None = None,
) -> ActionResult:
    """Generate *instance_name* from the blueprint called *blueprint_name*.

    Args:
        blueprint_name: Name of a project or global blueprint.
        instance_name: Name of the new instance; drives every naming variant.
        destination: Output root (defaults to the current directory).
        args: Positional ``key=value`` / ``key[i]=value`` template arguments.
        config: Blueprint locations; built from the environment if omitted.
        log: Buffer collecting the output of this call.

    Returns:
        An :class:`ActionResult`; ``success`` is ``False`` for a missing
        blueprint, an empty instance name, or any configuration or
        generation error.
    """
    config = config or Config.from_env()
    log = log or LogBuffer(quiet=config.quiet)
    log.clear()

    try:
        if not instance_name or not instance_name.strip():
            raise InvalidInstanceNameError(instance_name)

        blueprint = find_blueprint(blueprint_name, config)
        if blueprint is None:
            log.error(f"Blueprint not found: {blueprint_name}")
            return ActionResult(success=False, output=log.output())

        target = Path(destination) if destination is not None else config.current_path
        if not target.is_absolute():
            target = config.current_path / target

        # blueprint defaults < template arguments < derived names
        data = MappingProxyType(
            {
                **blueprint.config.data,
                **get_template_data(args),
                **derive_metadata(instance_name, blueprint_name, target),
            }
        )

        await blueprint.pre_generate(target, data)
        log.success("executed preGenerate hook")

        result = await blueprint.generate(target, data)
        log.success("generated instance")
        if result.written:
            log.tree(_file_tree(result.written, result.destination), str(result.destination))

        await blueprint.post_generate(target, data)
        log.success("executed postGenerate hook")
    except BlueprintError as exc:
        log.error(exc)
        return ActionResult(success=False, output=log.output())

    log.success(f"Generated {instance_name} based on the {blueprint_name} blueprint")
    return ActionResult(success=True, output=log.output())
