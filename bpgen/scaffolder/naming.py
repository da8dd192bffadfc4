"""Naming-convention metadata derived from a blueprint instance name."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import inflection

__all__ = ["DESTINATION_KEY", "derive_metadata"]


DESTINATION_KEY = "blueprintInstanceDestination"
_CONSTANT_KEY = "blueprintInstance_ConstantFormat"


def _classify(name: str) -> str:
    """``my_things`` -> ``MyThing``."""
    return inflection.singularize(inflection.camelize(name))


def _camel(name: str) -> str:
    # inflection indexes the first character when lowering it
    return inflection.camelize(name, False) if name else ""


def _dashed(name: str) -> str:
    return inflection.dasherize(inflection.underscore(name)).lower()


def derive_metadata(
    instance_name: str,
    blueprint_name: str,
    destination: str | Path | None = None,
) -> dict[str, Any]:
    """Build the template data for *instance_name*.

    Dashes are normalised to underscores first, so ``my-thing`` and
    ``my_thing`` yield the same variants. Every key except the destination
    also gets ``<key>Pluralized`` and ``<key>Singularized`` counterparts.
    """
    standard = instance_name.replace("-", "_")

    data: dict[str, Any] = {
        "blueprint": blueprint_name,
        "blueprintInstance": instance_name,
        DESTINATION_KEY: str(destination) if destination is not None else None,
        "blueprintInstance_ClassFormat": _classify(standard),
        "blueprintInstance_DashedFormat": _dashed(standard),
        "blueprintInstance_SlugFormat": _dashed(standard),
        "blueprintInstance_CamelCaseFormat": _camel(standard),
        "blueprintInstance_PascalCaseFormat": inflection.camelize(standard),
        _CONSTANT_KEY: inflection.underscore(standard).upper(),
        "blueprintInstance_SnakeCaseFormat": inflection.underscore(standard),
    }

    variants: dict[str, Any] = {}
    for key, value in data.items():
        if key == DESTINATION_KEY:
            continue
        if key == _CONSTANT_KEY:
            lowered = value.lower()
            variants[f"{key}Pluralized"] = inflection.pluralize(lowered).upper()
            variants[f"{key}Singularized"] = inflection.singularize(lowered).upper()
        else:
            variants[f"{key}Pluralized"] = inflection.pluralize(value)
            variants[f"{key}Singularized"] = inflection.singularize(value)

    return {**data, **variants}
