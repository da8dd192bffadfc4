"""bpgen scaffolder -- renders blueprint template trees.

Takes a blueprint's instance template directory and writes a rendered copy
of it, substituting ``__name__`` placeholders in paths and ``{{ name }}``
placeholders in file content.

Quick usage::

    from bpgen.scaffolder import derive_metadata, scaffold

    data = derive_metadata("user-profile", "component", destination="src")
    result = await scaffold(".blueprints/component/files/__blueprintInstance__", "src", data)
"""

from bpgen.scaffolder.generator import ScaffoldResult, scaffold
from bpgen.scaffolder.naming import DESTINATION_KEY, derive_metadata
from bpgen.scaffolder.placeholders import (
    CONTENT_PATTERN,
    FILENAME_PATTERN,
    MISSING,
    render,
    resolve_path,
)
from bpgen.scaffolder.templates import SkeletonRenderer

__all__ = [
    "CONTENT_PATTERN",
    "DESTINATION_KEY",
    "FILENAME_PATTERN",
    "MISSING",
    "ScaffoldResult",
    "SkeletonRenderer",
    "derive_metadata",
    "render",
    "resolve_path",
    "scaffold",
]
