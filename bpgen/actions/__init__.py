"""Caller-facing actions: generate, create and list blueprints.

Each action logs into a :class:`~bpgen.utils.LogBuffer` scoped to the call
and returns an :class:`ActionResult` whose ``output`` is the buffered text.
Expected failures are reported in the result; unexpected exceptions
propagate.
"""

from bpgen.actions.create import create_blank, create_from_directory
from bpgen.actions.generate import generate
from bpgen.actions.listing import list_blueprints
from bpgen.actions.result import ActionResult

__all__ = [
    "ActionResult",
    "create_blank",
    "create_from_directory",
    "generate",
    "list_blueprints",
]
