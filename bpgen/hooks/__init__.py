"""Blueprint hook scripts: loading, injected libraries and execution."""

from bpgen.hooks.libraries import HookLibraries
from bpgen.hooks.runner import HookRunner, load_hook

__all__ = [
    "HookLibraries",
    "HookRunner",
    "load_hook",
]
