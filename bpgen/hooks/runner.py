"""Loading and execution of blueprint hook scripts.

A hook script is a Python file defining ``run(data, libraries)``. ``run`` may
be a plain function, executed in a worker thread, or a coroutine function,
awaited on the running loop. Scripts run one at a time in declared order.
"""

from __future__ import annotations

import asyncio
import hashlib
import importlib.util
import inspect
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from bpgen.errors import HookExecutionError, HookNotFoundError, InvalidHookError

from .libraries import HookLibraries

HookCallable = Callable[[Mapping[str, Any], HookLibraries], Any]

_ENTRY_POINT = "run"


def load_hook(path: str | Path) -> HookCallable:
    """Import the script at *path* and return its ``run`` callable.

    Raises:
        HookNotFoundError: If *path* is not a file.
        InvalidHookError: If the script cannot be imported or ``run`` is
            missing or does not accept ``(data, libraries)``.
    """
    script = Path(path)
    if not script.is_file():
        raise HookNotFoundError(script)

    digest = hashlib.sha1(str(script.resolve()).encode("utf-8")).hexdigest()[:12]
    spec = importlib.util.spec_from_file_location(f"_bpgen_hook_{digest}", script)
    if spec is None or spec.loader is None:
        raise InvalidHookError(script, "not an importable Python file")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise InvalidHookError(script, f"import failed: {exc}") from exc

    hook = getattr(module, _ENTRY_POINT, None)
    if not callable(hook):
        raise InvalidHookError(script, f"no callable '{_ENTRY_POINT}' defined")

    try:
        inspect.signature(hook).bind(None, None)
    except TypeError as exc:
        raise InvalidHookError(script, "run must accept (data, libraries)") from exc
    except ValueError:
        # builtins without an introspectable signature are passed through
        pass

    return hook


class HookRunner:
    """Runs a sequence of hook scripts against one template data mapping."""

    def __init__(self, libraries: HookLibraries | None = None) -> None:
        self.libraries = libraries or HookLibraries()

    async def run(
        self,
        scripts: Iterable[str | Path],
        data: Mapping[str, Any],
        *,
        base_path: str | Path,
        phase: str,
    ) -> list[Path]:
        """Execute *scripts* in order, resolving relative paths from *base_path*.

        Returns:
            The resolved paths of the scripts that ran.

        Raises:
            HookNotFoundError, InvalidHookError: For configuration problems.
            HookExecutionError: When a script raises; later scripts are
                skipped.
        """
        base = Path(base_path)
        view = data if isinstance(data, MappingProxyType) else MappingProxyType(dict(data))
        executed: list[Path] = []

        for script in scripts:
            path = Path(script)
            if not path.is_absolute():
                path = base / path
            hook = load_hook(path)
            await self._invoke(hook, view, path, phase)
            executed.append(path)

        return executed

    async def _invoke(
        self,
        hook: HookCallable,
        data: Mapping[str, Any],
        path: Path,
        phase: str,
    ) -> None:
        try:
            if inspect.iscoroutinefunction(hook):
                await hook(data, self.libraries)
                return
            result = await asyncio.to_thread(hook, data, self.libraries)
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            raise HookExecutionError(phase, path, str(exc) or type(exc).__name__) from exc
