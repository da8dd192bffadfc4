"""Exception hierarchy shared by the blueprint engine and its actions.

Every error the tool raises on purpose derives from :class:`BlueprintError`
so the action layer can turn expected failures into readable messages while
letting anything else propagate untouched.
"""

from __future__ import annotations

from pathlib import Path


class BlueprintError(Exception):
    """Base class for all expected blueprint failures."""


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------


class ConfigurationError(BlueprintError):
    """Raised when a blueprint or its configuration is unusable."""


class BlueprintConfigError(ConfigurationError):
    """Raised when ``blueprint.json`` cannot be parsed or validated."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Invalid blueprint configuration {self.path}: {reason}")


class BlueprintExistsError(ConfigurationError):
    """Raised when creating a blueprint whose location is already taken."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A blueprint named {name} already exists")


class HookNotFoundError(ConfigurationError):
    """Raised when a configured hook script does not exist."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Hook script not found: {self.path}")


class InvalidHookError(ConfigurationError):
    """Raised when a hook script does not expose a usable ``run`` callable."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Invalid hook script {self.path}: {reason}")


# ---------------------------------------------------------------------------
# Generation errors
# ---------------------------------------------------------------------------


class GenerationError(BlueprintError):
    """Raised when a lifecycle phase fails irrecoverably."""

    def __init__(self, phase: str, message: str) -> None:
        self.phase = phase
        super().__init__(f"{phase}: {message}")


class ScaffoldError(GenerationError):
    """Raised when the template tree cannot be read, rendered or written."""

    def __init__(self, message: str) -> None:
        super().__init__("generate", message)


class HookExecutionError(GenerationError):
    """Raised when a hook script raises while running."""

    def __init__(self, phase: str, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(phase, f"hook {self.path.name} failed: {reason}")


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------


class InvalidInstanceNameError(BlueprintError):
    """Raised when the requested instance name is empty."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        super().__init__("requires an instance name")
