"""Error types shared across the console styler layers.

Contents
--------
* :class:`ConfigurationError` – invalid configuration input, raised at build time.
* :class:`EngineError` – non-fatal failure record delivered to the error channel.
* :class:`PluginShutdownError` – aggregate of plugin shutdown failures.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ConfigurationError(ValueError):
    """Raised when builder or override input is invalid."""


class ErrorStage(Enum):
    """Pipeline stage in which a non-fatal failure happened."""

    INITIALIZE = "initialize"
    OBSERVE = "observe"
    SHUTDOWN = "shutdown"
    REGISTER = "register"
    RENDER = "render"


@dataclass(slots=True, frozen=True)
class EngineError:
    """Recoverable failure surfaced through a logger's error channel.

    Attributes
    ----------
    stage:
        Where the failure happened.
    source:
        Name of the failing plugin, or ``"renderer"`` for render failures.
    error:
        The exception that was caught.
    """

    stage: ErrorStage
    source: str
    error: BaseException

    def describe(self) -> str:
        """Return the one-line description used by the default error channel.

        Examples
        --------
        >>> EngineError(ErrorStage.OBSERVE, "audit", ValueError("disk full")).describe()
        '[plugin:audit] observe failed: disk full'
        """

        detail = str(self.error) or type(self.error).__name__
        if self.stage is ErrorStage.RENDER:
            return f"[{self.source}] render failed: {detail}"
        return f"[plugin:{self.source}] {self.stage.value} failed: {detail}"


class PluginShutdownError(RuntimeError):
    """Raised by ``shutdown`` after termination when plugin hooks failed."""

    def __init__(self, failures: list[EngineError]) -> None:
        self.failures = list(failures)
        names = ", ".join(failure.source for failure in self.failures)
        super().__init__(f"{len(self.failures)} plugin shutdown hook(s) failed: {names}")


__all__ = ["ConfigurationError", "EngineError", "ErrorStage", "PluginShutdownError"]
