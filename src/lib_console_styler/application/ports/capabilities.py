"""Port for terminal capability detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(slots=True, frozen=True)
class Capabilities:
    """What the output target claims to support.

    ``color_system`` is ``None`` when no colour is available, otherwise one of
    ``"standard"``, ``"256"``, ``"truecolor"`` or ``"windows"``.
    """

    color: bool = False
    emoji: bool = False
    unicode: bool = False
    color_system: str | None = None
    interactive: bool = False


UNSUPPORTED = Capabilities()


@runtime_checkable
class CapabilityPort(Protocol):
    """Detect colour, emoji and unicode support for the current output target."""

    def detect(self) -> Capabilities:
        """Return the detected capabilities; must never raise."""


__all__ = ["Capabilities", "CapabilityPort", "UNSUPPORTED"]
