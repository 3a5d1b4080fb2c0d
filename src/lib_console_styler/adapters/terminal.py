"""Terminal capability detection backed by Rich's console probing.

Purpose
-------
Answer "may we use colour, emoji and box-drawing glyphs here?" for the
``auto`` output modes without the engine knowing how terminals are detected.

Contents
--------
* :class:`TerminalCapabilityDetector` – implementation of :class:`CapabilityPort`.

System Role
-----------
Consulted by the render use case only when at least one configured mode is
``auto``. Rich already understands ``FORCE_COLOR``, ``NO_COLOR``,
``TERM=dumb``, ``COLORTERM`` and TTY detection, so the detector reads those
answers from a throwaway :class:`rich.console.Console` bound to the stream.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

from rich.console import Console

from lib_console_styler.application.ports.capabilities import UNSUPPORTED, Capabilities, CapabilityPort

LOGGER = logging.getLogger(__name__)

_LOCALE_VARIABLES = ("LC_ALL", "LC_CTYPE", "LANG")


def _locale_claims_utf8() -> bool:
    for name in _LOCALE_VARIABLES:
        value = os.environ.get(name, "").lower()
        if value:
            return "utf-8" in value or "utf8" in value
    return False


class TerminalCapabilityDetector(CapabilityPort):
    """Detect colour, emoji and unicode support of an output stream.

    Results are cached per instance because the terminal class does not change
    mid-run; call :meth:`refresh` to probe again.
    """

    def __init__(self, *, stream: TextIO | None = None, cache: bool = True) -> None:
        self._stream = stream
        self._cache = cache
        self._cached: Capabilities | None = None

    def detect(self) -> Capabilities:
        """Return the capabilities of the stream; never raises."""

        if self._cache and self._cached is not None:
            return self._cached
        try:
            capabilities = self._probe()
        except Exception:  # pragma: no cover - exotic stream implementations
            LOGGER.debug("capability probe failed; assuming a plain stream", exc_info=True)
            capabilities = UNSUPPORTED
        if self._cache:
            self._cached = capabilities
        return capabilities

    def refresh(self) -> None:
        """Forget the cached result so the next :meth:`detect` probes again."""
        self._cached = None

    def _probe(self) -> Capabilities:
        stream = self._stream if self._stream is not None else sys.stdout
        console = Console(file=stream)
        interactive = console.is_terminal
        color_system = console.color_system
        color = color_system is not None and not console.no_color
        unicode = _locale_claims_utf8() or console.encoding.startswith("utf")
        return Capabilities(
            color=color,
            emoji=interactive and unicode,
            unicode=unicode,
            color_system=color_system if color else None,
            interactive=interactive,
        )


__all__ = ["TerminalCapabilityDetector"]
