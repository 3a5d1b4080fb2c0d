"""Console port describing terminal emission contracts.

Purpose
-------
Define the abstraction for adapters that render log entries to a terminal,
letting the logger depend on a narrow protocol.

Contents
--------
* :class:`ConsolePort` – runtime-checkable protocol with ``emit`` for entries
  and ``emit_fallback`` for degraded output.

System Role
-----------
Clarifies the console-facing boundary so the Rich adapter (or a test double)
can plug in without leaking rendering details into the engine.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.settings import StylerConfig


@runtime_checkable
class ConsolePort(Protocol):
    """Render a log entry (and its metadata block) as one atomic write."""

    def emit(self, entry: LogEntry, config: StylerConfig, *, colorize: bool, emoji: bool) -> None:
        """Render ``entry`` using ``config``'s theme, timestamp format and indent."""

    def emit_fallback(self, entry: LogEntry, config: StylerConfig) -> None:
        """Render ``entry`` without colour and with raw ``key=value`` metadata."""


__all__ = ["ConsolePort"]
