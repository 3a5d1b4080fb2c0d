"""Default collaborators used when a logger is built without injected adapters."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TextIO

from lib_console_styler.adapters import HistoryExporter, RichConsoleAdapter, TerminalCapabilityDetector
from lib_console_styler.application.ports import CapabilityPort, ClockPort, ConsolePort, ExportPort


class SystemClock(ClockPort):
    """Concrete clock returning timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def create_console(stream: TextIO | None = None) -> ConsolePort:
    """Return the Rich console adapter writing to ``stream`` (stdout by default)."""

    return RichConsoleAdapter(stream=stream)


def create_detector(stream: TextIO | None = None) -> CapabilityPort:
    """Return a caching capability detector probing ``stream``."""

    return TerminalCapabilityDetector(stream=stream)


def create_exporter() -> ExportPort:
    return HistoryExporter()


__all__ = ["SystemClock", "create_console", "create_detector", "create_exporter"]
