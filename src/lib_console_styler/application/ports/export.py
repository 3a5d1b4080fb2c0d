"""Export port defining history snapshot contracts."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from lib_console_styler.domain.entry import LogEntry


@runtime_checkable
class ExportPort(Protocol):
    """Serialise history snapshots into the JSON export document.

    Examples
    --------
    >>> class Recorder:
    ...     def export(self, entries, *, namespace=None, path=None, export_time=None):
    ...         return f"{len(list(entries))}:{namespace}"
    ...     def parse(self, payload):
    ...         return None, []
    >>> isinstance(Recorder(), ExportPort)
    True
    """

    def export(
        self,
        entries: Sequence[LogEntry],
        *,
        namespace: str | None = None,
        path: Path | None = None,
        export_time: datetime | None = None,
    ) -> str:
        """Render ``entries`` and optionally persist them to ``path``."""

    def parse(self, payload: str) -> tuple[str | None, list[LogEntry]]:
        """Return the namespace and entries contained in an export document."""


__all__ = ["ExportPort"]
