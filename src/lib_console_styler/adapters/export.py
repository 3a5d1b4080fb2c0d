"""History export adapter producing the JSON export document.

Outputs
-------
``{"exportTime": ISO-8601, "namespace": str | null, "logs": [entry, ...]}``
where each entry is :meth:`LogEntry.to_dict` output (ISO-8601 timestamps,
metadata in insertion order).

Purpose
-------
Turn history snapshots into shareable artefacts and read them back, without
depending on plugins.

Contents
--------
* :class:`HistoryExporter` – implementation of :class:`ExportPort`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from lib_console_styler.application.ports.export import ExportPort
from lib_console_styler.domain.entry import LogEntry


def _export_default(value: Any) -> Any:
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class HistoryExporter(ExportPort):
    """Render history snapshots as JSON and parse them back.

    Examples
    --------
    >>> from lib_console_styler.domain.levels import LogLevel
    >>> entry = LogEntry(datetime(2025, 1, 1, tzinfo=timezone.utc), LogLevel.INFO, 'ready', {'port': 8080})
    >>> exporter = HistoryExporter(indent=None)
    >>> text = exporter.export([entry], namespace='api', export_time=datetime(2025, 1, 2, tzinfo=timezone.utc))
    >>> text
    '{"exportTime": "2025-01-02T00:00:00+00:00", "namespace": "api", "logs": [{"timestamp": "2025-01-01T00:00:00+00:00", "level": "info", "message": "ready", "metadata": {"port": 8080}}]}'
    >>> exporter.parse(text) == ('api', [entry])
    True
    """

    def __init__(self, *, indent: int | None = 2) -> None:
        self._indent = indent

    def export(
        self,
        entries: Sequence[LogEntry],
        *,
        namespace: str | None = None,
        path: Path | None = None,
        export_time: datetime | None = None,
    ) -> str:
        """Serialise ``entries`` and write them to ``path`` when given."""

        moment = export_time if export_time is not None else datetime.now(timezone.utc)
        document = {
            "exportTime": moment.isoformat(),
            "namespace": namespace,
            "logs": [entry.to_dict() for entry in entries],
        }
        payload = json.dumps(document, indent=self._indent, ensure_ascii=False, default=_export_default)
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(payload, encoding="utf-8")
        return payload

    def parse(self, payload: str) -> tuple[str | None, list[LogEntry]]:
        """Return ``(namespace, entries)`` from an export document.

        Raises
        ------
        ValueError
            When ``payload`` is not JSON or lacks the ``logs`` array.
        """

        try:
            document = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ValueError(f"export payload is not valid JSON: {exc}") from exc
        if not isinstance(document, dict) or not isinstance(document.get("logs"), list):
            raise ValueError("export payload must be an object with a 'logs' array")
        entries = [LogEntry.from_dict(item) for item in document["logs"]]
        return document.get("namespace"), entries

    def load(self, path: Path) -> tuple[str | None, list[LogEntry]]:
        """Read and parse an export document stored at ``path``."""

        return self.parse(path.read_text(encoding="utf-8"))


__all__ = ["HistoryExporter"]
