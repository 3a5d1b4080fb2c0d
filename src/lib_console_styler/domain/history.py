"""Bounded history buffer storing the most recent log entries.

Purpose
-------
Provide in-memory retention for recent entries so applications can inspect
or export what was logged without relying on plugins.

Contents
--------
* :class:`HistoryBuffer` with FIFO eviction and snapshot queries.

System Role
-----------
Owned by each :class:`~lib_console_styler.runtime.logger.Logger`; feeds
``get_history`` and the JSON export adapter.
"""

from __future__ import annotations

from collections import deque
from datetime import datetime
from typing import Deque, Iterator

from .entry import LogEntry
from .levels import LogLevel


class HistoryBuffer:
    """Fixed-capacity buffer retaining the most recent :class:`LogEntry` objects.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> buffer = HistoryBuffer(max_entries=2)
    >>> for text in ("1", "2", "3"):
    ...     buffer.append(LogEntry(datetime(2025, 1, 1, tzinfo=timezone.utc), LogLevel.INFO, text))
    >>> [entry.message for entry in buffer]
    ['2', '3']
    """

    def __init__(self, *, max_entries: int) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._max_entries = max_entries
        self._buffer: Deque[LogEntry] = deque(maxlen=max_entries)

    @property
    def max_entries(self) -> int:
        """Return the configured capacity."""

        return self._max_entries

    def append(self, entry: LogEntry) -> None:
        """Append an entry, evicting the oldest one when the buffer is full."""

        self._buffer.append(entry)

    def resize(self, max_entries: int) -> None:
        """Change the capacity, keeping the newest entries that still fit."""
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        if max_entries == self._max_entries:
            return
        self._buffer = deque(self._buffer, maxlen=max_entries)
        self._max_entries = max_entries

    def snapshot(self) -> list[LogEntry]:
        """Return a copy of the current buffer state."""

        return list(self._buffer)

    def query(
        self,
        *,
        level: LogLevel | None = None,
        namespace: str | None = None,
        since: datetime | None = None,
    ) -> list[LogEntry]:
        """Return a snapshot of entries matching every supplied constraint.

        ``level`` and ``namespace`` match exactly; ``since`` keeps entries whose
        timestamp is at or after the given instant.
        """

        entries = list(self._buffer)
        if level is not None:
            entries = [entry for entry in entries if entry.level is level]
        if namespace is not None:
            entries = [entry for entry in entries if entry.namespace == namespace]
        if since is not None:
            entries = [entry for entry in entries if entry.timestamp >= since]
        return entries

    def __iter__(self) -> Iterator[LogEntry]:
        """Iterate over buffered entries from oldest to newest."""
        return iter(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)

    def clear(self) -> None:
        """Remove all buffered entries."""
        self._buffer.clear()


__all__ = ["HistoryBuffer"]
