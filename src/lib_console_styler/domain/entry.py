"""Domain value describing one accepted log call.

Purpose
-------
Provide an immutable, serialisable representation of a log entry so history,
plugins, renderers and exporters all handle the same pure data object.

Contents
--------
* :class:`LogEntry` dataclass with dict/JSON helpers.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Created by the logger after level filtering; stored in the history buffer,
handed to plugin ``observe`` hooks and rendered by the console adapter.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogEntry:
    """Immutable log entry produced for every accepted log call.

    Attributes
    ----------
    timestamp:
        Time of the call in timezone-aware UTC.
    level:
        :class:`LogLevel` severity.
    message:
        Message as emitted, including the ``"[namespace] "`` prefix when the
        logger carries a namespace.
    metadata:
        Read-only copy of caller-supplied key/value pairs in insertion order,
        or ``None`` when the caller passed nothing.
    namespace:
        Colon-joined namespace of the emitting logger, kept separately so
        history can be filtered by it.
    """

    timestamp: datetime
    level: LogLevel
    message: str
    metadata: Mapping[str, Any] | None = None
    namespace: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        if self.metadata is not None:
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def has_metadata(self) -> bool:
        """Return ``True`` when the entry carries at least one metadata field."""

        return bool(self.metadata)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry to a dictionary with an ISO-8601 timestamp."""

        data: dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.severity,
            "message": self.message,
        }
        if self.metadata is not None:
            data["metadata"] = dict(self.metadata)
        if self.namespace is not None:
            data["namespace"] = self.namespace
        return data

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "LogEntry":
        """Reconstruct an entry from :meth:`to_dict` output."""

        return cls(
            timestamp=datetime.fromisoformat(payload["timestamp"]),
            level=LogLevel.from_name(payload["level"]),
            message=payload["message"],
            metadata=payload.get("metadata"),
            namespace=payload.get("namespace"),
        )


__all__ = ["LogEntry"]
