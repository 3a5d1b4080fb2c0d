"""Log level abstraction for the console styler.

Purpose
-------
Offer a domain-specific, ordered representation of the six severities the
engine understands, including the ``SUCCESS`` level that has no stdlib
counterpart.

Contents
--------
* :class:`LogLevel` enum with ordering and conversion helpers.

System Role
-----------
The logger uses the numeric values as its single filtering key; renderers and
themes use :attr:`LogLevel.severity` to look up colours and symbols.
"""

from __future__ import annotations

from enum import Enum


class LogLevel(Enum):
    """Enumerated logging levels ordered from least to most severe."""

    DEBUG = 10
    INFO = 20
    SUCCESS = 25
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @property
    def severity(self) -> str:
        """Return the lowercase severity name used by themes and exports."""

        return self.name.lower()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value >= other.value

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Return the member matching ``name`` case-insensitively.

        Examples
        --------
        >>> LogLevel.from_name(" Success ") is LogLevel.SUCCESS
        True
        >>> LogLevel.from_name("verbose")
        Traceback (most recent call last):
        ...
        ValueError: Unknown log level: 'verbose'
        """

        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def coerce(cls, level: "str | LogLevel") -> "LogLevel":
        """Normalise enum members and human-entered names into :class:`LogLevel`."""

        if isinstance(level, LogLevel):
            return level
        return cls.from_name(level)


__all__ = ["LogLevel"]
