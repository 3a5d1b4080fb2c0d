"""Test doubles shared across the suite."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

from lib_console_styler.domain import LogEntry, StylerConfig

PLAIN = {"color_mode": "disabled", "emoji_mode": "disabled", "unicode_mode": "disabled"}
"""Config overrides producing deterministic plain output."""


class FixedClock:
    """Clock returning a controllable instant."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current = self.current + timedelta(seconds=seconds)


class RecordingPlugin:
    """Plugin recording every hook invocation."""

    version = "1.0"

    def __init__(self, name: str = "recorder") -> None:
        self.name = name
        self.initialized: list[StylerConfig] = []
        self.observed: list[LogEntry] = []
        self.shutdowns = 0

    def initialize(self, config: StylerConfig) -> None:
        self.initialized.append(config)

    def observe(self, entry: LogEntry) -> None:
        self.observed.append(entry)

    def shutdown(self) -> None:
        self.shutdowns += 1


class FailingPlugin:
    """Plugin whose hooks all raise."""

    version = "0.1"

    def __init__(self, name: str = "broken") -> None:
        self.name = name

    def initialize(self, config: StylerConfig) -> None:
        raise RuntimeError("initialize exploded")

    def observe(self, entry: LogEntry) -> None:
        raise RuntimeError("observe exploded")

    def shutdown(self) -> None:
        raise RuntimeError("shutdown exploded")


class DelayedShutdownPlugin:
    """Plugin whose asynchronous shutdown takes ``delay`` seconds."""

    version = "2.0"

    def __init__(self, name: str = "slow", delay: float = 0.05) -> None:
        self.name = name
        self.delay = delay
        self.completed = False

    async def shutdown(self) -> None:
        await asyncio.sleep(self.delay)
        self.completed = True


class AsyncObserverPlugin:
    """Plugin with an asynchronous observe hook."""

    version = "1.0"

    def __init__(self, name: str = "async-observer", delay: float = 0.0) -> None:
        self.name = name
        self.delay = delay
        self.observed: list[LogEntry] = []

    async def observe(self, entry: LogEntry) -> None:
        await asyncio.sleep(self.delay)
        self.observed.append(entry)
