from __future__ import annotations

import io

import pytest
from rich.console import Console

from lib_console_styler.adapters import RichConsoleAdapter
from lib_console_styler.domain import EngineError, StylerConfig
from lib_console_styler.runtime import Logger
from tests.support import PLAIN, FixedClock

_TERMINAL_VARIABLES = (
    "NO_COLOR",
    "FORCE_COLOR",
    "TTY_COMPATIBLE",
    "TTY_INTERACTIVE",
    "TERM",
    "COLORTERM",
    "COLUMNS",
    "LINES",
)

_STYLER_VARIABLES = (
    "STYLER_USE_DOTENV",
    "STYLER_LOG_LEVEL",
    "STYLER_COLOR_MODE",
    "STYLER_EMOJI_MODE",
    "STYLER_UNICODE_MODE",
    "STYLER_TIMESTAMP_FORMAT",
    "STYLER_THEME",
    "STYLER_HISTORY_ENABLED",
    "STYLER_HISTORY_SIZE",
)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep terminal detection and STYLER_* overrides independent of the host shell."""

    for name in _TERMINAL_VARIABLES + _STYLER_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def record_console() -> Console:
    return Console(file=io.StringIO(), record=True, width=200, force_terminal=True, color_system="truecolor")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def errors() -> list[EngineError]:
    return []


@pytest.fixture
def make_logger(record_console: Console, clock: FixedClock, errors: list[EngineError]):
    """Return a factory building loggers wired to the recording console."""

    def factory(namespace: str | None = None, *, collect_errors: bool = True, **overrides: object) -> Logger:
        settings = dict(PLAIN)
        settings.update(overrides)
        return Logger(
            StylerConfig(**settings),
            namespace,
            console=RichConsoleAdapter(console=record_console),
            clock=clock,
            on_error=errors.append if collect_errors else None,
        )

    return factory
