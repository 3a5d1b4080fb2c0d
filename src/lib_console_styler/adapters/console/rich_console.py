"""Rich-powered console adapter implementing :class:`ConsolePort`.

Purpose
-------
Turn log entries into terminal lines: ``[timestamp] symbol message`` styled
with the theme's level colour, followed by an indented JSON metadata block.

Contents
--------
* :class:`RichConsoleAdapter` – adapter constructed by the logger.

System Role
-----------
Primary human-facing sink. Every entry (line plus metadata) is assembled as a
single :class:`rich.text.Text` and written with one ``print`` call under a
lock, so concurrent log calls never interleave partial lines.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any, TextIO

from rich.console import Console
from rich.text import Text

from lib_console_styler.adapters import formatting
from lib_console_styler.application.ports.console import ConsolePort
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.settings import StylerConfig

METADATA_JSON_INDENT = 2


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:  # pragma: no cover - pathological __repr__
        return object.__repr__(value)


class RichConsoleAdapter(ConsolePort):
    """Render log entries using Rich, with colour decided per call."""

    def __init__(self, *, console: Console | None = None, stream: TextIO | None = None) -> None:
        """Bind the adapter to ``console`` or build one writing to ``stream``.

        Without either argument the console follows ``sys.stdout`` at print
        time. The console is forced into terminal mode because colour decisions
        are made by the engine, not by Rich.
        """
        if console is not None:
            self._console = console
        else:
            self._console = Console(
                file=stream,
                force_terminal=True,
                no_color=False,
                highlight=False,
                soft_wrap=True,
            )
        self._lock = threading.RLock()

    @property
    def console(self) -> Console:
        """Return the underlying Rich console."""

        return self._console

    def emit(self, entry: LogEntry, config: StylerConfig, *, colorize: bool, emoji: bool) -> None:
        """Print ``entry`` and its metadata block.

        Formatting errors (for example metadata JSON cannot represent) are
        raised before anything is written.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from io import StringIO
        >>> from lib_console_styler.domain.levels import LogLevel
        >>> entry = LogEntry(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, 'msg')
        >>> console = Console(file=StringIO(), record=True)
        >>> adapter = RichConsoleAdapter(console=console)
        >>> adapter.emit(entry, StylerConfig(), colorize=False, emoji=False)
        >>> 'msg' in console.export_text()
        True
        """

        text = self._compose_line(entry, config, colorize=colorize, emoji=emoji)
        if entry.has_metadata:
            block = self._metadata_block(entry.metadata, colorize=colorize)
            self._append_indented(text, block, config.indent_size)
        self._write(text)

    def emit_fallback(self, entry: LogEntry, config: StylerConfig) -> None:
        """Print ``entry`` plainly with ``key=repr(value)`` metadata lines."""

        text = self._compose_line(entry, config, colorize=False, emoji=False)
        if entry.has_metadata:
            rows = [f"{key}={_safe_repr(value)}" for key, value in entry.metadata.items()]
            self._append_indented(text, Text("\n".join(rows)), config.indent_size)
        self._write(text)

    @staticmethod
    def _compose_line(entry: LogEntry, config: StylerConfig, *, colorize: bool, emoji: bool) -> Text:
        """Return ``[timestamp] {symbol }message`` as styled text.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from lib_console_styler.domain.levels import LogLevel
        >>> entry = LogEntry(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.ERROR, 'boom')
        >>> line = RichConsoleAdapter._compose_line(entry, StylerConfig(), colorize=False, emoji=True)
        >>> line.plain.endswith('] ❌ boom')
        True
        """
        theme = config.theme
        stamp = formatting.timestamp(entry.timestamp.astimezone(), config.timestamp_format)
        body = f"{theme.symbol_for(entry.level)} {entry.message}" if emoji else entry.message
        text = Text()
        text.append(f"[{stamp}]", style=theme.muted if colorize else None)
        text.append(" ")
        text.append(body, style=theme.color_for(entry.level) if colorize else None)
        return text

    @staticmethod
    def _metadata_block(metadata: Mapping[str, Any], *, colorize: bool) -> Text:
        if colorize:
            return formatting.json_text(dict(metadata), METADATA_JSON_INDENT)
        return Text(formatting.json(dict(metadata), METADATA_JSON_INDENT))

    @staticmethod
    def _append_indented(text: Text, block: Text, indent: int) -> None:
        prefix = " " * indent
        for row in block.split("\n", allow_blank=True):
            text.append("\n")
            text.append(prefix)
            text.append_text(row)

    def _write(self, text: Text) -> None:
        with self._lock:
            self._console.print(text, soft_wrap=True, highlight=False, markup=False, emoji=False)


__all__ = ["RichConsoleAdapter"]
