from __future__ import annotations

from datetime import datetime, timezone

import pytest

from lib_console_styler.adapters import formatting
from lib_console_styler.adapters.console.rich_console import RichConsoleAdapter
from lib_console_styler.application.ports import ConsolePort
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.levels import LogLevel
from lib_console_styler.domain.settings import StylerConfig

MOMENT = datetime(2025, 9, 23, 12, 0, 5, tzinfo=timezone.utc)


def _entry(message: str = "hello", metadata: dict[str, object] | None = None, level: LogLevel = LogLevel.INFO) -> LogEntry:
    return LogEntry(MOMENT, level, message, metadata)


def _stamp(pattern: str = "HH:mm:ss") -> str:
    return formatting.timestamp(MOMENT.astimezone(), pattern)


def test_adapter_satisfies_console_port(record_console) -> None:
    assert isinstance(RichConsoleAdapter(console=record_console), ConsolePort)


def test_plain_line_has_timestamp_and_message(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console)
    adapter.emit(_entry(), StylerConfig(), colorize=False, emoji=False)
    assert record_console.export_text() == f"[{_stamp()}] hello\n"


def test_emoji_inserts_theme_symbol(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console)
    adapter.emit(_entry(level=LogLevel.SUCCESS), StylerConfig(), colorize=False, emoji=True)
    assert record_console.export_text() == f"[{_stamp()}] ✅ hello\n"


def test_minimal_theme_uses_ascii_symbols(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console)
    adapter.emit(_entry(level=LogLevel.ERROR), StylerConfig(theme="minimal"), colorize=False, emoji=True)
    assert record_console.export_text().endswith("] [ERR] hello\n")


def test_timestamp_format_is_honoured(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console)
    adapter.emit(_entry(), StylerConfig(timestamp_format="YYYY-MM-DD HH:mm:ss.SSS"), colorize=False, emoji=False)
    assert record_console.export_text().startswith(f"[{_stamp('YYYY-MM-DD HH:mm:ss.SSS')}] ")


@pytest.mark.parametrize("colorize", [True, False])
def test_colour_flag_controls_ansi_output(record_console, colorize: bool) -> None:
    adapter = RichConsoleAdapter(console=record_console)
    adapter.emit(_entry(metadata={"port": 8080}), StylerConfig(), colorize=colorize, emoji=False)
    styled = record_console.export_text(styles=True, clear=False)
    assert ("\x1b[" in styled) is colorize
    assert "hello" in record_console.export_text()


def test_metadata_block_is_indented_json(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console)
    adapter.emit(_entry(metadata={"port": 8080, "tls": True}), StylerConfig(indent_size=4), colorize=False, emoji=False)
    lines = record_console.export_text().splitlines()
    assert lines[1:] == ["    {", '      "port": 8080,', '      "tls": true', "    }"]


def test_empty_metadata_writes_no_block(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console)
    adapter.emit(_entry(metadata={}), StylerConfig(), colorize=False, emoji=False)
    adapter.emit_fallback(_entry("plain", metadata={}), StylerConfig())
    assert record_console.export_text() == f"[{_stamp()}] hello\n[{_stamp()}] plain\n"

def test_messages_with_brackets_are_not_treated_as_markup(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console)
    adapter.emit(_entry("[a:b] [bold]literal[/bold]"), StylerConfig(), colorize=True, emoji=False)
    assert "[a:b] [bold]literal[/bold]" in record_console.export_text()


def test_unserialisable_metadata_raises_before_writing(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console)
    with pytest.raises(TypeError):
        adapter.emit(_entry(metadata={"handle": object()}), StylerConfig(), colorize=False, emoji=False)
    assert record_console.export_text() == ""


def test_fallback_writes_key_repr_lines(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console)
    adapter.emit_fallback(_entry(metadata={"path": "a b", "count": 2}), StylerConfig())
    lines = record_console.export_text().splitlines()
    assert lines == [f"[{_stamp()}] hello", "  path='a b'", "  count=2"]
