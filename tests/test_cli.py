"""CLI behaviour coverage for the click command group."""

from __future__ import annotations

import re
import sys
from typing import Callable

import click
import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from lib_console_styler import __init__conf__
from lib_console_styler import cli as cli_mod
from lib_console_styler.runtime import summary_info

_ESCAPES = re.compile(r"\x1b\[[0-9;]*m")


def _strip_styles(text: str) -> str:
    return _ESCAPES.sub("", text)


def run_cli(args: list[str] | None = None, env: dict[str, str] | None = None) -> tuple[int, str, BaseException | None]:
    """Invoke the click group with ``CliRunner`` and capture output."""

    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, args or [], prog_name=__init__conf__.shell_command, env=env)
    return result.exit_code, result.output, result.exception


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == summary_info()


def test_cli_info_command_matches_summary() -> None:
    exit_code, stdout, _ = run_cli(["info"])

    assert exit_code == 0
    assert stdout == summary_info()


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert __init__conf__.version in stdout


def test_cli_themes_lists_builtin_themes() -> None:
    exit_code, stdout, _ = run_cli(["themes"])

    assert exit_code == 0
    names = [line.split()[0] for line in stdout.splitlines()]
    assert names == ["default", "dracula", "minimal", "neon"]
    assert "[WRN]" in stdout


def test_cli_demo_emits_one_entry_per_level() -> None:
    exit_code, stdout, exception = run_cli(["demo", "--theme", "neon"])

    assert exception is None
    assert exit_code == 0
    plain = _strip_styles(stdout)
    assert "=== Theme: neon ===" in plain
    assert "[demo] debug sample" in plain
    assert "[demo] critical sample" in plain
    assert '"port": 8080' in plain
    assert "emitted 6 entries" in plain


def test_cli_demo_level_filters_entries() -> None:
    exit_code, stdout, _ = run_cli(["demo", "--level", "error"])

    assert exit_code == 0
    plain = _strip_styles(stdout)
    assert "=== Theme: default ===" in plain
    assert "info sample" not in plain
    assert "emitted 2 entries" in plain


def test_cli_demo_reads_environment_overrides() -> None:
    exit_code, stdout, _ = run_cli(["demo"], env={"STYLER_THEME": "dracula", "STYLER_LOG_LEVEL": "critical"})

    assert exit_code == 0
    plain = _strip_styles(stdout)
    assert "=== Theme: dracula ===" in plain
    assert "emitted 1 entries" in plain


def test_cli_demo_rejects_unknown_theme() -> None:
    exit_code, stdout, _ = run_cli(["demo", "--theme", "sepia"])

    assert exit_code == 2
    assert "sepia" in stdout


def _traceback_flags() -> tuple[bool, bool]:
    return lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color


@pytest.fixture
def pin_traceback(monkeypatch: pytest.MonkeyPatch) -> Callable[[bool], None]:
    """Return a setter that pins both traceback flags for the current test."""

    def pin(value: bool) -> None:
        for flag in ("traceback", "traceback_force_color"):
            monkeypatch.setattr(lib_cli_exit_tools.config, flag, value, raising=False)

    return pin


def test_cli_no_traceback_option(pin_traceback: Callable[[bool], None]) -> None:
    pin_traceback(True)

    exit_code, _, _ = run_cli(["--no-traceback", "info"])

    assert exit_code == 0
    assert _traceback_flags() == (False, False)


def test_main_restores_traceback_preferences(monkeypatch: pytest.MonkeyPatch, pin_traceback: Callable[[bool], None]) -> None:
    pin_traceback(False)
    seen: list[tuple[bool, bool]] = []

    def fake_run_cli(command: click.Command, argv: list[str] | None = None, *, prog_name: str | None = None, **_: object) -> int:
        outcome = CliRunner().invoke(command, argv or [], prog_name=prog_name)
        if outcome.exception is not None:
            raise outcome.exception
        seen.append(_traceback_flags())
        return outcome.exit_code

    monkeypatch.setattr(lib_cli_exit_tools, "run_cli", fake_run_cli)

    assert cli_mod.main(["--traceback", "themes"]) == 0
    assert seen == [(True, True)]
    assert _traceback_flags() == (False, False)


def test_main_reads_sys_argv(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    pin_traceback: Callable[[bool], None],
) -> None:
    pin_traceback(False)
    monkeypatch.setattr(sys, "argv", [__init__conf__.shell_command, "info"], raising=False)

    assert cli_mod.main() == 0
    assert "Info for lib_console_styler" in capsys.readouterr().out
