"""Click command-line interface for lib_console_styler.

Purpose
-------
Offer a small operator surface: print package metadata, list the built-in
themes and preview them with a short demo run.

Contents
--------
* :func:`cli` – Click group with ``info``, ``themes`` and ``demo`` commands.
* :func:`main` – entry point delegating to ``lib_cli_exit_tools`` so errors are
  printed and mapped to exit codes consistently.

System Role
-----------
Presentation layer only; every command goes through the public runtime API.
"""

from __future__ import annotations

import os
from collections.abc import Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as styler_config
from .domain.levels import LogLevel
from .domain.palettes import THEMES
from .runtime import Logger, summary_info

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_DEMO_METADATA = {
    LogLevel.INFO: {"port": 8080, "tls": True},
    LogLevel.WARNING: {"retries": 3, "backoff_ms": 250},
    LogLevel.ERROR: {"error": "connection refused", "code": None},
}


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before running (overrides {styler_config.DOTENV_ENV_VAR}).",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool | None, traceback: bool) -> None:
    """Structured, themeable console logging."""

    env_toggle = os.environ.get(styler_config.DOTENV_ENV_VAR)
    if styler_config.should_use_dotenv(explicit=use_dotenv, env_value=env_toggle):
        styler_config.enable_dotenv()
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("themes", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_themes() -> None:
    """List built-in themes with their level symbols."""

    for name in sorted(THEMES):
        theme = THEMES[name]
        symbols = " ".join(theme.symbol_for(level) for level in LogLevel)
        click.echo(f"{name:<10} {symbols}")


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--theme",
    type=click.Choice(sorted(THEMES), case_sensitive=False),
    default=None,
    help="Theme to preview (default: STYLER_THEME or 'default').",
)
@click.option(
    "--level",
    type=click.Choice([level.severity for level in LogLevel], case_sensitive=False),
    default=None,
    help="Minimum level to emit (default: STYLER_LOG_LEVEL or 'debug').",
)
def cli_demo(theme: str | None, level: str | None) -> None:
    """Emit one sample entry per level using the selected theme."""

    builder = styler_config.builder_from_env()
    if theme is not None:
        builder.theme(theme)
    if level is not None:
        builder.log_level(level)
    config = builder.build()

    click.echo(f"=== Theme: {config.theme.name} ===")
    logger = Logger(config).child("demo")
    emitted = 0
    for sample in LogLevel:
        entry = logger.log(sample, f"{sample.severity} sample", _DEMO_METADATA.get(sample))
        if entry is not None:
            emitted += 1
    logger.shutdown()
    click.echo(f"emitted {emitted} entries")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI through ``lib_cli_exit_tools`` and return the exit code.

    Traceback preferences toggled by ``--traceback`` are restored afterwards
    so embedding callers keep their own settings.
    """

    previous_traceback = lib_cli_exit_tools.config.traceback
    previous_force_color = lib_cli_exit_tools.config.traceback_force_color
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
