"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

from typing import Callable

name = "lib_console_styler"
title = "Structured, themeable console logging with plugins and bounded history"
version = "0.1.0"
author = "lib_console_styler maintainers"
shell_command = "console-styler"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Emit the metadata banner line by line.

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for lib_console_styler:\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    width = max(len(label) for label, _ in fields)
    emit = writer if writer is not None else (lambda text: print(text, end=""))
    emit(f"Info for {name}:\n")
    emit("\n")
    for label, value in fields:
        emit(f"    {label.ljust(width)} = {value}\n")
