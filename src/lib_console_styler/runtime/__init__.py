"""Runtime façade owning the process-wide default logger.

Purpose
-------
Expose a stable entry point (``init``, ``get``, ``shutdown``) for hosts that
want one shared logger instead of passing :class:`Logger` instances around.
The default instance is an explicit singleton created by the composition root
(``init``) and torn down by ``shutdown``; nothing is created implicitly on
import.

Contents
--------
* ``init`` – build and install the default logger.
* ``get`` – return the default logger or a namespaced child of it.
* ``shutdown`` / ``shutdown_async`` – deterministic teardown paths.
* ``summary_info`` – metadata banner used by the CLI.

System Role
-----------
Outer shell over :mod:`lib_console_styler.runtime.logger`; applications that
need several independent loggers construct :class:`Logger` directly.
"""

from __future__ import annotations

import asyncio
from typing import Any

from lib_console_styler.application.ports import CapabilityPort, ClockPort, ConsolePort, ExportPort
from lib_console_styler.domain import StylerConfig

from ._factories import SystemClock
from ._state import clear_default, current_default, is_initialised, set_default
from .logger import ErrorCallback, Logger, LoggerState


def init(
    config: StylerConfig | None = None,
    *,
    namespace: str | None = None,
    console: ConsolePort | None = None,
    detector: CapabilityPort | None = None,
    clock: ClockPort | None = None,
    exporter: ExportPort | None = None,
    on_error: ErrorCallback | None = None,
    **overrides: Any,
) -> Logger:
    """Create the default logger and install it.

    Why
    ---
    Hosts call ``init`` once during startup; libraries then reach the shared
    logger through :func:`get` without knowing how it was configured.

    Inputs
    ------
    config:
        Base configuration; defaults to :class:`StylerConfig` defaults.
    **overrides:
        Field overrides applied on top of ``config`` (validated like the
        builder).
    console, detector, clock, exporter, on_error:
        Optional collaborators forwarded to :class:`Logger`.

    Side Effects
    ------------
    Raises :class:`RuntimeError` if a default logger is already installed.
    """

    if is_initialised():
        raise RuntimeError(
            "lib_console_styler.init() cannot be called twice without shutdown(); call lib_console_styler.shutdown() first",
        )
    base = config if config is not None else StylerConfig()
    logger = Logger(
        base.with_overrides(**overrides),
        namespace,
        console=console,
        detector=detector,
        clock=clock,
        exporter=exporter,
        on_error=on_error,
    )
    set_default(logger)
    return logger


def get(namespace: str | None = None, **overrides: Any) -> Logger:
    """Return the default logger, or a child of it for ``namespace``.

    Raises :class:`RuntimeError` when :func:`init` has not been called.
    """

    logger = current_default()
    if namespace is None and not overrides:
        return logger
    if namespace is None:
        raise ValueError("overrides require a namespace; use configure() on the default logger instead")
    return logger.child(namespace, **overrides)


def shutdown() -> None:
    """Shut the default logger down and clear it synchronously.

    Raises :class:`RuntimeError` when invoked inside a running loop to steer
    callers to :func:`shutdown_async`.
    """

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError(
            "lib_console_styler.shutdown() cannot run inside an active event loop; await lib_console_styler.shutdown_async() instead",
        )
    asyncio.run(shutdown_async())


async def shutdown_async() -> None:
    """Await plugin shutdown of the default logger and clear it.

    The default slot is cleared even when :class:`PluginShutdownError` is
    raised, so ``init`` can be called again.
    """

    logger = current_default()
    try:
        await logger.shutdown_async()
    finally:
        clear_default()


def summary_info() -> str:
    """Return the metadata banner used by the CLI ``info`` command."""

    from .. import __init__conf__

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


__all__ = [
    "ErrorCallback",
    "Logger",
    "LoggerState",
    "SystemClock",
    "get",
    "init",
    "is_initialised",
    "shutdown",
    "shutdown_async",
    "summary_info",
]
