"""Use case turning a stored entry into console output.

Purpose
-------
Resolve the effective colour/emoji/unicode switches for the active
configuration and hand the entry to the console port, degrading to plain
output when formatting fails.

Contents
--------
* :class:`ResolvedCapabilities` – effective output switches.
* :func:`resolve_capabilities` – combine configured modes with detection.
* :func:`create_render_entry` – factory returning the render callable.

System Role
-----------
Invoked by the logger after history append and plugin notification. A render
failure never escapes: the entry is written through the fallback path and the
failure is reported on the engine's error channel.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from lib_console_styler.application.ports.capabilities import UNSUPPORTED, CapabilityPort
from lib_console_styler.application.ports.console import ConsolePort
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.errors import EngineError, ErrorStage
from lib_console_styler.domain.settings import OutputMode, StylerConfig

from .plugins import ErrorSink

LOGGER = logging.getLogger(__name__)

RENDERER_SOURCE = "renderer"

RenderCallable = Callable[[LogEntry, StylerConfig], None]


@dataclass(slots=True, frozen=True)
class ResolvedCapabilities:
    """Output switches after applying ``auto`` detection."""

    color: bool
    emoji: bool
    unicode: bool


def _resolve(mode: OutputMode, detected: bool) -> bool:
    if mode is OutputMode.ENABLED:
        return True
    if mode is OutputMode.DISABLED:
        return False
    return detected


def resolve_capabilities(config: StylerConfig, detector: CapabilityPort) -> ResolvedCapabilities:
    """Return effective switches; the detector is consulted only for ``auto`` modes.

    Examples
    --------
    >>> class Explode:
    ...     def detect(self):
    ...         raise AssertionError('not consulted')
    >>> config = StylerConfig(color_mode='enabled', emoji_mode='disabled', unicode_mode='enabled')
    >>> resolve_capabilities(config, Explode())
    ResolvedCapabilities(color=True, emoji=False, unicode=True)
    """

    modes = (config.color_mode, config.emoji_mode, config.unicode_mode)
    detected = detector.detect() if OutputMode.AUTO in modes else UNSUPPORTED
    return ResolvedCapabilities(
        color=_resolve(config.color_mode, detected.color),
        emoji=_resolve(config.emoji_mode, detected.emoji),
        unicode=_resolve(config.unicode_mode, detected.unicode),
    )


def create_render_entry(
    *,
    console: ConsolePort,
    detector: CapabilityPort,
    report: ErrorSink,
) -> RenderCallable:
    """Build the render callable bound to ``console`` and ``detector``.

    Parameters
    ----------
    console:
        Adapter implementing :class:`ConsolePort`.
    detector:
        Adapter implementing :class:`CapabilityPort` for ``auto`` modes.
    report:
        Error channel receiving :class:`EngineError` for render failures.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_console_styler.domain.levels import LogLevel
    >>> class Picky:
    ...     def __init__(self):
    ...         self.calls = []
    ...     def emit(self, entry, config, *, colorize, emoji):
    ...         raise TypeError('cannot encode')
    ...     def emit_fallback(self, entry, config):
    ...         self.calls.append(entry.message)
    >>> console, errors = Picky(), []
    >>> render = create_render_entry(console=console, detector=None, report=errors.append)
    >>> entry = LogEntry(datetime(2025, 1, 1, tzinfo=timezone.utc), LogLevel.INFO, 'hi')
    >>> render(entry, StylerConfig(color_mode='disabled', emoji_mode='disabled', unicode_mode='disabled'))
    >>> console.calls, errors[0].describe()
    (['hi'], '[renderer] render failed: cannot encode')
    """

    def render(entry: LogEntry, config: StylerConfig) -> None:
        """Emit ``entry``; fall back to plain output on formatting errors."""

        capabilities = resolve_capabilities(config, detector)
        try:
            console.emit(entry, config, colorize=capabilities.color, emoji=capabilities.emoji)
        except Exception as exc:
            try:
                console.emit_fallback(entry, config)
            except Exception:
                LOGGER.error("fallback rendering failed for entry %r", entry.message, exc_info=True)
            report(EngineError(stage=ErrorStage.RENDER, source=RENDERER_SOURCE, error=exc))

    return render


__all__ = [
    "RENDERER_SOURCE",
    "RenderCallable",
    "ResolvedCapabilities",
    "create_render_entry",
    "resolve_capabilities",
]
