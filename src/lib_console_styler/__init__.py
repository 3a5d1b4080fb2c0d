"""Structured, themeable console logging with plugins and bounded history.

``Logger`` is the engine; ``init``/``get``/``shutdown`` manage an optional
process-wide default instance. Configuration is built with
:class:`ConfigBuilder` (or :func:`lib_console_styler.config.config_from_env`)
and themes come from :data:`THEMES`.
"""

from __future__ import annotations

from .adapters import HistoryExporter, RichConsoleAdapter, TerminalCapabilityDetector, formatting
from .application.ports import Capabilities, PluginPort
from .application.use_cases import ResolvedCapabilities
from .domain import (
    THEMES,
    ConfigBuilder,
    ConfigurationError,
    EngineError,
    ErrorStage,
    LogEntry,
    LogLevel,
    OutputMode,
    PluginShutdownError,
    StylerConfig,
    Theme,
    get_theme,
)
from .runtime import (
    Logger,
    LoggerState,
    get,
    init,
    is_initialised,
    shutdown,
    shutdown_async,
    summary_info,
)

__all__ = [
    "Capabilities",
    "ConfigBuilder",
    "ConfigurationError",
    "EngineError",
    "ErrorStage",
    "HistoryExporter",
    "LogEntry",
    "LogLevel",
    "Logger",
    "LoggerState",
    "OutputMode",
    "PluginPort",
    "PluginShutdownError",
    "ResolvedCapabilities",
    "RichConsoleAdapter",
    "StylerConfig",
    "THEMES",
    "TerminalCapabilityDetector",
    "Theme",
    "formatting",
    "get",
    "get_theme",
    "init",
    "is_initialised",
    "shutdown",
    "shutdown_async",
    "summary_info",
]
