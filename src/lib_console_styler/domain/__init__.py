"""Domain entities and value objects used by the console styler."""

from __future__ import annotations

from .entry import LogEntry
from .errors import ConfigurationError, EngineError, ErrorStage, PluginShutdownError
from .history import HistoryBuffer
from .levels import LogLevel
from .palettes import THEMES, get_theme
from .settings import ConfigBuilder, OutputMode, StylerConfig
from .theme import Theme

__all__ = [
    "ConfigBuilder",
    "ConfigurationError",
    "EngineError",
    "ErrorStage",
    "HistoryBuffer",
    "LogEntry",
    "LogLevel",
    "OutputMode",
    "PluginShutdownError",
    "StylerConfig",
    "THEMES",
    "Theme",
    "get_theme",
]
