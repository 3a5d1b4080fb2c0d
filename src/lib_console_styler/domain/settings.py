"""Immutable engine configuration and its builder.

Purpose
-------
Capture every behavioural knob of the logger in one frozen snapshot, and offer
a fluent builder that merges partial input onto the defaults.

Contents
--------
* :class:`OutputMode` – ``auto`` / ``enabled`` / ``disabled`` tri-state.
* :class:`StylerConfig` – frozen snapshot with validation and derivation.
* :class:`ConfigBuilder` – accumulates fields and produces a snapshot.

System Role
-----------
Loggers hold a :class:`StylerConfig` by reference. Child loggers, ``use`` and
``configure`` always derive a new snapshot via :meth:`StylerConfig.with_overrides`
so a published configuration is never mutated in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any

from .errors import ConfigurationError
from .levels import LogLevel
from .palettes import DEFAULT_THEME, get_theme
from .theme import Theme


class OutputMode(Enum):
    """Tri-state switch for colour, emoji and unicode output."""

    AUTO = "auto"
    ENABLED = "enabled"
    DISABLED = "disabled"

    @classmethod
    def from_name(cls, name: str) -> "OutputMode":
        """Return the member matching ``name``; accepts ``on``/``off`` aliases.

        Examples
        --------
        >>> OutputMode.from_name("Enabled") is OutputMode.ENABLED
        True
        >>> OutputMode.from_name("off") is OutputMode.DISABLED
        True
        """

        normalized = name.strip().lower()
        normalized = _MODE_ALIASES.get(normalized, normalized)
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown output mode: {name!r}")


_MODE_ALIASES = {
    "on": "enabled",
    "true": "enabled",
    "always": "enabled",
    "off": "disabled",
    "false": "disabled",
    "never": "disabled",
}


def _coerce_mode(name: str, value: Any) -> OutputMode:
    if isinstance(value, OutputMode):
        return value
    if isinstance(value, str):
        try:
            return OutputMode.from_name(value)
        except ValueError as exc:
            raise ConfigurationError(f"{name}: {exc}") from exc
    raise ConfigurationError(f"{name} must be an OutputMode or string, got {value!r}")


def _coerce_level(value: Any) -> LogLevel:
    if isinstance(value, LogLevel):
        return value
    if isinstance(value, str):
        try:
            return LogLevel.from_name(value)
        except ValueError as exc:
            raise ConfigurationError(f"log_level: {exc}") from exc
    raise ConfigurationError(f"log_level must be a LogLevel or string, got {value!r}")


def _coerce_theme(value: Any) -> Theme:
    if isinstance(value, Theme):
        return value
    if isinstance(value, str):
        try:
            return get_theme(value)
        except ValueError as exc:
            raise ConfigurationError(f"theme: {exc}") from exc
    raise ConfigurationError(f"theme must be a Theme or built-in theme name, got {value!r}")


def _require_int(name: str, value: Any, *, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        qualifier = "positive" if minimum == 1 else f"at least {minimum}"
        raise ConfigurationError(f"{name} must be {qualifier}, got {value}")
    return value


def _require_pattern(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{name} must be a non-empty string")
    return value


@dataclass(frozen=True)
class StylerConfig:
    """Frozen snapshot of logger behaviour.

    String values for modes, level and theme are coerced on construction so
    every snapshot holds canonical types. Invalid input raises
    :class:`ConfigurationError`; nothing is clamped.
    """

    color_mode: OutputMode = OutputMode.AUTO
    emoji_mode: OutputMode = OutputMode.AUTO
    unicode_mode: OutputMode = OutputMode.AUTO
    timestamp_format: str = "HH:mm:ss"
    date_format: str = "YYYY-MM-DD"
    indent_size: int = 2
    max_line_width: int = 80
    log_level: LogLevel = LogLevel.DEBUG
    enable_history: bool = True
    max_history_size: int = 1000
    theme: Theme = DEFAULT_THEME
    plugins: tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "color_mode", _coerce_mode("color_mode", self.color_mode))
        object.__setattr__(self, "emoji_mode", _coerce_mode("emoji_mode", self.emoji_mode))
        object.__setattr__(self, "unicode_mode", _coerce_mode("unicode_mode", self.unicode_mode))
        _require_pattern("timestamp_format", self.timestamp_format)
        _require_pattern("date_format", self.date_format)
        _require_int("indent_size", self.indent_size, minimum=0)
        _require_int("max_line_width", self.max_line_width, minimum=1)
        object.__setattr__(self, "log_level", _coerce_level(self.log_level))
        if not isinstance(self.enable_history, bool):
            raise ConfigurationError(f"enable_history must be a bool, got {self.enable_history!r}")
        _require_int("max_history_size", self.max_history_size, minimum=1)
        object.__setattr__(self, "theme", _coerce_theme(self.theme))
        object.__setattr__(self, "plugins", tuple(self.plugins))

    def with_overrides(self, **overrides: Any) -> "StylerConfig":
        """Return a new snapshot with ``overrides`` applied (last write wins).

        Examples
        --------
        >>> base = StylerConfig()
        >>> derived = base.with_overrides(log_level="warning")
        >>> derived.log_level.name, base.log_level.name
        ('WARNING', 'DEBUG')
        >>> base.with_overrides(colour="on")
        Traceback (most recent call last):
        ...
        lib_console_styler.domain.errors.ConfigurationError: Unknown configuration field(s): colour
        """

        unknown = sorted(set(overrides) - _FIELD_NAMES)
        if unknown:
            raise ConfigurationError("Unknown configuration field(s): " + ", ".join(unknown))
        if not overrides:
            return self
        return replace(self, **overrides)

    def with_plugin(self, plugin: Any) -> "StylerConfig":
        """Return a new snapshot whose plugin tuple ends with ``plugin``."""

        return replace(self, plugins=self.plugins + (plugin,))


_FIELD_NAMES = frozenset(item.name for item in fields(StylerConfig))


class ConfigBuilder:
    """Fluent builder accumulating fields onto the default configuration.

    Examples
    --------
    >>> config = ConfigBuilder().log_level("warning").max_history_size(50).build()
    >>> (config.log_level.name, config.max_history_size)
    ('WARNING', 50)
    >>> ConfigBuilder().max_history_size(0).build()
    Traceback (most recent call last):
    ...
    lib_console_styler.domain.errors.ConfigurationError: max_history_size must be positive, got 0
    """

    def __init__(self, base: StylerConfig | None = None) -> None:
        self._base = base if base is not None else StylerConfig()
        self._fields: dict[str, Any] = {}

    def color_mode(self, mode: OutputMode | str) -> "ConfigBuilder":
        self._fields["color_mode"] = mode
        return self

    def emoji_mode(self, mode: OutputMode | str) -> "ConfigBuilder":
        self._fields["emoji_mode"] = mode
        return self

    def unicode_mode(self, mode: OutputMode | str) -> "ConfigBuilder":
        self._fields["unicode_mode"] = mode
        return self

    def timestamp_format(self, pattern: str) -> "ConfigBuilder":
        self._fields["timestamp_format"] = pattern
        return self

    def date_format(self, pattern: str) -> "ConfigBuilder":
        self._fields["date_format"] = pattern
        return self

    def indent_size(self, size: int) -> "ConfigBuilder":
        self._fields["indent_size"] = size
        return self

    def max_line_width(self, width: int) -> "ConfigBuilder":
        self._fields["max_line_width"] = width
        return self

    def log_level(self, level: LogLevel | str) -> "ConfigBuilder":
        self._fields["log_level"] = level
        return self

    def enable_history(self, enable: bool) -> "ConfigBuilder":
        self._fields["enable_history"] = enable
        return self

    def max_history_size(self, size: int) -> "ConfigBuilder":
        self._fields["max_history_size"] = size
        return self

    def theme(self, theme: Theme | str) -> "ConfigBuilder":
        self._fields["theme"] = theme
        return self

    def plugin(self, plugin: Any) -> "ConfigBuilder":
        """Append ``plugin`` after any plugins already collected."""
        current = self._fields.get("plugins", self._base.plugins)
        self._fields["plugins"] = tuple(current) + (plugin,)
        return self

    def build(self) -> StylerConfig:
        """Return a validated snapshot; the builder can keep being used."""

        return self._base.with_overrides(**self._fields)


__all__ = ["ConfigBuilder", "OutputMode", "StylerConfig"]
