"""Environment-driven configuration and ``.env`` loading.

Purpose
-------
Let operators adjust the logger without code changes: ``STYLER_*`` variables
are layered onto a :class:`~lib_console_styler.domain.settings.ConfigBuilder`
(environment wins over programmatic defaults), and an optional ``.env`` file
is loaded through ``python-dotenv``.

Contents
--------
* :data:`DOTENV_ENV_VAR` – toggle variable consulted by the CLI.
* :func:`should_use_dotenv` / :func:`enable_dotenv` – ``.env`` handling.
* :func:`builder_from_env` / :func:`config_from_env` – ``STYLER_*`` overrides.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .domain.errors import ConfigurationError
from .domain.settings import ConfigBuilder, StylerConfig

DOTENV_ENV_VAR = "STYLER_USE_DOTENV"

ENV_FIELDS: Mapping[str, str] = {
    "STYLER_LOG_LEVEL": "log_level",
    "STYLER_COLOR_MODE": "color_mode",
    "STYLER_EMOJI_MODE": "emoji_mode",
    "STYLER_UNICODE_MODE": "unicode_mode",
    "STYLER_TIMESTAMP_FORMAT": "timestamp_format",
    "STYLER_THEME": "theme",
}
"""String-valued variables mapped onto builder methods of the same name."""

HISTORY_ENABLED_VAR = "STYLER_HISTORY_ENABLED"
HISTORY_SIZE_VAR = "STYLER_HISTORY_SIZE"

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})

_DOTENV_LOADED: Path | None = None


def _parse_bool(name: str, raw: str) -> bool:
    """Return the boolean encoded by ``raw``.

    Examples
    --------
    >>> _parse_bool("X", "Yes"), _parse_bool("X", "0")
    (True, False)
    """

    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` should be loaded; an explicit flag wins.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="on")
    True
    >>> should_use_dotenv()
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` above the working directory.

    Existing environment variables keep precedence. Returns the resolved path
    of the loaded file, or ``None`` when no file was found. Subsequent calls
    return the first result without reloading.
    """

    global _DOTENV_LOADED
    if _DOTENV_LOADED is not None:
        return _DOTENV_LOADED
    located = find_dotenv(usecwd=True)
    if not located:
        return None
    path = Path(located).resolve()
    load_dotenv(path, override=False)
    _DOTENV_LOADED = path
    return path


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED
    _DOTENV_LOADED = None


def builder_from_env(
    environ: Mapping[str, str] | None = None,
    base: StylerConfig | None = None,
) -> ConfigBuilder:
    """Return a builder seeded with ``base`` and any ``STYLER_*`` overrides.

    Empty variables are ignored. Invalid values raise
    :class:`ConfigurationError` when parsed or when the builder builds.

    Examples
    --------
    >>> builder = builder_from_env({"STYLER_LOG_LEVEL": "warning", "STYLER_HISTORY_SIZE": "25"})
    >>> config = builder.build()
    >>> config.log_level.name, config.max_history_size
    ('WARNING', 25)
    """

    source = os.environ if environ is None else environ
    builder = ConfigBuilder(base)
    for variable, field_name in ENV_FIELDS.items():
        raw = source.get(variable, "").strip()
        if raw:
            getattr(builder, field_name)(raw)
    enabled = source.get(HISTORY_ENABLED_VAR, "").strip()
    if enabled:
        builder.enable_history(_parse_bool(HISTORY_ENABLED_VAR, enabled))
    size = source.get(HISTORY_SIZE_VAR, "").strip()
    if size:
        builder.max_history_size(_parse_int(HISTORY_SIZE_VAR, size))
    return builder


def config_from_env(
    environ: Mapping[str, str] | None = None,
    base: StylerConfig | None = None,
) -> StylerConfig:
    """Build a :class:`StylerConfig` from ``base`` plus environment overrides."""

    return builder_from_env(environ, base).build()


__all__ = [
    "DOTENV_ENV_VAR",
    "ENV_FIELDS",
    "builder_from_env",
    "config_from_env",
    "enable_dotenv",
    "should_use_dotenv",
]
