"""Default logger container and access helpers."""

from __future__ import annotations

from threading import RLock

from .logger import Logger

_DEFAULT_LOGGER: Logger | None = None
_SLOT_LOCK = RLock()


def set_default(logger: Logger) -> None:
    """Install ``logger`` as the active default instance."""

    with _SLOT_LOCK:
        global _DEFAULT_LOGGER
        _DEFAULT_LOGGER = logger


def clear_default() -> None:
    """Remove the default instance if present."""

    with _SLOT_LOCK:
        global _DEFAULT_LOGGER
        _DEFAULT_LOGGER = None


def current_default() -> Logger:
    """Return the default logger or raise when uninitialised."""

    with _SLOT_LOCK:
        if _DEFAULT_LOGGER is None:
            raise RuntimeError("lib_console_styler.init() must be called before using the default logger")
        return _DEFAULT_LOGGER


def is_initialised() -> bool:
    """Return ``True`` when :func:`lib_console_styler.init` has been called."""

    with _SLOT_LOCK:
        return _DEFAULT_LOGGER is not None


__all__ = ["clear_default", "current_default", "is_initialised", "set_default"]
