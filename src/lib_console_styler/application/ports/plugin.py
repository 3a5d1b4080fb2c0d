"""Plugin contract consumed by the logger.

Purpose
-------
Describe the observer shape the engine accepts. Only ``name`` and ``version``
are required; the three lifecycle hooks are optional and discovered by
presence checks, so plugins never inherit from a base class.

Hooks
-----
``initialize(config)``
    Called once on registration with the logger's current
    :class:`~lib_console_styler.domain.settings.StylerConfig`.
``observe(entry)``
    Called once per accepted :class:`~lib_console_styler.domain.entry.LogEntry`.
``shutdown()``
    Called once on logger teardown; awaited to completion.

Each hook may return ``None`` or an awaitable.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

@runtime_checkable
class PluginPort(Protocol):
    """Identify a plugin; hooks are optional and looked up by name."""

    name: str
    version: str


def plugin_name(plugin: Any) -> str:
    """Return a printable identifier for ``plugin`` even when ``name`` is missing."""

    name = getattr(plugin, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(plugin).__name__


def find_hook(plugin: Any, hook: str) -> Callable[..., Any] | None:
    """Return the callable hook ``hook`` on ``plugin`` or ``None`` when absent."""

    candidate = getattr(plugin, hook, None)
    return candidate if callable(candidate) else None


__all__ = ["PluginPort", "find_hook", "plugin_name"]
