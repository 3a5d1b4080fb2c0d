"""Shutdown orchestration for a logger's plugins.

Purpose
-------
Provide the teardown routine that drains in-flight plugin work and runs every
plugin's shutdown hook, collecting failures instead of stopping at the first.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from lib_console_styler.domain.errors import EngineError

from .plugins import PluginDispatcher


def create_shutdown(
    *,
    dispatcher: PluginDispatcher,
    plugins: Callable[[], Sequence[Any]],
) -> Callable[[], Awaitable[list[EngineError]]]:
    """Return an async callable performing the shutdown sequence.

    ``plugins`` is read when the sequence starts so registrations made up to
    that point are included.

    Examples
    --------
    >>> import asyncio
    >>> class Closable:
    ...     name, version, closed = "closable", "1.0", False
    ...     async def shutdown(self):
    ...         self.closed = True
    >>> plugin = Closable()
    >>> shutdown = create_shutdown(dispatcher=PluginDispatcher(report=lambda error: None), plugins=lambda: [plugin])
    >>> asyncio.run(shutdown()), plugin.closed
    ([], True)
    """

    async def shutdown() -> list[EngineError]:
        """Drain pending hook tasks, then await all plugin shutdown hooks."""
        return await dispatcher.shutdown(plugins())

    return shutdown


__all__ = ["create_shutdown"]
