"""Plugin lifecycle orchestration with per-plugin failure isolation.

Purpose
-------
Invoke the optional ``initialize`` / ``observe`` / ``shutdown`` hooks of
registered plugins, hide the difference between synchronous and asynchronous
hooks from the logger, and turn every hook failure into an
:class:`~lib_console_styler.domain.errors.EngineError` report instead of an
exception.

Contents
--------
* :class:`HookLoop` – daemon-thread event loop for hooks scheduled from
  synchronous code.
* :class:`PluginDispatcher` – one instance per logger.

System Role
-----------
Called by the logger after history append (``observe``), on registration
(``initialize``) and during shutdown (``drain`` + ``shutdown``).

Scheduling
----------
Awaitables returned by ``initialize`` or ``observe`` are never awaited by the
caller. Inside a running event loop they become tasks on that loop; from
synchronous code they are submitted to the dispatcher's :class:`HookLoop`.
``shutdown`` first drains outstanding work from both places, then runs every
shutdown hook concurrently and finally stops the hook thread.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
import logging
import threading
from collections.abc import Awaitable, Callable, Coroutine, Sequence
from functools import partial
from typing import Any, Union

from lib_console_styler.application.ports.plugin import find_hook, plugin_name
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.errors import EngineError, ErrorStage
from lib_console_styler.domain.settings import StylerConfig

LOGGER = logging.getLogger(__name__)

ErrorSink = Callable[[EngineError], None]
_Pending = Union["asyncio.Task[Any]", "concurrent.futures.Future[Any]"]


async def _resolve(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


async def _call_shutdown_hook(hook: Callable[[], Any]) -> None:
    result = hook()
    if inspect.isawaitable(result):
        await result


class HookLoop:
    """Event loop running on a daemon thread, started on first use.

    Examples
    --------
    >>> async def answer():
    ...     return 42
    >>> hooks = HookLoop()
    >>> hooks.running
    False
    >>> hooks.submit(answer()).result(timeout=5)
    42
    >>> hooks.stop()
    >>> hooks.running
    False
    """

    def __init__(self, *, name: str = "lib_console_styler-hooks") -> None:
        self._name = name
        self._lock = threading.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None

    def submit(self, coroutine: Coroutine[Any, Any, Any]) -> concurrent.futures.Future[Any]:
        """Schedule ``coroutine`` on the hook thread and return its future."""

        with self._lock:
            if self._loop is None:
                loop = asyncio.new_event_loop()
                thread = threading.Thread(target=self._run, args=(loop,), name=self._name, daemon=True)
                thread.start()
                self._loop, self._thread = loop, thread
            return asyncio.run_coroutine_threadsafe(coroutine, self._loop)

    @staticmethod
    def _run(loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        try:
            loop.run_forever()
        finally:
            loop.close()

    def stop(self) -> None:
        """Stop the loop and join its thread; a later ``submit`` starts a new one."""

        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = self._thread = None
        if loop is None or thread is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        if thread is not threading.current_thread():
            thread.join()


class PluginDispatcher:
    """Run plugin hooks and report their failures through ``report``.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_console_styler.domain.levels import LogLevel
    >>> class Broken:
    ...     name, version = "broken", "1.0"
    ...     def observe(self, entry):
    ...         raise RuntimeError("nope")
    >>> class Counter:
    ...     name, version, seen = "counter", "1.0", 0
    ...     def observe(self, entry):
    ...         self.seen += 1
    >>> errors = []
    >>> dispatcher = PluginDispatcher(report=errors.append)
    >>> counter = Counter()
    >>> entry = LogEntry(datetime(2025, 1, 1, tzinfo=timezone.utc), LogLevel.INFO, "hi")
    >>> dispatcher.observe([Broken(), counter], entry)
    >>> counter.seen, errors[0].describe()
    (1, '[plugin:broken] observe failed: nope')
    """

    def __init__(self, *, report: ErrorSink, hooks: HookLoop | None = None) -> None:
        self._report = report
        self._hooks = hooks if hooks is not None else HookLoop()
        self._pending: set[_Pending] = set()
        self._pending_lock = threading.Lock()

    @property
    def pending(self) -> int:
        """Return the number of scheduled hook calls that have not finished."""

        with self._pending_lock:
            return len(self._pending)

    def initialize(self, plugin: Any, config: StylerConfig) -> None:
        """Invoke ``plugin.initialize(config)`` when the hook exists."""

        hook = find_hook(plugin, "initialize")
        if hook is not None:
            self._invoke(plugin, ErrorStage.INITIALIZE, hook, config)

    async def initialize_async(self, plugin: Any, config: StylerConfig) -> None:
        """Invoke and await ``plugin.initialize(config)`` when the hook exists."""

        hook = find_hook(plugin, "initialize")
        if hook is None:
            return
        try:
            result = hook(config)
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            self._fail(plugin, ErrorStage.INITIALIZE, exc)

    def observe(self, plugins: Sequence[Any], entry: LogEntry) -> None:
        """Notify every plugin in registration order; failures stay isolated."""

        for plugin in plugins:
            hook = find_hook(plugin, "observe")
            if hook is not None:
                self._invoke(plugin, ErrorStage.OBSERVE, hook, entry)

    async def drain(self) -> None:
        """Wait for outstanding hook calls from the running loop and the hook thread.

        Tasks created on another, no longer running loop are discarded.
        """

        loop = asyncio.get_running_loop()
        while True:
            waiting: list[asyncio.Future[Any]] = []
            with self._pending_lock:
                for item in list(self._pending):
                    if not isinstance(item, asyncio.Task):
                        waiting.append(asyncio.wrap_future(item))
                    elif item.get_loop() is loop:
                        waiting.append(item)
                    else:
                        self._pending.discard(item)
            if not waiting:
                return
            await asyncio.gather(*waiting, return_exceptions=True)

    async def shutdown(self, plugins: Sequence[Any]) -> list[EngineError]:
        """Drain pending work, run all shutdown hooks concurrently, stop the hook thread.

        Every hook is attempted even when others fail or stall; the returned
        list holds one :class:`EngineError` per failed hook, in plugin order.
        A hook ending in a non-``Exception`` (for example cancellation) is
        re-raised after all failures have been reported.
        """

        targets: list[tuple[Any, Callable[[], Any]]] = []
        for plugin in plugins:
            hook = find_hook(plugin, "shutdown")
            if hook is not None:
                targets.append((plugin, hook))
        try:
            await self.drain()
            outcomes = await asyncio.gather(
                *(_call_shutdown_hook(hook) for _, hook in targets),
                return_exceptions=True,
            )
            await self.drain()
        finally:
            self._hooks.stop()
        failures: list[EngineError] = []
        escaped: BaseException | None = None
        for (plugin, _), outcome in zip(targets, outcomes):
            if isinstance(outcome, Exception):
                failures.append(self._fail(plugin, ErrorStage.SHUTDOWN, outcome))
            elif isinstance(outcome, BaseException) and escaped is None:
                escaped = outcome
        if escaped is not None:
            raise escaped
        return failures

    def _invoke(self, plugin: Any, stage: ErrorStage, hook: Callable[..., Any], *args: Any) -> None:
        try:
            result = hook(*args)
        except Exception as exc:
            self._fail(plugin, stage, exc)
            return
        if inspect.isawaitable(result):
            self._schedule(plugin, stage, result)

    def _schedule(self, plugin: Any, stage: ErrorStage, awaitable: Awaitable[Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        pending: _Pending
        if loop is None:
            pending = self._hooks.submit(_resolve(awaitable))
        else:
            pending = loop.create_task(_resolve(awaitable))
        with self._pending_lock:
            self._pending.add(pending)
        pending.add_done_callback(partial(self._finished, plugin, stage))

    def _finished(self, plugin: Any, stage: ErrorStage, pending: _Pending) -> None:
        # Discard last so drain() returns only after the report.
        try:
            if pending.cancelled():
                LOGGER.debug("%s hook of plugin %s was cancelled", stage.value, plugin_name(plugin))
            elif isinstance(pending.exception(), Exception):
                self._fail(plugin, stage, pending.exception())
        finally:
            with self._pending_lock:
                self._pending.discard(pending)

    def _fail(self, plugin: Any, stage: ErrorStage, exc: Exception) -> EngineError:
        error = EngineError(stage=stage, source=plugin_name(plugin), error=exc)
        self._report(error)
        return error


__all__ = ["ErrorSink", "HookLoop", "PluginDispatcher"]
