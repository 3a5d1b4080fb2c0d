"""The logging engine: filtering, history, plugin fan-out and rendering.

Purpose
-------
Own one configuration snapshot, an optional namespace and a bounded history,
and turn each accepted call into a :class:`LogEntry` that is recorded,
announced to plugins and rendered, in that order.

Contents
--------
* :class:`LoggerState` – ``ACTIVE`` → ``SHUTTING_DOWN`` → ``TERMINATED``.
* :class:`Logger` – the engine exposed to applications.

System Role
-----------
Composition point for the application use cases
(:func:`create_render_entry`, :class:`PluginDispatcher`,
:func:`create_shutdown`) and the adapters behind the ports. The default
instance managed by :mod:`lib_console_styler.runtime` is an ordinary
:class:`Logger`.

Failure Policy
--------------
Plugin and render failures never escape :meth:`Logger.log`, :meth:`Logger.use`
or :meth:`Logger.child`; they are delivered as :class:`EngineError` records to
``on_error`` or, without a callback, rendered as an ERROR line straight to the
console. Only configuration errors and lifecycle misuse raise.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Mapping
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from lib_console_styler.application.ports import CapabilityPort, ClockPort, ConsolePort, ExportPort, plugin_name
from lib_console_styler.application.use_cases import (
    PluginDispatcher,
    ResolvedCapabilities,
    create_render_entry,
    create_shutdown,
    resolve_capabilities,
)
from lib_console_styler.domain import (
    EngineError,
    ErrorStage,
    HistoryBuffer,
    LogEntry,
    LogLevel,
    PluginShutdownError,
    StylerConfig,
)

from ._factories import SystemClock, create_console, create_detector, create_exporter

LOGGER = logging.getLogger(__name__)

ErrorCallback = Callable[[EngineError], None]


class LoggerState(Enum):
    """Lifecycle of a :class:`Logger`; transitions only move forward."""

    ACTIVE = "active"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


def _join_namespace(parent: str | None, namespace: str) -> str:
    return f"{parent}:{namespace}" if parent else namespace


class Logger:
    """Structured console logger with plugins and a bounded history.

    Parameters
    ----------
    config:
        Configuration snapshot; defaults to :class:`StylerConfig` defaults.
        Plugins listed in it are initialised during construction.
    namespace:
        Optional label prefixed to messages as ``"[namespace] "``.
    console, detector, clock, exporter:
        Adapters behind the application ports; Rich/terminal/system defaults
        are created when omitted.
    on_error:
        Receives every :class:`EngineError`. Exceptions raised by the callback
        are logged via :mod:`logging` and discarded.

    Examples
    --------
    >>> from io import StringIO
    >>> from rich.console import Console
    >>> from lib_console_styler.adapters import RichConsoleAdapter
    >>> console = Console(file=StringIO(), record=True, width=120)
    >>> config = StylerConfig(color_mode='disabled', emoji_mode='disabled', unicode_mode='disabled')
    >>> logger = Logger(config, 'api', console=RichConsoleAdapter(console=console))
    >>> logger.info('started', {'port': 8080}).message
    '[api] started'
    >>> '"port": 8080' in console.export_text()
    True
    >>> logger.shutdown()
    >>> logger.state
    <LoggerState.TERMINATED: 'terminated'>
    """

    def __init__(
        self,
        config: StylerConfig | None = None,
        namespace: str | None = None,
        *,
        console: ConsolePort | None = None,
        detector: CapabilityPort | None = None,
        clock: ClockPort | None = None,
        exporter: ExportPort | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        if namespace is not None and not namespace.strip():
            raise ValueError("namespace must not be empty")
        self._wire(
            config if config is not None else StylerConfig(),
            namespace,
            console=console if console is not None else create_console(),
            detector=detector if detector is not None else create_detector(),
            clock=clock if clock is not None else SystemClock(),
            exporter=exporter if exporter is not None else create_exporter(),
            on_error=on_error,
        )
        for plugin in self._config.plugins:
            self._dispatcher.initialize(plugin, self._config)

    def _wire(
        self,
        config: StylerConfig,
        namespace: str | None,
        *,
        console: ConsolePort,
        detector: CapabilityPort,
        clock: ClockPort,
        exporter: ExportPort,
        on_error: ErrorCallback | None,
    ) -> None:
        self._config = config
        self._namespace = namespace
        self._console = console
        self._detector = detector
        self._clock = clock
        self._exporter = exporter
        self._on_error = on_error
        self._lock = threading.RLock()
        self._state = LoggerState.ACTIVE
        self._history = HistoryBuffer(max_entries=config.max_history_size)
        self._dispatcher = PluginDispatcher(report=self._report)
        self._render = create_render_entry(console=console, detector=detector, report=self._report)
        self._shutdown_plugins = create_shutdown(dispatcher=self._dispatcher, plugins=lambda: self._config.plugins)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def config(self) -> StylerConfig:
        """Return the current configuration snapshot."""

        return self._config

    @property
    def namespace(self) -> str | None:
        return self._namespace

    @property
    def plugins(self) -> tuple[Any, ...]:
        """Return the registered plugins in registration order."""

        return self._config.plugins

    @property
    def state(self) -> LoggerState:
        return self._state

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    def log(self, level: LogLevel | str, message: str, metadata: Mapping[str, Any] | None = None) -> LogEntry | None:
        """Record, announce and render one entry.

        Returns the accepted :class:`LogEntry`, or ``None`` when the level is
        below ``config.log_level`` or the logger has terminated. Filtered
        calls touch neither history, plugins nor the console.
        """

        resolved = LogLevel.coerce(level)
        with self._lock:
            if self._state is LoggerState.TERMINATED:
                return None
            config = self._config
            if resolved < config.log_level:
                return None
            entry = LogEntry(
                timestamp=self._clock.now(),
                level=resolved,
                message=self._prefix(message),
                metadata=metadata,
                namespace=self._namespace,
            )
            if config.enable_history:
                self._history.append(entry)
            self._dispatcher.observe(config.plugins, entry)
            self._render(entry, config)
        return entry

    def debug(self, message: str, metadata: Mapping[str, Any] | None = None) -> LogEntry | None:
        return self.log(LogLevel.DEBUG, message, metadata)

    def info(self, message: str, metadata: Mapping[str, Any] | None = None) -> LogEntry | None:
        return self.log(LogLevel.INFO, message, metadata)

    def success(self, message: str, metadata: Mapping[str, Any] | None = None) -> LogEntry | None:
        return self.log(LogLevel.SUCCESS, message, metadata)

    def warning(self, message: str, metadata: Mapping[str, Any] | None = None) -> LogEntry | None:
        return self.log(LogLevel.WARNING, message, metadata)

    def error(self, message: str, metadata: Mapping[str, Any] | None = None) -> LogEntry | None:
        return self.log(LogLevel.ERROR, message, metadata)

    def critical(self, message: str, metadata: Mapping[str, Any] | None = None) -> LogEntry | None:
        return self.log(LogLevel.CRITICAL, message, metadata)

    def _prefix(self, message: str) -> str:
        text = str(message)
        return f"[{self._namespace}] {text}" if self._namespace else text

    # ------------------------------------------------------------------
    # Derivation and plugins
    # ------------------------------------------------------------------
    def child(self, namespace: str, **overrides: Any) -> "Logger":
        """Return a logger for ``namespace`` below this one.

        The child gets its own history and a configuration derived from this
        logger's snapshot with ``overrides`` applied. Inherited plugins are
        shared, not re-initialised; plugins new in an override are
        initialised for the child.

        Examples
        --------
        >>> from io import StringIO
        >>> from lib_console_styler.adapters import RichConsoleAdapter
        >>> root = Logger(console=RichConsoleAdapter(stream=StringIO()))
        >>> root.child('a').child('b').namespace
        'a:b'
        """

        if not isinstance(namespace, str) or not namespace.strip():
            raise ValueError("namespace must not be empty")
        with self._lock:
            parent_config = self._config
        config = parent_config.with_overrides(**overrides)
        derived = type(self).__new__(type(self))
        derived._wire(
            config,
            _join_namespace(self._namespace, namespace),
            console=self._console,
            detector=self._detector,
            clock=self._clock,
            exporter=self._exporter,
            on_error=self._on_error,
        )
        inherited = {id(plugin) for plugin in parent_config.plugins}
        for plugin in config.plugins:
            if id(plugin) not in inherited:
                derived._dispatcher.initialize(plugin, config)
        return derived

    def use(self, plugin: Any) -> bool:
        """Register ``plugin`` and run its ``initialize`` hook.

        Returns ``False`` (and reports a ``register`` error) once shutdown has
        begun; the plugin is then neither registered nor initialised.
        """

        config = self._register(plugin)
        if config is None:
            return False
        self._dispatcher.initialize(plugin, config)
        return True

    async def use_async(self, plugin: Any) -> bool:
        """Register ``plugin`` and await its ``initialize`` hook."""

        config = self._register(plugin)
        if config is None:
            return False
        await self._dispatcher.initialize_async(plugin, config)
        return True

    def _register(self, plugin: Any) -> StylerConfig | None:
        with self._lock:
            if self._state is LoggerState.ACTIVE:
                self._config = self._config.with_plugin(plugin)
                return self._config
            state = self._state
        self._report(
            EngineError(
                stage=ErrorStage.REGISTER,
                source=plugin_name(plugin),
                error=RuntimeError(f"logger is {state.value}; plugin registration rejected"),
            )
        )
        return None

    def configure(self, **overrides: Any) -> StylerConfig:
        """Replace this logger's configuration with a derived snapshot.

        The previous snapshot is left untouched, history is resized to the new
        ``max_history_size`` and plugins added by the override are initialised.
        Plugins dropped by the override are not shut down.

        Raises
        ------
        ConfigurationError
            When an override is unknown or invalid.
        RuntimeError
            When ``plugins`` is overridden after shutdown has begun.
        """

        with self._lock:
            if "plugins" in overrides and self._state is not LoggerState.ACTIVE:
                raise RuntimeError(f"cannot change plugins while the logger is {self._state.value}")
            previous = self._config
            config = previous.with_overrides(**overrides)
            self._history.resize(config.max_history_size)
            self._config = config
        known = {id(plugin) for plugin in previous.plugins}
        for plugin in config.plugins:
            if id(plugin) not in known:
                self._dispatcher.initialize(plugin, config)
        return config

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def get_history(
        self,
        level: LogLevel | str | None = None,
        namespace: str | None = None,
        since: datetime | None = None,
    ) -> list[LogEntry]:
        """Return a snapshot of retained entries matching all given filters.

        A naive ``since`` is interpreted as local time.
        """

        resolved = LogLevel.coerce(level) if level is not None else None
        if since is not None and since.tzinfo is None:
            since = since.astimezone()
        with self._lock:
            return self._history.query(level=resolved, namespace=namespace, since=since)

    def clear_history(self) -> None:
        with self._lock:
            self._history.clear()

    def export_history(self, path: str | Path | None = None) -> str:
        """Return the history as an export document, writing it to ``path`` when given."""

        entries = self.get_history()
        target = Path(path) if path is not None else None
        return self._exporter.export(
            entries,
            namespace=self._namespace,
            path=target,
            export_time=self._clock.now(),
        )

    # ------------------------------------------------------------------
    # Rendering helpers for external renderers
    # ------------------------------------------------------------------
    def capabilities(self) -> ResolvedCapabilities:
        """Return the effective colour/emoji/unicode switches."""

        return resolve_capabilities(self._config, self._detector)

    def box_glyphs(self) -> Mapping[str, str]:
        """Return theme box glyphs, or the ASCII set when unicode is off."""

        config = self._config
        return config.theme.box_glyphs(unicode_enabled=resolve_capabilities(config, self._detector).unicode)

    # ------------------------------------------------------------------
    # Error channel
    # ------------------------------------------------------------------
    def _report(self, error: EngineError) -> None:
        LOGGER.debug("engine error: %s", error.describe(), exc_info=error.error)
        if self._on_error is not None:
            try:
                self._on_error(error)
            except Exception:
                LOGGER.exception("on_error callback failed while reporting %s", error.describe())
            return
        config = self._config
        entry = LogEntry(
            timestamp=self._clock.now(),
            level=LogLevel.ERROR,
            message=self._prefix(error.describe()),
            namespace=self._namespace,
        )
        try:
            capabilities = resolve_capabilities(config, self._detector)
            self._console.emit(entry, config, colorize=capabilities.color, emoji=capabilities.emoji)
        except Exception:
            LOGGER.exception("could not render engine error %s", error.describe())

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------
    async def shutdown_async(self) -> None:
        """Drain plugin work, run all shutdown hooks and terminate.

        The logger reaches ``TERMINATED`` even when hooks fail or the call is
        cancelled. Later calls return immediately.

        Raises
        ------
        PluginShutdownError
            After termination, when one or more shutdown hooks failed.
        """

        with self._lock:
            if self._state is not LoggerState.ACTIVE:
                return
            self._state = LoggerState.SHUTTING_DOWN
        try:
            failures = await self._shutdown_plugins()
        finally:
            with self._lock:
                self._state = LoggerState.TERMINATED
        if failures:
            raise PluginShutdownError(failures)

    def shutdown(self) -> None:
        """Synchronous counterpart of :meth:`shutdown_async`.

        Raises
        ------
        RuntimeError
            When called from inside a running event loop.
        """

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            raise RuntimeError("Logger.shutdown() cannot run inside an active event loop; await shutdown_async() instead")
        asyncio.run(self.shutdown_async())

    def __repr__(self) -> str:
        return f"Logger(namespace={self._namespace!r}, state={self._state.value}, plugins={len(self._config.plugins)})"


__all__ = ["ErrorCallback", "Logger", "LoggerState"]
