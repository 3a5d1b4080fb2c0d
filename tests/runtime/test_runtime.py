from __future__ import annotations

import pytest

import lib_console_styler
from lib_console_styler import runtime
from lib_console_styler.adapters import RichConsoleAdapter
from lib_console_styler.domain import LogLevel, PluginShutdownError, StylerConfig
from tests.support import PLAIN, FailingPlugin, RecordingPlugin


@pytest.fixture(autouse=True)
def cradle_runtime():
    try:
        yield
    finally:
        if runtime.is_initialised():
            try:
                runtime.shutdown()
            except PluginShutdownError:
                pass


def _init(record_console, **overrides: object):
    settings = dict(PLAIN)
    settings.update(overrides)
    return runtime.init(console=RichConsoleAdapter(console=record_console), **settings)


def test_get_requires_init() -> None:
    with pytest.raises(RuntimeError, match="init\\(\\) must be called"):
        runtime.get()


def test_init_installs_default_logger(record_console) -> None:
    logger = _init(record_console, log_level="info")
    assert runtime.is_initialised()
    assert runtime.get() is logger
    assert logger.config.log_level is LogLevel.INFO


def test_init_twice_is_rejected(record_console) -> None:
    _init(record_console)
    with pytest.raises(RuntimeError, match="cannot be called twice"):
        _init(record_console)


def test_init_applies_overrides_on_top_of_config(record_console) -> None:
    base = StylerConfig(max_history_size=10)
    logger = runtime.init(base, console=RichConsoleAdapter(console=record_console), indent_size=4, **PLAIN)
    assert (logger.config.max_history_size, logger.config.indent_size) == (10, 4)


def test_get_with_namespace_returns_child(record_console) -> None:
    _init(record_console)
    child = runtime.get("jobs")
    assert child.namespace == "jobs"
    assert child.info("queued").message == "[jobs] queued"
    assert "[jobs] queued" in record_console.export_text()


def test_get_overrides_require_namespace(record_console) -> None:
    _init(record_console)
    with pytest.raises(ValueError, match="namespace"):
        runtime.get(log_level="error")


def test_shutdown_clears_default_and_allows_reinit(record_console) -> None:
    plugin = RecordingPlugin()
    _init(record_console, plugins=(plugin,))
    runtime.shutdown()
    assert not runtime.is_initialised()
    assert plugin.shutdowns == 1
    _init(record_console)
    assert runtime.is_initialised()


def test_shutdown_failure_still_clears_default(record_console) -> None:
    _init(record_console, plugins=(FailingPlugin(),), on_error=lambda error: None)
    with pytest.raises(PluginShutdownError):
        runtime.shutdown()
    assert not runtime.is_initialised()


@pytest.mark.asyncio
async def test_shutdown_async_available_inside_running_loop(record_console) -> None:
    _init(record_console)
    with pytest.raises(RuntimeError, match="await lib_console_styler.shutdown_async"):
        runtime.shutdown()
    await runtime.shutdown_async()
    assert not runtime.is_initialised()


def test_package_reexports_runtime_api() -> None:
    assert lib_console_styler.init is runtime.init
    assert lib_console_styler.get is runtime.get
    assert lib_console_styler.Logger is runtime.Logger


def test_summary_info_contains_metadata() -> None:
    summary = runtime.summary_info()
    assert "Info for lib_console_styler" in summary
    assert "version" in summary
    assert summary.endswith("\n")
    assert summary == lib_console_styler.summary_info()
