from __future__ import annotations

from datetime import datetime, timezone

from lib_console_styler.application.ports import (
    CapabilityPort,
    ClockPort,
    ConsolePort,
    ExportPort,
    PluginPort,
    find_hook,
    plugin_name,
)
from lib_console_styler.runtime import SystemClock
from tests.support import RecordingPlugin


def test_system_clock_is_timezone_aware() -> None:
    clock = SystemClock()
    assert isinstance(clock, ClockPort)
    assert clock.now().tzinfo is not None
    assert clock.now() <= datetime.now(timezone.utc)


def test_plugin_port_only_requires_identity() -> None:
    class Identity:
        name = "identity"
        version = "1"

    assert isinstance(Identity(), PluginPort)
    assert isinstance(RecordingPlugin(), PluginPort)


def test_find_hook_ignores_non_callable_attributes() -> None:
    class Odd:
        name, version = "odd", "1"
        observe = "not callable"

    assert find_hook(Odd(), "observe") is None
    assert find_hook(Odd(), "shutdown") is None
    assert find_hook(RecordingPlugin(), "observe") is not None


def test_plugin_name_falls_back_to_type_name() -> None:
    class Nameless:
        version = "1"

    assert plugin_name(Nameless()) == "Nameless"
    assert plugin_name(RecordingPlugin("audit")) == "audit"


def test_structural_ports_accept_duck_typed_adapters() -> None:
    class Console:
        def emit(self, entry, config, *, colorize, emoji):  # noqa: ANN001, ANN202
            return None

        def emit_fallback(self, entry, config):  # noqa: ANN001, ANN202
            return None

    class Detector:
        def detect(self):  # noqa: ANN202
            return None

    class Exporter:
        def export(self, entries, *, namespace=None, path=None, export_time=None):  # noqa: ANN001, ANN202
            return ""

        def parse(self, payload):  # noqa: ANN001, ANN202
            return None, []

    assert isinstance(Console(), ConsolePort)
    assert isinstance(Detector(), CapabilityPort)
    assert isinstance(Exporter(), ExportPort)
