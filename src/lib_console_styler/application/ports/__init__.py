"""Protocols describing the boundaries between the engine and its collaborators."""

from __future__ import annotations

from .capabilities import UNSUPPORTED, Capabilities, CapabilityPort
from .console import ConsolePort
from .export import ExportPort
from .plugin import PluginPort, find_hook, plugin_name
from .time import ClockPort

__all__ = [
    "Capabilities",
    "CapabilityPort",
    "ClockPort",
    "ConsolePort",
    "ExportPort",
    "PluginPort",
    "UNSUPPORTED",
    "find_hook",
    "plugin_name",
]
