"""Adapters implementing the application ports with Rich and the standard library."""

from __future__ import annotations

from . import formatting
from .console import RichConsoleAdapter
from .export import HistoryExporter
from .terminal import TerminalCapabilityDetector

__all__ = ["HistoryExporter", "RichConsoleAdapter", "TerminalCapabilityDetector", "formatting"]
