"""Application use cases orchestrating rendering, plugins and teardown."""

from __future__ import annotations

from .plugins import ErrorSink, HookLoop, PluginDispatcher
from .render_entry import RenderCallable, ResolvedCapabilities, create_render_entry, resolve_capabilities
from .shutdown import create_shutdown

__all__ = [
    "ErrorSink",
    "HookLoop",
    "PluginDispatcher",
    "RenderCallable",
    "ResolvedCapabilities",
    "create_render_entry",
    "create_shutdown",
    "resolve_capabilities",
]
