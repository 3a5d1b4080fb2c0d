"""Built-in themes keyed by name.

Themes are consumed by :class:`~lib_console_styler.domain.settings.ConfigBuilder`
(``theme("neon")``), the ``STYLER_THEME`` environment override and the
``demo`` CLI command, so the names listed here are the supported values.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .theme import Theme

_UNICODE_BOX = {
    "top_left": "┌",
    "top_right": "┐",
    "bottom_left": "└",
    "bottom_right": "┘",
    "horizontal": "─",
    "vertical": "│",
    "cross": "┼",
    "tee_left": "├",
    "tee_right": "┤",
    "tee_top": "┬",
    "tee_bottom": "┴",
}

DEFAULT_THEME = Theme(
    name="default",
    colors={
        "debug": "bright_black",
        "info": "blue",
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "critical": "bold bright_red",
        "primary": "blue",
        "secondary": "cyan",
        "muted": "bright_black",
        "accent": "bright_cyan",
    },
    symbols={
        "debug": "🔍",
        "info": "ℹ️",
        "success": "✅",
        "warning": "⚠️",
        "error": "❌",
        "critical": "🚨",
        "bullet": "•",
        "arrow": "→",
        "check": "✓",
        "cross": "✗",
    },
    box=_UNICODE_BOX,
)

MINIMAL_THEME = Theme(
    name="minimal",
    colors={
        "debug": "dim",
        "info": "default",
        "success": "default",
        "warning": "default",
        "error": "default",
        "critical": "default",
        "primary": "default",
        "secondary": "default",
        "muted": "dim",
        "accent": "default",
    },
    symbols={
        "debug": "[DBG]",
        "info": "[INF]",
        "success": "[OK]",
        "warning": "[WRN]",
        "error": "[ERR]",
        "critical": "[CRT]",
        "bullet": "-",
        "arrow": "->",
        "check": "+",
        "cross": "x",
    },
    box={
        "top_left": "+",
        "top_right": "+",
        "bottom_left": "+",
        "bottom_right": "+",
        "horizontal": "-",
        "vertical": "|",
        "cross": "+",
        "tee_left": "+",
        "tee_right": "+",
        "tee_top": "+",
        "tee_bottom": "+",
    },
)

NEON_THEME = Theme(
    name="neon",
    colors={
        "debug": "color(240)",
        "info": "color(33)",
        "success": "color(46)",
        "warning": "color(226)",
        "error": "color(196)",
        "critical": "blink color(201)",
        "primary": "color(201)",
        "secondary": "color(51)",
        "muted": "color(240)",
        "accent": "color(51)",
    },
    symbols={
        "debug": "🔍",
        "info": "💡",
        "success": "✨",
        "warning": "⚡",
        "error": "💥",
        "critical": "🚨",
        "bullet": "▸",
        "arrow": "⟶",
        "check": "✓",
        "cross": "✗",
    },
    box={
        "top_left": "╔",
        "top_right": "╗",
        "bottom_left": "╚",
        "bottom_right": "╝",
        "horizontal": "═",
        "vertical": "║",
        "cross": "╬",
        "tee_left": "╠",
        "tee_right": "╣",
        "tee_top": "╦",
        "tee_bottom": "╩",
    },
)

DRACULA_THEME = Theme(
    name="dracula",
    colors={
        "debug": "#6272a4",
        "info": "#8be9fd",
        "success": "#50fa7b",
        "warning": "#ffb86c",
        "error": "#ff5555",
        "critical": "bold #ff5555",
        "primary": "#bd93f9",
        "secondary": "#8be9fd",
        "muted": "#6272a4",
        "accent": "#f1fa8c",
    },
    symbols={
        "debug": "⊙",
        "info": "ⓘ",
        "success": "✓",
        "warning": "⚠",
        "error": "✗",
        "critical": "⚠",
        "bullet": "▪",
        "arrow": "➜",
        "check": "✓",
        "cross": "✗",
    },
    box={
        **_UNICODE_BOX,
        "top_left": "╭",
        "top_right": "╮",
        "bottom_left": "╰",
        "bottom_right": "╯",
    },
)

THEMES: Mapping[str, Theme] = MappingProxyType(
    {theme.name: theme for theme in (DEFAULT_THEME, MINIMAL_THEME, NEON_THEME, DRACULA_THEME)}
)


def get_theme(name: str) -> Theme:
    """Return the built-in theme called ``name`` (case-insensitive).

    Examples
    --------
    >>> get_theme("NEON").name
    'neon'
    >>> get_theme("sepia")
    Traceback (most recent call last):
    ...
    ValueError: Unknown theme: 'sepia'
    """

    try:
        return THEMES[name.strip().lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown theme: {name!r}") from exc


__all__ = ["DEFAULT_THEME", "DRACULA_THEME", "MINIMAL_THEME", "NEON_THEME", "THEMES", "get_theme"]
