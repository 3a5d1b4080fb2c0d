"""Theme value object bundling colours, symbols and box glyphs.

Purpose
-------
Represent a named, immutable visual identity so theme selection is a
configuration value rather than a code branch.

Contents
--------
* :data:`COLOR_ROLES`, :data:`SYMBOL_ROLES`, :data:`BOX_KEYS` – required keys.
* :data:`ASCII_BOX` – glyph set used when unicode output is disabled.
* :class:`Theme` – frozen dataclass with lookup helpers.

System Role
-----------
Consumed by the render pipeline (level colours and symbols) and by external
renderers (box glyphs). Built-in instances live in :mod:`.palettes`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .levels import LogLevel

_LEVEL_ROLES = tuple(level.severity for level in LogLevel)

COLOR_ROLES: tuple[str, ...] = _LEVEL_ROLES + ("primary", "secondary", "muted", "accent")
SYMBOL_ROLES: tuple[str, ...] = _LEVEL_ROLES + ("bullet", "arrow", "check", "cross")
BOX_KEYS: tuple[str, ...] = (
    "top_left",
    "top_right",
    "bottom_left",
    "bottom_right",
    "horizontal",
    "vertical",
    "cross",
    "tee_left",
    "tee_right",
    "tee_top",
    "tee_bottom",
)

ASCII_BOX: Mapping[str, str] = MappingProxyType(
    {
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
    }
)


def _frozen(name: str, kind: str, values: Mapping[str, str], required: tuple[str, ...]) -> Mapping[str, str]:
    missing = [key for key in required if key not in values]
    if missing:
        raise ValueError(f"theme {name!r} is missing {kind}: " + ", ".join(missing))
    return MappingProxyType(dict(values))


@dataclass(slots=True, frozen=True)
class Theme:
    """Named bundle of Rich styles, level symbols and box-drawing glyphs.

    Colours are Rich style strings (``"bold red"``, ``"#ff5555"``); symbols are
    plain strings shown before the message when emoji output is active.
    """

    name: str
    colors: Mapping[str, str]
    symbols: Mapping[str, str]
    box: Mapping[str, str]

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("theme name must not be empty")
        object.__setattr__(self, "colors", _frozen(self.name, "colors", self.colors, COLOR_ROLES))
        object.__setattr__(self, "symbols", _frozen(self.name, "symbols", self.symbols, SYMBOL_ROLES))
        object.__setattr__(self, "box", _frozen(self.name, "box glyphs", self.box, BOX_KEYS))

    def color_for(self, level: LogLevel) -> str:
        """Return the Rich style used for ``level``."""

        return self.colors[level.severity]

    def symbol_for(self, level: LogLevel) -> str:
        """Return the symbol shown before messages of ``level``."""

        return self.symbols[level.severity]

    @property
    def muted(self) -> str:
        """Return the style used for timestamps and other secondary text."""

        return self.colors["muted"]

    def box_glyphs(self, *, unicode_enabled: bool) -> Mapping[str, str]:
        """Return this theme's glyphs, or the ASCII set when unicode is off."""

        return self.box if unicode_enabled else ASCII_BOX


__all__ = ["ASCII_BOX", "BOX_KEYS", "COLOR_ROLES", "SYMBOL_ROLES", "Theme"]
