from __future__ import annotations

import pytest
from rich.style import Style

from lib_console_styler.domain.levels import LogLevel
from lib_console_styler.domain.palettes import DEFAULT_THEME, MINIMAL_THEME, THEMES, get_theme
from lib_console_styler.domain.theme import ASCII_BOX, BOX_KEYS, COLOR_ROLES, SYMBOL_ROLES, Theme


def test_builtin_themes_are_registered_by_name() -> None:
    assert set(THEMES) == {"default", "minimal", "neon", "dracula"}
    assert get_theme("Dracula") is THEMES["dracula"]


def test_unknown_theme_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown theme"):
        get_theme("sepia")


@pytest.mark.parametrize("theme", list(THEMES.values()), ids=list(THEMES))
def test_builtin_themes_cover_every_role(theme: Theme) -> None:
    assert set(COLOR_ROLES) <= set(theme.colors)
    assert set(SYMBOL_ROLES) <= set(theme.symbols)
    assert set(BOX_KEYS) <= set(theme.box)


@pytest.mark.parametrize("theme", list(THEMES.values()), ids=list(THEMES))
def test_builtin_theme_colors_are_valid_rich_styles(theme: Theme) -> None:
    for style in theme.colors.values():
        Style.parse(style)


def test_theme_lookup_helpers() -> None:
    assert DEFAULT_THEME.color_for(LogLevel.ERROR) == "red"
    assert DEFAULT_THEME.symbol_for(LogLevel.SUCCESS) == "✅"
    assert MINIMAL_THEME.symbol_for(LogLevel.WARNING) == "[WRN]"
    assert DEFAULT_THEME.muted == DEFAULT_THEME.colors["muted"]


def test_box_glyphs_fall_back_to_ascii() -> None:
    assert DEFAULT_THEME.box_glyphs(unicode_enabled=True)["top_left"] == "┌"
    assert DEFAULT_THEME.box_glyphs(unicode_enabled=False) is ASCII_BOX


def test_theme_rejects_missing_roles() -> None:
    with pytest.raises(ValueError, match="missing colors"):
        Theme(name="partial", colors={"info": "blue"}, symbols=dict(DEFAULT_THEME.symbols), box=dict(ASCII_BOX))


def test_theme_mappings_are_read_only() -> None:
    with pytest.raises(TypeError):
        DEFAULT_THEME.colors["info"] = "green"  # type: ignore[index]
