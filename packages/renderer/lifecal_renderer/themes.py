"""Built-in wallpaper palettes."""

from __future__ import annotations

from dataclasses import dataclass, replace

DEFAULT_THEME_NAME = "Midnight"
DEFAULT_ACCENT = "#ff6b6b"
DEFAULT_FONT_FAMILY = "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif"


@dataclass(frozen=True)
class Palette:
    name: str
    background: str
    foreground: str
    muted: str
    empty: str
    text_secondary: str
    accent: str = DEFAULT_ACCENT
    font_family: str = DEFAULT_FONT_FAMILY

    def with_overrides(self, **overrides: str | None) -> Palette:
        """Return a copy with every non-empty override applied."""
        changes = {k: v for k, v in overrides.items() if v}
        return replace(self, **changes) if changes else self


THEMES: dict[str, Palette] = {
    "Midnight": Palette(
        name="Midnight",
        background="#000000",
        foreground="#ffffff",
        muted="#333333",
        empty="#222222",
        text_secondary="#888888",
    ),
    "Graphite": Palette(
        name="Graphite",
        background="#16181d",
        foreground="#e8eaf0",
        muted="#3a3f4b",
        empty="#2a2e37",
        text_secondary="#9aa1b2",
    ),
    "Paper": Palette(
        name="Paper",
        background="#f5f1e8",
        foreground="#1f1f1f",
        muted="#c9c2b3",
        empty="#ddd6c7",
        text_secondary="#6f6a60",
    ),
}


def list_themes() -> list[str]:
    return sorted(THEMES.keys())


def get_palette(name: str | None) -> Palette:
    if not name:
        return THEMES[DEFAULT_THEME_NAME]
    return THEMES.get(name, THEMES[DEFAULT_THEME_NAME])
