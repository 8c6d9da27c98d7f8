"""Built-in light/dark theme pairs."""

from __future__ import annotations

from .errors import ConfigurationError
from .models import Theme

DEFAULT_THEME_NAME = "Mono"

THEMES: dict[str, Theme] = {
    "Mono": Theme(light="#FFFFFF", dark="#000000"),
    "Paper": Theme(light="#FAF7F0", dark="#1F1B16"),
    "Slate": Theme(light="#F4F7FF", dark="#0A0F1D"),
    "Solar": Theme(light="#FFF7E8", dark="#362315"),
}


def list_themes() -> list[str]:
    return sorted(THEMES.keys())


def get_theme(name: str | None) -> Theme:
    if not name:
        return THEMES[DEFAULT_THEME_NAME]
    for key, theme in THEMES.items():
        if key.lower() == name.lower():
            return theme
    raise ConfigurationError(f"Unknown theme: {name}")
