"""Terminal styling for skillbook (dark/light themes)."""

from utils.tui.theme import Theme, get_theme, set_theme

__all__ = [
    "Theme",
    "get_theme",
    "set_theme",
]
