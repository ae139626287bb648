# theme.py
"""
Dark/light theme preference and the animation palette it implies.

The preference is a single boolean kept in a small JSON file so it
survives restarts. Palettes are resolved from the theme colors in
config.json, color by color, with the built-in defaults filling any gap.
"""
import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from constants import (
    ANIMATION_COLOR_NAMES, DARK_BACKGROUND_COLOR, DEFAULT_ANIMATION_COLORS,
    LIGHT_BACKGROUND_COLOR
)

# --- Data Contracts ---
#
# class ThemeStore:
#   - __init__(self, path: str, default_dark: bool = True):
#     - Reads {"dark": bool} from path. A missing file uses default_dark;
#       an unreadable or malformed one logs a warning and does the same.
#   - toggle(self) -> bool:
#     - Flips the preference, writes it back and returns the new value.
#
# animation_palette(theme_colors: Optional[Dict[str, Dict[str, str]]], dark: bool) -> List[str]:
#   - Outputs: five colors ordered as ANIMATION_COLOR_NAMES. Missing or
#     blank entries fall back to DEFAULT_ANIMATION_COLORS.


def theme_name(dark: bool) -> str:
    return "dark" if dark else "light"


def animation_palette(theme_colors: Optional[Dict[str, Dict[str, str]]], dark: bool) -> List[str]:
    """Resolves the five animation colors for the active theme."""
    named = (theme_colors or {}).get(theme_name(dark)) or {}
    palette = []
    for name, fallback in zip(ANIMATION_COLOR_NAMES, DEFAULT_ANIMATION_COLORS):
        value = named.get(name)
        if isinstance(value, str) and value.strip():
            palette.append(value.strip())
        else:
            palette.append(fallback)
    return palette


def background_color(backgrounds: Optional[Dict[str, Any]], dark: bool) -> Tuple[int, int, int]:
    """Window background for the active theme."""
    default = DARK_BACKGROUND_COLOR if dark else LIGHT_BACKGROUND_COLOR
    value = (backgrounds or {}).get(theme_name(dark))
    if isinstance(value, (list, tuple)) and len(value) == 3:
        try:
            return tuple(int(c) for c in value)
        except (TypeError, ValueError):
            logging.warning(f"Invalid {theme_name(dark)} background {value!r}, using default.")
    return default


class ThemeStore:
    """
    Persists the dark-mode preference.
    """
    def __init__(self, path: str, default_dark: bool = True):
        self.path = path
        self.dark = default_dark
        self._load(default_dark)

    def _load(self, default_dark: bool) -> None:
        if not os.path.exists(self.path):
            logging.info(f"No theme preference at {self.path}, using {theme_name(default_dark)}.")
            return
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logging.warning(f"Could not read theme preference from {self.path}: {e}")
            return

        dark = data.get('dark') if isinstance(data, dict) else None
        if isinstance(dark, bool):
            self.dark = dark
            logging.info(f"Theme preference loaded: {theme_name(dark)}.")
        else:
            logging.warning(f"Theme preference in {self.path} is malformed, using {theme_name(default_dark)}.")

    def save(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump({'dark': self.dark}, f)
        logging.debug(f"Theme preference saved to {self.path}.")

    def toggle(self) -> bool:
        self.dark = not self.dark
        self.save()
        logging.info(f"Theme switched to {theme_name(self.dark)}.")
        return self.dark
