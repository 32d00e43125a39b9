"""
Persisted user preferences and colour themes.

Saved as JSON in the user's home directory so they survive across
sessions.  Only UI preferences live here; the graph itself is never
saved.
"""

import json
import logging
import os

from graph_model import DEFAULT, IN_QUEUE, VISITING, VISITED
from animation import DEFAULT_INTERVAL_MS

_LOGGER = logging.getLogger(__name__)

SETTINGS_ENV = "GRAPH_VIZ_SETTINGS"

# ═════════════════════════════════════════════════════════════════
#  THEME DEFINITIONS
#  Two Catppuccin-inspired palettes for the window chrome.  The
#  node-state fills are the same in both so traversal colours read
#  identically whichever theme is active.
# ═════════════════════════════════════════════════════════════════
_STATE_FILLS = {
    "NODE_DEFAULT":  "#2ecc71",    # green  — untouched
    "NODE_IN_QUEUE": "#3498db",    # blue   — discovered
    "NODE_VISITING": "#f39c12",    # orange — being expanded
    "NODE_VISITED":  "#a0a0a0",    # grey   — done
    "NODE_OUTLINE":  "#2c3e50",
    "NODE_TEXT":     "#000000",
}

THEMES = {
    # ── Dark theme (Catppuccin Mocha) ────────────────────────────
    "dark": {
        "BG": "#1e1e2e",           # Main window background
        "BG2": "#2a2a3d",          # Secondary panels / sidebars
        "FG": "#cdd6f4",           # Primary foreground text
        "ACCENT": "#89b4fa",       # Buttons, headings
        "GREEN_C": "#a6e3a1",      # Positive actions
        "RED_C": "#f38ba8",        # Reset / destructive actions
        "YELLOW_C": "#f9e2af",     # Selection ring, warnings
        "BTN_BG": "#45475a",       # Button face colour
        "CANVAS_BG": "#ecf0f1",    # Graph-drawing canvas
        "EDGE": "#34495e",         # Lines connecting nodes
        "STATS_BG": "#2a2a3d",     # Stats panel background
        "STATS_FG": "#bac2de",     # Stats panel text
        **_STATE_FILLS,
    },
    # ── Light theme (Catppuccin Latte) ───────────────────────────
    "light": {
        "BG": "#eff1f5",
        "BG2": "#dce0e8",
        "FG": "#4c4f69",
        "ACCENT": "#1e66f5",
        "GREEN_C": "#40a02b",
        "RED_C": "#d20f39",
        "YELLOW_C": "#df8e1d",
        "BTN_BG": "#ccd0da",
        "CANVAS_BG": "#ffffff",
        "EDGE": "#34495e",
        "STATS_BG": "#dce0e8",
        "STATS_FG": "#5c5f77",
        **_STATE_FILLS,
    },
}

# Node visual state → colour key
STATE_COLOR_KEYS = {
    DEFAULT:  "NODE_DEFAULT",
    IN_QUEUE: "NODE_IN_QUEUE",
    VISITING: "NODE_VISITING",
    VISITED:  "NODE_VISITED",
}

# Colours the settings dialog lets the user override
EDITABLE_COLOR_KEYS = (
    "NODE_DEFAULT", "NODE_IN_QUEUE", "NODE_VISITING", "NODE_VISITED",
    "EDGE", "CANVAS_BG",
)


def default_path() -> str:
    """Settings file location; ``$GRAPH_VIZ_SETTINGS`` wins if set."""
    return os.environ.get(SETTINGS_ENV) or os.path.join(
        os.path.expanduser("~"), ".graph_traversal_v1.json")


class Settings:
    """
    Persistent user preferences manager.

    Attributes:
        theme        (str) : Active theme name ("dark" / "light").
        anim_speed   (int) : Milliseconds per animation tick.
        custom_colors(dict): Key→hex overrides on top of the theme.
        path         (str) : JSON file backing these settings.
    """

    def __init__(self, path=None, load=True):
        self.path          = path or default_path()
        self.theme         = "dark"
        self.anim_speed    = DEFAULT_INTERVAL_MS
        self.custom_colors = {}
        if load:
            self._load()

    # ── Load from disk ──────────────────────────────────────────
    def _load(self):
        """Read the settings JSON; keep defaults if missing or corrupt."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path) as f:
                d = json.load(f)
        except (OSError, ValueError) as e:
            _LOGGER.warning("ignoring unreadable settings %s: %s", self.path, e)
            return
        if not isinstance(d, dict):
            _LOGGER.warning("ignoring settings %s: expected an object, got %s",
                            self.path, type(d).__name__)
            return

        theme = d.get("theme", "dark")
        self.theme = theme if isinstance(theme, str) and theme in THEMES else "dark"

        try:
            speed = int(d.get("anim_speed", DEFAULT_INTERVAL_MS))
        except (TypeError, ValueError):
            speed = 0
        if speed > 0:
            self.anim_speed = speed
        else:
            _LOGGER.warning("ignoring bad anim_speed %r in %s",
                            d.get("anim_speed"), self.path)

        colors = d.get("custom_colors", {})
        if isinstance(colors, dict):
            self.custom_colors = {k: v for k, v in colors.items()
                                  if isinstance(v, str)}
        else:
            _LOGGER.warning("ignoring bad custom_colors %r in %s",
                            colors, self.path)

    # ── Save to disk ────────────────────────────────────────────
    def save(self):
        """Write settings to disk; returns False if the write failed."""
        try:
            with open(self.path, "w") as f:
                json.dump({"theme": self.theme,
                           "anim_speed": self.anim_speed,
                           "custom_colors": self.custom_colors}, f)
        except OSError as e:
            _LOGGER.warning("could not save settings to %s: %s", self.path, e)
            return False
        return True

    # ── Colour lookup ───────────────────────────────────────────
    def get(self, key):
        """
        Resolve a colour key to its hex value.

        Priority: custom_colors[key]  →  THEMES[theme][key]  →  "#ffffff"
        """
        if key in self.custom_colors:
            return self.custom_colors[key]
        return self.theme_color(key)

    def state_color(self, state):
        """Fill colour for a node visual state."""
        return self.get(STATE_COLOR_KEYS.get(state, "NODE_DEFAULT"))

    def theme_color(self, key):
        """Theme value for *key*, ignoring any custom override."""
        return THEMES.get(self.theme, THEMES["dark"]).get(key, "#ffffff")

    def set_color(self, key, value):
        """
        Override one colour.  Setting a key back to its theme value
        drops the override so a later theme switch applies to it again.
        """
        if key not in EDITABLE_COLOR_KEYS:
            raise KeyError(key)
        if value is None or value.lower() == self.theme_color(key).lower():
            self.custom_colors.pop(key, None)
        else:
            self.custom_colors[key] = value

    def reset_colors(self):
        self.custom_colors = {}
