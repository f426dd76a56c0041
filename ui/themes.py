# ui/themes.py

import logging

logger = logging.getLogger(__name__)

DARK_CLASS = "dark"

THEMES = {
    "light": {
        "emoji": "☀️",
        "color": "#FFFFFF",
        "name": "Light"
    },
    "dark": {
        "emoji": "🌙",
        "color": "#111111",
        "name": "Dark"
    }
}

def get_theme(theme_name: str):
    return THEMES.get(theme_name, THEMES["light"])

class ThemeRoot:
    """Document-level presentation flags (the dark mode class lives here)"""

    def __init__(self):
        self.classes = set()

    def add_class(self, name: str) -> None:
        self.classes.add(name)

    def remove_class(self, name: str) -> None:
        self.classes.discard(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def apply_dark_mode(self, enabled: bool) -> None:
        if enabled:
            self.add_class(DARK_CLASS)
        else:
            self.remove_class(DARK_CLASS)
        logger.debug(f"Dark mode {'on' if enabled else 'off'}")

    @property
    def theme_name(self) -> str:
        return "dark" if self.has_class(DARK_CLASS) else "light"

    @property
    def theme(self):
        return get_theme(self.theme_name)
