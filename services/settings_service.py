"""
Settings store
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Optional

from core.database import KeyValueStorage
from core.models import Settings, ValidationError
from ui.themes import ThemeRoot

logger = logging.getLogger('healthmate')

SETTINGS_KEY = "settings"

def resolve_setting_name(name: str) -> str:
    """Accept either the attribute name (dark_mode) or the stored key (darkMode)"""
    if name in Settings.STORAGE_KEYS:
        return name
    for attr, storage_key in Settings.STORAGE_KEYS.items():
        if storage_key == name:
            return attr
    valid = sorted(Settings.STORAGE_KEYS)
    raise ValidationError(f"Unknown setting {name!r}, expected one of: {valid}")

class SettingsService:
    """Holds the settings record, persists every change, drives the dark mode flag"""

    def __init__(self, storage: KeyValueStorage, theme_root: Optional[ThemeRoot] = None):
        self.storage = storage
        self.theme_root = theme_root or ThemeRoot()
        self.settings = Settings()
        self._load()

    def _load(self) -> None:
        data = self.storage.load_json(SETTINGS_KEY)
        if data is None:
            return

        try:
            self.settings = Settings.from_dict(data)
        except ValidationError as e:
            logger.warning(f"⚠️ Stored settings ignored: {e}")
            return

        if self.settings.dark_mode:
            self.theme_root.apply_dark_mode(True)

    def update_settings(self, patch: Optional[Dict[str, Any]] = None, **changes) -> Settings:
        """Merge a partial patch, persist the full record, apply dark mode if it changed"""
        merged = dict(patch or {})
        merged.update(changes)
        resolved = {resolve_setting_name(name): value for name, value in merged.items()}

        for name, value in resolved.items():
            if not isinstance(value, bool):
                raise ValidationError(f"{name} must be a boolean")

        self.settings = replace(self.settings, **resolved)
        self.storage.save_json(SETTINGS_KEY, self.settings.to_dict())

        if "dark_mode" in resolved:
            self.theme_root.apply_dark_mode(resolved["dark_mode"])

        logger.info(f"⚙️ Settings updated: {', '.join(sorted(resolved)) or 'nothing'}")
        return self.settings

    def toggle_dark_mode(self) -> Settings:
        return self.update_settings(dark_mode=not self.settings.dark_mode)

    def toggle(self, name: str) -> bool:
        """Flip one boolean setting and return its new value"""
        attr = resolve_setting_name(name)
        new_value = not getattr(self.settings, attr)
        self.update_settings({attr: new_value})
        return new_value
