"""
Tests for the settings store and the dark mode flag.
"""
import pytest

from core.models import ValidationError
from services.settings_service import SettingsService, resolve_setting_name
from ui.themes import DARK_CLASS, ThemeRoot

def test_defaults_without_stored_record(storage):
    service = SettingsService(storage)
    assert service.settings.tts_enabled is True
    assert service.settings.dark_mode is False
    assert storage.get_item("settings") is None

def test_update_leaves_other_settings_unchanged(storage):
    service = SettingsService(storage)
    before = service.settings.to_dict()

    service.update_settings(dark_mode=True)

    after = storage.load_json("settings")
    assert after["darkMode"] is True
    assert {k: v for k, v in after.items() if k != "darkMode"} == {
        k: v for k, v in before.items() if k != "darkMode"
    }

def test_update_accepts_stored_key_names(storage):
    service = SettingsService(storage)
    service.update_settings({"ttsEnabled": False})
    assert service.settings.tts_enabled is False

def test_update_rejects_unknown_or_non_boolean(storage):
    service = SettingsService(storage)
    with pytest.raises(ValidationError):
        service.update_settings(font_size=True)
    with pytest.raises(ValidationError):
        service.update_settings(dark_mode="yes")

def test_dark_mode_drives_theme_root(storage):
    root = ThemeRoot()
    service = SettingsService(storage, theme_root=root)

    service.toggle_dark_mode()
    assert root.has_class(DARK_CLASS)
    assert root.theme_name == "dark"
    assert root.theme["name"] == "Dark"

    service.toggle_dark_mode()
    assert not root.has_class(DARK_CLASS)

def test_stored_dark_mode_applied_on_start(storage):
    storage.save_json("settings", {"darkMode": True})
    root = ThemeRoot()
    service = SettingsService(storage, theme_root=root)
    assert service.settings.dark_mode is True
    assert root.has_class(DARK_CLASS)

def test_malformed_record_falls_back_to_defaults(storage):
    storage.set_item("settings", "[1, 2")
    assert SettingsService(storage).settings.browser_notifications is True

def test_toggle_returns_new_value(storage):
    service = SettingsService(storage)
    assert service.toggle("emailNotifications") is True
    assert service.toggle("email_notifications") is False

def test_resolve_setting_name():
    assert resolve_setting_name("darkMode") == "dark_mode"
    assert resolve_setting_name("dark_mode") == "dark_mode"
    with pytest.raises(ValidationError):
        resolve_setting_name("volume")

def test_stored_string_flag_does_not_enable_dark_mode(storage):
    storage.save_json("settings", {"darkMode": "false"})
    root = ThemeRoot()
    service = SettingsService(storage, theme_root=root)
    assert service.settings.dark_mode is False
    assert not root.has_class(DARK_CLASS)
