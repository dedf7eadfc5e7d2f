"""Unit tests for PreferencesManager."""

from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QSettings

from gtranslator.services import PreferencesManager


def make_settings(path) -> QSettings:
    return QSettings(str(path), QSettings.Format.IniFormat)


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "preferences.ini"


@pytest.fixture
def preferences(settings_path):
    return PreferencesManager(settings=make_settings(settings_path))


class TestPreferencesDefaults:
    """First launch state."""

    def test_empty_keys(self, preferences):
        assert preferences.api_key == ""
        assert preferences.ocr_api_key == ""

    def test_default_target_language(self, preferences):
        assert preferences.default_target_language == "Italian"

    def test_first_launch_enables_auto_copy(self, preferences):
        assert preferences.auto_copy_to_clipboard is True

    def test_first_launch_marker_stored(self, preferences, settings_path):
        reopened = make_settings(settings_path)
        assert str(reopened.value(PreferencesManager.KEY_FIRST_LAUNCH_DONE)).lower() == "true"

    def test_auto_copy_not_reset_after_first_launch(self, preferences, settings_path):
        preferences.auto_copy_to_clipboard = False

        second = PreferencesManager(settings=make_settings(settings_path))
        assert second.auto_copy_to_clipboard is False


class TestPreferencesPersistence:
    """Every change is written through immediately."""

    def test_values_survive_new_instance(self, preferences, settings_path):
        preferences.api_key = "gemini-key"
        preferences.ocr_api_key = "vision-key"
        preferences.default_target_language = "Japanese"

        reloaded = PreferencesManager(settings=make_settings(settings_path))
        assert reloaded.api_key == "gemini-key"
        assert reloaded.ocr_api_key == "vision-key"
        assert reloaded.default_target_language == "Japanese"

    def test_change_signals(self, preferences):
        api_spy = MagicMock()
        language_spy = MagicMock()
        auto_copy_spy = MagicMock()
        preferences.api_key_changed.connect(api_spy)
        preferences.default_target_language_changed.connect(language_spy)
        preferences.auto_copy_to_clipboard_changed.connect(auto_copy_spy)

        preferences.api_key = "k"
        preferences.default_target_language = "French"
        preferences.auto_copy_to_clipboard = False

        api_spy.assert_called_once_with("k")
        language_spy.assert_called_once_with("French")
        auto_copy_spy.assert_called_once_with(False)

    def test_same_target_language_does_not_emit(self, preferences):
        spy = MagicMock()
        preferences.default_target_language_changed.connect(spy)

        preferences.default_target_language = "Italian"
        spy.assert_not_called()


class TestPreferencesSeeding:
    """API keys seeded from the environment."""

    def test_seeds_missing_keys(self, settings_path):
        settings_manager = MagicMock()
        settings_manager.get_gemini_api_key.return_value = "env-gemini"
        settings_manager.get_vision_api_key.return_value = "env-vision"

        preferences = PreferencesManager(settings=make_settings(settings_path), settings_manager=settings_manager)
        assert preferences.api_key == "env-gemini"
        assert preferences.ocr_api_key == "env-vision"

    def test_stored_key_wins_over_environment(self, preferences, settings_path):
        preferences.api_key = "stored"
        settings_manager = MagicMock()
        settings_manager.get_gemini_api_key.return_value = "env-gemini"
        settings_manager.get_vision_api_key.return_value = None

        reloaded = PreferencesManager(settings=make_settings(settings_path), settings_manager=settings_manager)
        assert reloaded.api_key == "stored"
        assert reloaded.ocr_api_key == ""


class TestPreferencesSingleton:
    def test_shared_returns_installed_instance(self, preferences):
        PreferencesManager.set_shared(preferences)
        try:
            assert PreferencesManager.shared() is preferences
            assert PreferencesManager.shared() is PreferencesManager.shared()
        finally:
            PreferencesManager.set_shared(None)
