"""Preferences Manager - User preferences persisted in OS key-value storage."""

import logging
from typing import Optional

from PySide6.QtCore import QObject, QSettings, Signal

from gtranslator.services.settings_manager import SettingsManager

logger = logging.getLogger(__name__)

ORGANIZATION_NAME = "GTranslator"
APPLICATION_NAME = "GTranslator"


class PreferencesManager(QObject):
    """
    Observable preferences record backed by QSettings.

    Every setter writes through immediately and emits the matching
    *_changed signal. QSettings maps to NSUserDefaults on macOS.
    """

    KEY_API_KEY = "apiKey"
    KEY_OCR_API_KEY = "ocrApiKey"
    KEY_DEFAULT_TARGET_LANGUAGE = "defaultTargetLanguage"
    KEY_AUTO_COPY = "autoCopyToClipboard"
    KEY_FIRST_LAUNCH_DONE = "firstLaunchDone"

    DEFAULT_TARGET_LANGUAGE = "Italian"

    api_key_changed = Signal(str)
    ocr_api_key_changed = Signal(str)
    default_target_language_changed = Signal(str)
    auto_copy_to_clipboard_changed = Signal(bool)

    _shared: Optional["PreferencesManager"] = None

    def __init__(
        self,
        settings: Optional[QSettings] = None,
        settings_manager: Optional[SettingsManager] = None,
    ):
        super().__init__()
        self._settings = settings if settings is not None else QSettings(ORGANIZATION_NAME, APPLICATION_NAME)

        self._api_key = str(self._settings.value(self.KEY_API_KEY, ""))
        self._ocr_api_key = str(self._settings.value(self.KEY_OCR_API_KEY, ""))
        self._default_target_language = str(
            self._settings.value(self.KEY_DEFAULT_TARGET_LANGUAGE, self.DEFAULT_TARGET_LANGUAGE)
        )
        self._auto_copy = self._read_bool(self.KEY_AUTO_COPY, False)

        # Seed keys from the environment when nothing is stored yet
        if settings_manager is not None:
            if not self._api_key:
                seed = settings_manager.get_gemini_api_key()
                if seed:
                    logger.info("Seeding Gemini API key from environment")
                    self.api_key = seed
            if not self._ocr_api_key:
                seed = settings_manager.get_vision_api_key()
                if seed:
                    logger.info("Seeding OCR API key from environment")
                    self.ocr_api_key = seed

        if not self._read_bool(self.KEY_FIRST_LAUNCH_DONE, False):
            self.auto_copy_to_clipboard = True
            self._settings.setValue(self.KEY_FIRST_LAUNCH_DONE, True)
            self._settings.sync()

    @classmethod
    def shared(cls) -> "PreferencesManager":
        """Process-wide instance, created on first use."""
        if cls._shared is None:
            cls._shared = cls(settings_manager=SettingsManager())
        return cls._shared

    @classmethod
    def set_shared(cls, instance: Optional["PreferencesManager"]) -> None:
        cls._shared = instance

    @property
    def api_key(self) -> str:
        return self._api_key

    @api_key.setter
    def api_key(self, value: str) -> None:
        self._api_key = value
        self._store(self.KEY_API_KEY, value)
        self.api_key_changed.emit(value)

    @property
    def ocr_api_key(self) -> str:
        return self._ocr_api_key

    @ocr_api_key.setter
    def ocr_api_key(self, value: str) -> None:
        self._ocr_api_key = value
        self._store(self.KEY_OCR_API_KEY, value)
        self.ocr_api_key_changed.emit(value)

    @property
    def default_target_language(self) -> str:
        return self._default_target_language

    @default_target_language.setter
    def default_target_language(self, value: str) -> None:
        if value == self._default_target_language:
            return
        self._default_target_language = value
        self._store(self.KEY_DEFAULT_TARGET_LANGUAGE, value)
        self.default_target_language_changed.emit(value)

    @property
    def auto_copy_to_clipboard(self) -> bool:
        return self._auto_copy

    @auto_copy_to_clipboard.setter
    def auto_copy_to_clipboard(self, value: bool) -> None:
        self._auto_copy = bool(value)
        self._store(self.KEY_AUTO_COPY, self._auto_copy)
        self.auto_copy_to_clipboard_changed.emit(self._auto_copy)

    def _store(self, key: str, value) -> None:
        self._settings.setValue(key, value)
        self._settings.sync()

    def _read_bool(self, key: str, default: bool) -> bool:
        # INI backends hand booleans back as "true"/"false" strings
        value = self._settings.value(key, default)
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes")
        return bool(value)
