"""Preferences View - API keys, default language and auto-copy toggle."""

from typing import List

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from gtranslator.services import PreferencesManager

SAVED_BANNER_MS = 2000


class _ApiKeySection(QGroupBox):
    """Masked key field with Clear/Save buttons and a transient confirmation."""

    def __init__(self, title: str, placeholder: str, saved_message: str):
        super().__init__(title)

        layout = QVBoxLayout(self)

        self.key_edit = QLineEdit()
        self.key_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self.key_edit.setPlaceholderText(placeholder)
        layout.addWidget(self.key_edit)

        buttons = QHBoxLayout()
        self.clear_button = QPushButton("Clear")
        self.save_button = QPushButton("Save")
        buttons.addWidget(self.clear_button)
        buttons.addStretch()
        buttons.addWidget(self.save_button)
        layout.addLayout(buttons)

        self.saved_label = QLabel(saved_message)
        self.saved_label.setStyleSheet("color: green; font-size: 11px;")
        self.saved_label.hide()
        layout.addWidget(self.saved_label)

        self.clear_button.clicked.connect(self.key_edit.clear)
        self.save_button.clicked.connect(self.flash_saved)
        self.key_edit.textChanged.connect(self._refresh_buttons)
        self._refresh_buttons(self.key_edit.text())

    def flash_saved(self) -> None:
        self.saved_label.show()
        QTimer.singleShot(SAVED_BANNER_MS, self.saved_label.hide)

    def _refresh_buttons(self, text: str) -> None:
        has_key = bool(text)
        self.clear_button.setEnabled(has_key)
        self.save_button.setEnabled(has_key)


class PreferencesView(QWidget):
    """Form bound to PreferencesManager; every edit is persisted immediately."""

    def __init__(self, preferences: PreferencesManager, languages: List[str]):
        super().__init__()
        self.preferences = preferences

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 4, 12, 12)
        layout.setSpacing(12)

        self.gemini_section = _ApiKeySection("Gemini API", "Gemini API key", "API key saved!")
        self.gemini_section.key_edit.setText(preferences.api_key)
        self.gemini_section.key_edit.textChanged.connect(self._on_api_key_edited)
        layout.addWidget(self.gemini_section)

        self.ocr_section = _ApiKeySection("OCR API (Vision)", "OCR API key", "OCR API key saved!")
        self.ocr_section.key_edit.setText(preferences.ocr_api_key)
        self.ocr_section.key_edit.textChanged.connect(self._on_ocr_api_key_edited)
        layout.addWidget(self.ocr_section)

        general = QGroupBox("General Settings")
        form = QFormLayout(general)

        self.language_combo = QComboBox()
        self.language_combo.addItems(languages)
        self.language_combo.setCurrentText(preferences.default_target_language)
        self.language_combo.currentTextChanged.connect(self._on_language_selected)
        form.addRow("Default language", self.language_combo)

        self.auto_copy_checkbox = QCheckBox("Automatically copy to clipboard")
        self.auto_copy_checkbox.setChecked(preferences.auto_copy_to_clipboard)
        self.auto_copy_checkbox.toggled.connect(self._on_auto_copy_toggled)
        form.addRow(self.auto_copy_checkbox)

        layout.addWidget(general)
        layout.addStretch()

        preferences.default_target_language_changed.connect(self._sync_language)

    def _on_api_key_edited(self, text: str) -> None:
        self.preferences.api_key = text

    def _on_ocr_api_key_edited(self, text: str) -> None:
        self.preferences.ocr_api_key = text

    def _on_language_selected(self, language: str) -> None:
        if language:
            self.preferences.default_target_language = language

    def _on_auto_copy_toggled(self, checked: bool) -> None:
        self.preferences.auto_copy_to_clipboard = checked

    def _sync_language(self, language: str) -> None:
        if self.language_combo.currentText() != language:
            self.language_combo.setCurrentText(language)
