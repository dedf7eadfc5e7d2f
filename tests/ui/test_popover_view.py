#!/usr/bin/env python3
"""
Tests for PopoverView and PreferencesView - widget state driven by preferences.
"""

from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from gtranslator.core import AUTO_LANGUAGE, LanguageTable
from gtranslator.services import PreferencesManager
from gtranslator.ui import PopoverView, PreferencesView


def ensure_qt_app():
    if QApplication.instance() is None:
        QApplication([])


@pytest.fixture
def preferences(tmp_path):
    ensure_qt_app()
    settings = QSettings(str(tmp_path / "prefs.ini"), QSettings.Format.IniFormat)
    return PreferencesManager(settings=settings)


@pytest.fixture
def view(preferences):
    return PopoverView(preferences, LanguageTable())


class TestPopoverInitialState:
    def test_pickers(self, view):
        assert view.source_language() == AUTO_LANGUAGE
        assert view.target_language() == "Italian"
        assert view.target_combo.findText(AUTO_LANGUAGE) == -1

    def test_actions_disabled_without_text(self, view):
        assert not view.translate_button.isEnabled()
        assert view.clipboard_button.isEnabled()
        assert not view.copy_button.isEnabled()
        assert not view.clear_button.isEnabled()

    def test_hidden_sections(self, view):
        assert not view.is_context_visible()
        assert not view.is_extracted_text_visible()
        assert view.detected_label.isHidden()
        assert view.error_label.isHidden()


class TestPopoverState:
    def test_input_enables_translate_and_clear(self, view):
        view.set_input_text("Hello")
        assert view.translate_button.isEnabled()
        assert view.clear_button.isEnabled()

    def test_loading_disables_buttons(self, view):
        view.set_input_text("Hello")
        view.set_loading(True)
        assert view.is_loading()
        assert not view.translate_button.isEnabled()
        assert not view.clipboard_button.isEnabled()
        assert not view.progress_bar.isHidden()

        view.set_loading(False)
        assert view.translate_button.isEnabled()

    def test_result_enables_copy(self, view):
        view.set_result_text("Ciao")
        assert view.result_text() == "Ciao"
        assert view.copy_button.isEnabled()
        assert view.result_view.isReadOnly()

    def test_error_label(self, view):
        view.set_error("Boom")
        assert view.error_label.text() == "Boom"
        assert not view.error_label.isHidden()
        view.set_error(None)
        assert view.error_label.isHidden()

    def test_context_toggle(self, view):
        view.toggle_context()
        assert view.is_context_visible()
        assert view.context_button.text() == "- Hide context"
        view.toggle_context()
        assert not view.is_context_visible()
        assert view.context_button.text() == "+ Add context"

    def test_detected_language_only_for_auto(self, view):
        view.set_detected_language("German")
        assert view.detected_label.text() == "Detected language: German"
        assert not view.detected_label.isHidden()

        view.source_combo.setCurrentText("English")
        assert view.detected_label.isHidden()

    def test_detected_auto_is_not_shown(self, view):
        view.set_detected_language(AUTO_LANGUAGE)
        assert view.detected_label.isHidden()

    def test_extracted_text_preview(self, view):
        view.show_extracted_text("one\ntwo\nthree\nfour", "clipboard image")
        assert view.is_extracted_text_visible()
        assert view.extracted_caption.text() == "Text extracted from clipboard image:"
        assert view.extracted_label.text() == "one\ntwo\nthree…"

        view.hide_extracted_text()
        assert not view.is_extracted_text_visible()

    def test_buttons_emit_signals(self, view):
        spy = MagicMock()
        view.translate_clicked.connect(spy)
        view.set_input_text("Hello")
        view.translate_button.click()
        spy.assert_called_once()

    def test_preferences_page(self, view):
        view.show_preferences()
        assert view.is_showing_preferences()
        view.back_button.click()
        assert not view.is_showing_preferences()


class TestTargetLanguageBinding:
    def test_picker_updates_preferences(self, view, preferences):
        view.target_combo.setCurrentText("Japanese")
        assert preferences.default_target_language == "Japanese"

    def test_preferences_update_picker(self, view, preferences):
        preferences.default_target_language = "French"
        assert view.target_language() == "French"
        assert view.preferences_view.language_combo.currentText() == "French"


class TestPreferencesView:
    def test_loads_current_values(self, preferences):
        preferences.api_key = "gemini-key"
        form = PreferencesView(preferences, LanguageTable().target_names())

        assert form.gemini_section.key_edit.text() == "gemini-key"
        assert form.ocr_section.key_edit.text() == ""
        assert form.language_combo.currentText() == "Italian"
        assert form.auto_copy_checkbox.isChecked()

    def test_edits_persist_immediately(self, preferences):
        form = PreferencesView(preferences, LanguageTable().target_names())

        form.ocr_section.key_edit.setText("vision-key")
        form.auto_copy_checkbox.setChecked(False)
        form.language_combo.setCurrentText("Spanish")

        assert preferences.ocr_api_key == "vision-key"
        assert preferences.auto_copy_to_clipboard is False
        assert preferences.default_target_language == "Spanish"

    def test_key_buttons_follow_field(self, preferences):
        form = PreferencesView(preferences, LanguageTable().target_names())
        section = form.gemini_section

        assert not section.save_button.isEnabled()
        section.key_edit.setText("abc")
        assert section.save_button.isEnabled()
        assert section.clear_button.isEnabled()

        section.clear_button.click()
        assert section.key_edit.text() == ""
        assert preferences.api_key == ""
        assert not section.clear_button.isEnabled()

    def test_save_shows_confirmation(self, preferences):
        form = PreferencesView(preferences, LanguageTable().target_names())
        form.gemini_section.key_edit.setText("abc")

        form.gemini_section.save_button.click()

        assert not form.gemini_section.saved_label.isHidden()
