"""Popover View - the translator panel shown from the menu-bar icon."""

from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QProgressBar,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from gtranslator.core import AUTO_LANGUAGE, LanguageTable
from gtranslator.services import PreferencesManager
from gtranslator.ui.drop_zone import DropZone
from gtranslator.ui.preferences_view import PreferencesView

POPOVER_WIDTH = 380
POPOVER_HEIGHT = 580


def _text_area(height: int) -> QPlainTextEdit:
    area = QPlainTextEdit()
    area.setFixedHeight(height)
    area.setStyleSheet("QPlainTextEdit { border: 1px solid rgba(128, 128, 128, 50); border-radius: 8px; }")
    return area


class PopoverView(QWidget):
    """
    Main page (pickers, input, drop zone, context, result, actions) plus an
    embedded preferences page.

    Holds no service references; TranslationCoordinator drives it.
    """

    translate_clicked = Signal()
    clipboard_clicked = Signal()
    copy_clicked = Signal()
    clear_clicked = Signal()
    quit_clicked = Signal()
    file_dropped = Signal(Path)

    MAIN_PAGE = 0
    PREFERENCES_PAGE = 1

    def __init__(self, preferences: PreferencesManager, languages: LanguageTable):
        super().__init__()
        self.preferences = preferences
        self.languages = languages
        self._loading = False
        self._detected_language: Optional[str] = None

        self.setFixedSize(POPOVER_WIDTH, POPOVER_HEIGHT)

        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        self.stack = QStackedWidget()
        outer.addWidget(self.stack)

        self.stack.addWidget(self._build_main_page())
        self.stack.addWidget(self._build_preferences_page())

        preferences.default_target_language_changed.connect(self._sync_target_language)
        self._refresh_actions()

    # Construction

    def _build_main_page(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(10)

        header = QHBoxLayout()
        title = QLabel("GTranslator")
        title.setStyleSheet("font-weight: bold;")
        header.addWidget(title)
        header.addStretch()
        self.preferences_button = QPushButton("⚙")
        self.preferences_button.setFlat(True)
        self.preferences_button.setToolTip("Preferences")
        self.preferences_button.clicked.connect(self.show_preferences)
        header.addWidget(self.preferences_button)
        layout.addLayout(header)

        pickers = QHBoxLayout()
        self.source_combo = QComboBox()
        self.source_combo.addItems(self.languages.source_names())
        self.source_combo.setCurrentText(AUTO_LANGUAGE)
        self.source_combo.setFixedWidth(140)
        self.source_combo.currentTextChanged.connect(lambda _: self._refresh_detected_label())
        pickers.addWidget(self.source_combo)
        arrow = QLabel("→")
        arrow.setStyleSheet("color: gray;")
        pickers.addWidget(arrow)
        self.target_combo = QComboBox()
        self.target_combo.addItems(self.languages.target_names())
        self.target_combo.setCurrentText(self.preferences.default_target_language)
        self.target_combo.setFixedWidth(140)
        self.target_combo.currentTextChanged.connect(self._on_target_changed)
        pickers.addWidget(self.target_combo)
        pickers.addStretch()
        layout.addLayout(pickers)

        self.input_edit = _text_area(80)
        self.input_edit.textChanged.connect(self._refresh_actions)
        layout.addWidget(self.input_edit)

        self.drop_zone = DropZone()
        self.drop_zone.file_dropped.connect(self.file_dropped.emit)
        layout.addWidget(self.drop_zone)

        self.extracted_frame = QWidget()
        self.extracted_frame.setStyleSheet("background: rgba(47, 123, 245, 25); border-radius: 8px;")
        extracted_layout = QVBoxLayout(self.extracted_frame)
        extracted_layout.setContentsMargins(8, 4, 8, 4)
        self.extracted_caption = QLabel("")
        self.extracted_caption.setStyleSheet("color: gray; font-size: 11px;")
        extracted_layout.addWidget(self.extracted_caption)
        self.extracted_label = QLabel("")
        self.extracted_label.setWordWrap(True)
        self.extracted_label.setStyleSheet("font-size: 11px;")
        extracted_layout.addWidget(self.extracted_label)
        self.extracted_frame.hide()
        layout.addWidget(self.extracted_frame)

        self.context_button = QPushButton("+ Add context")
        self.context_button.setFlat(True)
        self.context_button.setStyleSheet("text-align: left; font-size: 11px;")
        self.context_button.clicked.connect(self.toggle_context)
        layout.addWidget(self.context_button)
        self.context_edit = _text_area(60)
        self.context_edit.hide()
        layout.addWidget(self.context_edit)

        self.detected_label = QLabel("")
        self.detected_label.setStyleSheet("color: gray; font-size: 11px;")
        self.detected_label.hide()
        layout.addWidget(self.detected_label)

        buttons = QHBoxLayout()
        self.translate_button = QPushButton("Translate")
        self.translate_button.clicked.connect(self.translate_clicked.emit)
        self.clipboard_button = QPushButton("From clipboard")
        self.clipboard_button.clicked.connect(self.clipboard_clicked.emit)
        buttons.addWidget(self.translate_button)
        buttons.addWidget(self.clipboard_button)
        layout.addLayout(buttons)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 0)
        self.progress_bar.setFixedHeight(6)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.hide()
        layout.addWidget(self.progress_bar)

        self.error_label = QLabel("")
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet("color: red; font-size: 11px;")
        self.error_label.hide()
        layout.addWidget(self.error_label)

        result_caption = QLabel("Result:")
        result_caption.setStyleSheet("color: gray; font-size: 11px;")
        layout.addWidget(result_caption)
        self.result_view = _text_area(100)
        self.result_view.setReadOnly(True)
        self.result_view.textChanged.connect(self._refresh_actions)
        layout.addWidget(self.result_view)

        actions = QHBoxLayout()
        self.copy_button = QPushButton("Copy")
        self.copy_button.clicked.connect(self.copy_clicked.emit)
        self.clear_button = QPushButton("Clear")
        self.clear_button.clicked.connect(self.clear_clicked.emit)
        self.quit_button = QPushButton("Quit")
        self.quit_button.clicked.connect(self.quit_clicked.emit)
        actions.addWidget(self.copy_button)
        actions.addStretch()
        actions.addWidget(self.clear_button)
        actions.addStretch()
        actions.addWidget(self.quit_button)
        layout.addLayout(actions)

        layout.addStretch()
        return page

    def _build_preferences_page(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setContentsMargins(0, 8, 0, 0)

        back_row = QHBoxLayout()
        self.back_button = QPushButton("← Back")
        self.back_button.setFlat(True)
        self.back_button.clicked.connect(self.show_main)
        back_row.addWidget(self.back_button)
        back_row.addStretch()
        layout.addLayout(back_row)

        self.preferences_view = PreferencesView(self.preferences, self.languages.target_names())
        layout.addWidget(self.preferences_view)
        return page

    # Reads

    def input_text(self) -> str:
        return self.input_edit.toPlainText()

    def result_text(self) -> str:
        return self.result_view.toPlainText()

    def context_text(self) -> str:
        return self.context_edit.toPlainText()

    def source_language(self) -> str:
        return self.source_combo.currentText()

    def target_language(self) -> str:
        return self.target_combo.currentText()

    def is_context_visible(self) -> bool:
        return not self.context_edit.isHidden()

    def is_loading(self) -> bool:
        return self._loading

    # Writes

    def set_input_text(self, text: str) -> None:
        self.input_edit.setPlainText(text)

    def set_result_text(self, text: str) -> None:
        self.result_view.setPlainText(text)

    def set_loading(self, loading: bool) -> None:
        self._loading = loading
        self.progress_bar.setVisible(loading)
        self._refresh_actions()

    def set_error(self, message: Optional[str]) -> None:
        self.error_label.setText(message or "")
        self.error_label.setVisible(bool(message))

    def set_detected_language(self, language: Optional[str]) -> None:
        self._detected_language = language
        self._refresh_detected_label()

    def show_extracted_text(self, text: str, source: str) -> None:
        self.extracted_caption.setText(f"Text extracted from {source}:")
        lines = text.splitlines()
        preview = "\n".join(lines[:3]) + ("…" if len(lines) > 3 else "")
        self.extracted_label.setText(preview)
        self.extracted_frame.setVisible(bool(text))

    def hide_extracted_text(self) -> None:
        self.extracted_label.clear()
        self.extracted_frame.hide()

    def is_extracted_text_visible(self) -> bool:
        return not self.extracted_frame.isHidden()

    def toggle_context(self) -> None:
        visible = not self.is_context_visible()
        self.context_edit.setVisible(visible)
        self.context_button.setText("- Hide context" if visible else "+ Add context")

    def select_all(self) -> None:
        target = self.focusWidget()
        if isinstance(target, QPlainTextEdit):
            target.selectAll()
        else:
            self.input_edit.selectAll()

    def show_preferences(self) -> None:
        self.stack.setCurrentIndex(self.PREFERENCES_PAGE)

    def show_main(self) -> None:
        self.stack.setCurrentIndex(self.MAIN_PAGE)

    def is_showing_preferences(self) -> bool:
        return self.stack.currentIndex() == self.PREFERENCES_PAGE

    # Internal state

    def _refresh_actions(self) -> None:
        has_input = bool(self.input_text())
        has_result = bool(self.result_text())
        self.translate_button.setEnabled(has_input and not self._loading)
        self.clipboard_button.setEnabled(not self._loading)
        self.copy_button.setEnabled(has_result)
        self.clear_button.setEnabled(has_input or has_result)

    def _refresh_detected_label(self) -> None:
        language = self._detected_language
        show = self.source_language() == AUTO_LANGUAGE and bool(language) and language != AUTO_LANGUAGE
        self.detected_label.setText(f"Detected language: {language}" if show else "")
        self.detected_label.setVisible(show)

    def _on_target_changed(self, language: str) -> None:
        if language:
            self.preferences.default_target_language = language

    def _sync_target_language(self, language: str) -> None:
        if self.target_combo.currentText() != language:
            self.target_combo.setCurrentText(language)
