#!/usr/bin/env python3
"""
Tests for MenuBarShell - popover placement, dismissal and shortcut dispatch.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QEvent, QMimeData, QPoint, QRect, QSize, Qt, QUrl
from PySide6.QtWidgets import QApplication, QWidget

from gtranslator.ui import MenuBarShell, NotificationBus
from gtranslator.ui.drop_zone import DropZone, first_local_file
from gtranslator.ui.menu_bar_shell import popover_position
from gtranslator.ui.shortcuts import ShortcutAction


def ensure_qt_app():
    if QApplication.instance() is None:
        QApplication([])


@pytest.fixture
def bus():
    ensure_qt_app()
    return NotificationBus()


@pytest.fixture
def shell(bus):
    popover = QWidget()
    popover.resize(380, 580)
    shell = MenuBarShell(popover, bus)
    yield shell
    popover.hide()


def window_watched():
    watched = MagicMock()
    watched.isWindowType.return_value = True
    return watched


def key_event(key, modifiers=Qt.KeyboardModifier.ControlModifier):
    event = MagicMock()
    event.type.return_value = QEvent.Type.KeyPress
    event.key.return_value = key
    event.modifiers.return_value = modifiers
    return event


def click_event(global_point: QPoint):
    event = MagicMock()
    event.type.return_value = QEvent.Type.MouseButtonPress
    event.globalPosition.return_value.toPoint.return_value = global_point
    return event


class TestPopoverPosition:
    available = QRect(0, 0, 1440, 900)

    def test_opens_below_top_anchor(self):
        point = popover_position(QRect(700, 0, 22, 22), QSize(380, 580), self.available)
        # QRect bottom() and center() are inclusive integer coordinates
        assert point.y() == 21 + 6
        assert point.x() == 710 - 190

    def test_opens_above_bottom_anchor(self):
        point = popover_position(QRect(700, 870, 22, 22), QSize(380, 580), self.available)
        assert point.y() == 870 - 580 - 6

    def test_clamped_to_screen(self):
        point = popover_position(QRect(1430, 0, 10, 10), QSize(380, 580), self.available)
        assert point.x() == 1439 - 380


class TestDispatch:
    @pytest.mark.parametrize(
        "action, signal_name",
        [
            (ShortcutAction.TRANSLATE, "translate_requested"),
            (ShortcutAction.TRANSLATE_CLIPBOARD, "translate_clipboard_requested"),
            (ShortcutAction.COPY_RESULT, "copy_result_requested"),
            (ShortcutAction.SELECT_ALL, "select_all_requested"),
            (ShortcutAction.CLEAR_ALL, "clear_all_requested"),
            (ShortcutAction.TOGGLE_CONTEXT, "toggle_context_requested"),
            (ShortcutAction.OPEN_PREFERENCES, "show_preferences_requested"),
        ],
    )
    def test_action_emits_bus_signal(self, shell, bus, action, signal_name):
        spy = MagicMock()
        getattr(bus, signal_name).connect(spy)

        shell.dispatch(action)

        spy.assert_called_once()

    def test_preferences_request_opens_popover(self, shell, bus):
        bus.show_preferences_requested.emit()
        assert shell.is_popover_shown()


class TestEventFilter:
    def test_shortcut_consumed_when_popover_shown(self, shell, bus):
        spy = MagicMock()
        bus.translate_requested.connect(spy)
        shell.show_popover()

        consumed = shell.eventFilter(window_watched(), key_event(Qt.Key.Key_T))

        assert consumed is True
        spy.assert_called_once()

    def test_shortcut_passes_through_when_hidden(self, shell, bus):
        spy = MagicMock()
        bus.translate_requested.connect(spy)

        assert shell.eventFilter(window_watched(), key_event(Qt.Key.Key_T)) is False
        spy.assert_not_called()

    def test_plain_key_passes_through(self, shell):
        shell.show_popover()
        event = key_event(Qt.Key.Key_T, Qt.KeyboardModifier.NoModifier)
        assert shell.eventFilter(window_watched(), event) is False

    def test_non_window_objects_ignored(self, shell, bus):
        spy = MagicMock()
        bus.translate_requested.connect(spy)
        shell.show_popover()
        watched = MagicMock()
        watched.isWindowType.return_value = False

        assert shell.eventFilter(watched, key_event(Qt.Key.Key_T)) is False
        spy.assert_not_called()

    def test_second_outside_click_closes_popover(self, shell):
        shell.show_popover()
        outside = shell.popover.frameGeometry().bottomRight() + QPoint(200, 200)

        shell.eventFilter(window_watched(), click_event(outside))
        assert shell.is_popover_shown()

        shell.eventFilter(window_watched(), click_event(outside))
        assert not shell.is_popover_shown()

    def test_inside_click_does_not_close(self, shell):
        shell.show_popover()
        inside = shell.popover.frameGeometry().center()

        shell.eventFilter(window_watched(), click_event(inside))
        shell.eventFilter(window_watched(), click_event(inside))

        assert shell.is_popover_shown()

    def test_reopening_resets_dismissal(self, shell):
        shell.show_popover()
        outside = shell.popover.frameGeometry().bottomRight() + QPoint(200, 200)
        shell.eventFilter(window_watched(), click_event(outside))
        shell.close_popover()

        shell.show_popover()
        shell.eventFilter(window_watched(), click_event(outside))

        assert shell.is_popover_shown()

    def test_toggle(self, shell):
        shell.toggle_popover()
        assert shell.is_popover_shown()
        shell.toggle_popover()
        assert not shell.is_popover_shown()


class TestDropZone:
    def test_first_local_file(self, tmp_path):
        ensure_qt_app()
        mime = QMimeData()
        target = tmp_path / "shot.png"
        mime.setUrls([QUrl("https://example.com/a.png"), QUrl.fromLocalFile(str(target))])

        assert first_local_file(mime) == target

    def test_no_urls(self):
        ensure_qt_app()
        mime = QMimeData()
        mime.setText("plain")
        assert first_local_file(mime) is None

    def test_drop_emits_path(self, tmp_path):
        ensure_qt_app()
        zone = DropZone()
        spy = MagicMock()
        zone.file_dropped.connect(spy)
        mime = QMimeData()
        mime.setUrls([QUrl.fromLocalFile(str(tmp_path / "note.txt"))])
        event = MagicMock()
        event.mimeData.return_value = mime

        zone.dragEnterEvent(event)
        assert zone.is_active
        zone.dropEvent(event)

        assert not zone.is_active
        spy.assert_called_once_with(Path(tmp_path / "note.txt"))
        event.acceptProposedAction.assert_called()
