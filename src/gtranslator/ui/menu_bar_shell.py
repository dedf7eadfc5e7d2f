"""Menu-bar shell - tray icon, popover lifecycle and application-wide event monitors."""

import logging
import sys

from PySide6.QtCore import QEvent, QObject, QPoint, QRect, Qt
from PySide6.QtGui import QAction, QColor, QCursor, QGuiApplication, QIcon, QPainter, QPen, QPixmap
from PySide6.QtWidgets import (
    QApplication,
    QLineEdit,
    QMenu,
    QPlainTextEdit,
    QSystemTrayIcon,
    QTextEdit,
    QWidget,
)

from gtranslator.ui.notifications import NotificationBus
from gtranslator.ui.outside_click import OutsideClickTracker
from gtranslator.ui.shortcuts import KEY_NAMES, SHORTCUT_SEQUENCES, FocusState, ShortcutAction, resolve_shortcut

logger = logging.getLogger(__name__)

POPOVER_MARGIN = 6


def globe_icon(size: int = 64) -> QIcon:
    """Theme globe icon, or a drawn one where the theme has none."""
    themed = QIcon.fromTheme("globe")
    if not themed.isNull():
        return themed

    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.GlobalColor.transparent)
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    pen = QPen(QColor("black"))
    pen.setWidth(max(2, size // 16))
    painter.setPen(pen)
    inset = size // 8
    box = QRect(inset, inset, size - 2 * inset, size - 2 * inset)
    painter.drawEllipse(box)
    painter.drawEllipse(box.adjusted(box.width() // 4, 0, -box.width() // 4, 0))
    painter.drawLine(box.left(), box.center().y(), box.right(), box.center().y())
    painter.end()

    icon = QIcon(pixmap)
    icon.setIsMask(True)
    return icon


def focus_state() -> FocusState:
    widget = QApplication.focusWidget()
    if isinstance(widget, QLineEdit):
        return FocusState(in_text_field=True, has_selection=widget.hasSelectedText())
    if isinstance(widget, (QTextEdit, QPlainTextEdit)):
        return FocusState(in_text_field=True, has_selection=widget.textCursor().hasSelection())
    return FocusState()


def popover_position(anchor: QRect, popover_size, available: QRect) -> QPoint:
    """Top-left for a popover centred under the anchor, kept on screen."""
    x = anchor.center().x() - popover_size.width() // 2
    if anchor.center().y() > available.center().y():
        # Taskbar at the bottom: open upwards
        y = anchor.top() - popover_size.height() - POPOVER_MARGIN
    else:
        y = anchor.bottom() + POPOVER_MARGIN
    x = max(available.left(), min(x, available.right() - popover_size.width()))
    y = max(available.top(), min(y, available.bottom() - popover_size.height()))
    return QPoint(x, y)


def hide_from_dock() -> None:
    """Accessory activation policy: menu-bar only, no Dock icon (macOS)."""
    if sys.platform != "darwin":
        return
    import AppKit

    AppKit.NSApplication.sharedApplication().setActivationPolicy_(
        AppKit.NSApplicationActivationPolicyAccessory
    )


class MenuBarShell(QObject):
    """
    Owns the tray icon and the popover window.

    Installed as an application event filter it watches mouse presses (two
    clicks outside close the popover) and Cmd/Ctrl shortcuts, which are
    translated into NotificationBus signals.
    """

    def __init__(self, popover: QWidget, notifications: NotificationBus):
        super().__init__()
        self.popover = popover
        self.notifications = notifications
        self.click_tracker = OutsideClickTracker()

        self.popover.setWindowFlags(
            Qt.WindowType.Tool | Qt.WindowType.FramelessWindowHint | Qt.WindowType.WindowStaysOnTopHint
        )

        self.tray_icon = QSystemTrayIcon(globe_icon(), self)
        self.tray_icon.setToolTip("Translate")
        self.tray_icon.activated.connect(self._on_tray_activated)

        self.context_menu = self._create_context_menu()
        self.edit_actions = self._create_edit_actions()

        notifications.show_preferences_requested.connect(self.show_popover)

    def start(self) -> None:
        hide_from_dock()
        QApplication.instance().installEventFilter(self)
        self.tray_icon.show()
        logger.info("Menu-bar icon ready")

    def stop(self) -> None:
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self)
        self.tray_icon.hide()

    # Popover lifecycle

    def is_popover_shown(self) -> bool:
        return self.popover.isVisible()

    def show_popover(self) -> None:
        if not self.is_popover_shown():
            anchor = self.tray_icon.geometry()
            if not anchor.isValid():
                anchor = QRect(QCursor.pos(), QCursor.pos())
            screen = QGuiApplication.screenAt(anchor.center()) or QGuiApplication.primaryScreen()
            self.popover.move(popover_position(anchor, self.popover.size(), screen.availableGeometry()))
            self.popover.show()
            self.click_tracker.reset()
        self.popover.raise_()
        self.popover.activateWindow()

    def close_popover(self) -> None:
        self.popover.hide()

    def toggle_popover(self) -> None:
        if self.is_popover_shown():
            self.close_popover()
        else:
            self.show_popover()

    def _on_tray_activated(self, reason) -> None:
        if reason == QSystemTrayIcon.ActivationReason.Context:
            self.context_menu.popup(QCursor.pos())
        elif reason in (QSystemTrayIcon.ActivationReason.Trigger, QSystemTrayIcon.ActivationReason.DoubleClick):
            self.toggle_popover()

    # Menus

    def _create_context_menu(self) -> QMenu:
        menu = QMenu()
        preferences_action = QAction("Preferences", menu)
        preferences_action.setShortcut(SHORTCUT_SEQUENCES[ShortcutAction.OPEN_PREFERENCES])
        preferences_action.triggered.connect(self.notifications.show_preferences_requested.emit)
        menu.addAction(preferences_action)
        menu.addSeparator()
        quit_action = QAction("Quit", menu)
        quit_action.setShortcut(SHORTCUT_SEQUENCES[ShortcutAction.QUIT])
        quit_action.triggered.connect(QApplication.quit)
        menu.addAction(quit_action)
        return menu

    def _create_edit_actions(self) -> QMenu:
        """Edit menu mirroring the shortcuts; shown from the tray as a submenu."""
        menu = QMenu("Edit")
        entries = [
            ("Translate", ShortcutAction.TRANSLATE, self.notifications.translate_requested),
            ("Translate from clipboard", ShortcutAction.TRANSLATE_CLIPBOARD, self.notifications.translate_clipboard_requested),
            None,
            ("Copy result", ShortcutAction.COPY_RESULT, self.notifications.copy_result_requested),
            ("Clear all", ShortcutAction.CLEAR_ALL, self.notifications.clear_all_requested),
            None,
            ("Show/Hide context", ShortcutAction.TOGGLE_CONTEXT, self.notifications.toggle_context_requested),
        ]
        for entry in entries:
            if entry is None:
                menu.addSeparator()
                continue
            title, action_id, signal = entry
            action = QAction(title, menu)
            action.setShortcut(SHORTCUT_SEQUENCES[action_id])
            action.setShortcutContext(Qt.ShortcutContext.WidgetShortcut)
            action.triggered.connect(signal.emit)
            menu.addAction(action)
        self.context_menu.insertMenu(self.context_menu.actions()[0], menu)
        return menu

    # Event monitors

    def eventFilter(self, watched, event):
        # Events reach the QWindow before any widget; handle each once there
        if not watched.isWindowType():
            return False

        event_type = event.type()
        if event_type == QEvent.Type.MouseButtonPress:
            self._on_mouse_press(event)
            return False
        if event_type == QEvent.Type.KeyPress:
            return self._on_key_press(event)
        return False

    def _on_mouse_press(self, event) -> None:
        if not self.is_popover_shown():
            return
        inside = self.popover.frameGeometry().contains(event.globalPosition().toPoint())
        if self.click_tracker.register_click(inside):
            self.close_popover()

    def _on_key_press(self, event) -> bool:
        key = KEY_NAMES.get(event.key())
        if key is None:
            return False
        # Qt maps the macOS Command key to ControlModifier
        command = bool(event.modifiers() & Qt.KeyboardModifier.ControlModifier)
        action = resolve_shortcut(key, command, self.is_popover_shown(), focus_state())
        if action is None:
            return False
        self.dispatch(action)
        return True

    def dispatch(self, action: ShortcutAction) -> None:
        logger.debug("Shortcut: %s", action.value)
        bus = self.notifications
        if action is ShortcutAction.TRANSLATE:
            bus.translate_requested.emit()
        elif action is ShortcutAction.TRANSLATE_CLIPBOARD:
            bus.translate_clipboard_requested.emit()
        elif action is ShortcutAction.COPY_RESULT:
            bus.copy_result_requested.emit()
        elif action is ShortcutAction.SELECT_ALL:
            bus.select_all_requested.emit()
        elif action is ShortcutAction.CLEAR_ALL:
            bus.clear_all_requested.emit()
        elif action is ShortcutAction.TOGGLE_CONTEXT:
            bus.toggle_context_requested.emit()
        elif action is ShortcutAction.OPEN_PREFERENCES:
            bus.show_preferences_requested.emit()
        elif action is ShortcutAction.QUIT:
            QApplication.quit()
