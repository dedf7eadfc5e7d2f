"""Notification bus - in-process signals decoupling the shell from the views."""

from PySide6.QtCore import QObject, Signal


class NotificationBus(QObject):
    """Shortcuts and menu actions post here; the popover side listens."""

    translate_requested = Signal()
    translate_clipboard_requested = Signal()
    copy_result_requested = Signal()
    clear_all_requested = Signal()
    toggle_context_requested = Signal()
    select_all_requested = Signal()
    show_preferences_requested = Signal()
    # (extracted text, where it came from)
    text_extracted_from_image = Signal(str, str)
