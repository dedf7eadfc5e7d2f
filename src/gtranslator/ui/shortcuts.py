"""Keyboard shortcuts - mapping from Cmd/Ctrl+key to popover actions."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from PySide6.QtCore import Qt


class ShortcutAction(Enum):
    TRANSLATE = "translate"
    TRANSLATE_CLIPBOARD = "translate_clipboard"
    COPY_RESULT = "copy_result"
    SELECT_ALL = "select_all"
    CLEAR_ALL = "clear_all"
    TOGGLE_CONTEXT = "toggle_context"
    OPEN_PREFERENCES = "open_preferences"
    QUIT = "quit"


@dataclass(frozen=True)
class FocusState:
    """What the focused widget looks like when the key is pressed."""

    in_text_field: bool = False
    has_selection: bool = False


KEY_NAMES = {
    Qt.Key.Key_T: "t",
    Qt.Key.Key_V: "v",
    Qt.Key.Key_C: "c",
    Qt.Key.Key_A: "a",
    Qt.Key.Key_K: "k",
    Qt.Key.Key_Q: "q",
    Qt.Key.Key_Comma: ",",
    Qt.Key.Key_Backspace: "backspace",
    Qt.Key.Key_Delete: "delete",
}

_POPOVER_ACTIONS = {
    "t": ShortcutAction.TRANSLATE,
    "v": ShortcutAction.TRANSLATE_CLIPBOARD,
    "c": ShortcutAction.COPY_RESULT,
    "a": ShortcutAction.SELECT_ALL,
    "k": ShortcutAction.TOGGLE_CONTEXT,
    "backspace": ShortcutAction.CLEAR_ALL,
    "delete": ShortcutAction.CLEAR_ALL,
}

# Labels for the menu entries ("Cmd+T" on macOS is Ctrl+T for Qt)
SHORTCUT_SEQUENCES = {
    ShortcutAction.TRANSLATE: "Ctrl+T",
    ShortcutAction.TRANSLATE_CLIPBOARD: "Ctrl+V",
    ShortcutAction.COPY_RESULT: "Ctrl+C",
    ShortcutAction.CLEAR_ALL: "Ctrl+Backspace",
    ShortcutAction.TOGGLE_CONTEXT: "Ctrl+K",
    ShortcutAction.OPEN_PREFERENCES: "Ctrl+,",
    ShortcutAction.QUIT: "Ctrl+Q",
}


def resolve_shortcut(
    key: str,
    command: bool,
    popover_shown: bool,
    focus: FocusState = FocusState(),
) -> Optional[ShortcutAction]:
    """
    Decide which action a key press triggers.

    Returns None when the event should reach the focused widget unchanged:
    paste and select-all inside text fields, copy with a selection, and every
    popover action while the popover is hidden.
    """
    if not command:
        return None

    key = key.lower()
    if key == ",":
        return ShortcutAction.OPEN_PREFERENCES
    if key == "q":
        return ShortcutAction.QUIT

    action = _POPOVER_ACTIONS.get(key)
    if action is None:
        return None

    if action in (ShortcutAction.TRANSLATE_CLIPBOARD, ShortcutAction.SELECT_ALL) and focus.in_text_field:
        return None
    if action is ShortcutAction.COPY_RESULT and focus.in_text_field and focus.has_selection:
        return None

    if not popover_shown:
        return None
    return action
