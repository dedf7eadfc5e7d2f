"""UI layer - PySide6 presentation components."""

from .drop_zone import DropZone
from .menu_bar_shell import MenuBarShell
from .notifications import NotificationBus
from .popover_view import PopoverView
from .preferences_view import PreferencesView

__all__ = ["DropZone", "MenuBarShell", "NotificationBus", "PopoverView", "PreferencesView"]
