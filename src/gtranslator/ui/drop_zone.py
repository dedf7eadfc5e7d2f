"""Drop Zone - target area for files dragged onto the popover."""

from pathlib import Path
from typing import Optional

from PySide6.QtCore import QMimeData, Qt, Signal
from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout

_IDLE_STYLE = "QFrame#dropZone { border: 1px dashed #9a9a9a; border-radius: 8px; background: rgba(128, 128, 128, 25); }"
_ACTIVE_STYLE = "QFrame#dropZone { border: 2px solid #2f7bf5; border-radius: 8px; background: rgba(47, 123, 245, 25); }"


def first_local_file(mime: QMimeData) -> Optional[Path]:
    """Path of the first local file URL in the drag payload."""
    if mime is None or not mime.hasUrls():
        return None
    for url in mime.urls():
        if url.isLocalFile():
            return Path(url.toLocalFile())
    return None


class DropZone(QFrame):
    """Accepts file URL drops and emits the first dropped path."""

    file_dropped = Signal(Path)

    def __init__(self):
        super().__init__()
        self.setObjectName("dropZone")
        self.setAcceptDrops(True)
        self.setFixedHeight(100)

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.icon_label = QLabel("⤓")
        self.icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.icon_label.setStyleSheet("font-size: 28px; color: gray;")
        layout.addWidget(self.icon_label)

        self.hint_label = QLabel("Drop a file or image here")
        self.hint_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.hint_label.setStyleSheet("font-size: 11px; color: gray;")
        layout.addWidget(self.hint_label)

        self.set_active(False)

    def set_active(self, active: bool) -> None:
        self.is_active = active
        self.setStyleSheet(_ACTIVE_STYLE if active else _IDLE_STYLE)
        color = "#2f7bf5" if active else "gray"
        self.icon_label.setStyleSheet(f"font-size: 28px; color: {color};")
        self.hint_label.setStyleSheet(f"font-size: 11px; color: {color};")

    def dragEnterEvent(self, event):
        if first_local_file(event.mimeData()) is not None:
            event.acceptProposedAction()
            self.set_active(True)
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        self.set_active(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event):
        self.set_active(False)
        path = first_local_file(event.mimeData())
        if path is None:
            event.ignore()
            return
        event.acceptProposedAction()
        self.file_dropped.emit(path)
