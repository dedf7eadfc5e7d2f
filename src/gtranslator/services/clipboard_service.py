"""Clipboard Service - Read/write text and images through QClipboard."""

from typing import Optional

from PySide6.QtGui import QClipboard, QGuiApplication

from gtranslator.services.ocr.image_utils import encode_png

# Raw image flavours, in order of preference
IMAGE_MIME_TYPES = ("image/tiff", "image/png", "image/jpeg")


class ClipboardService:
    """Wraps the system clipboard; a clipboard can be injected for tests."""

    def __init__(self, clipboard: Optional[QClipboard] = None):
        self._clipboard = clipboard

    @property
    def clipboard(self) -> QClipboard:
        return self._clipboard if self._clipboard is not None else QGuiApplication.clipboard()

    def text(self) -> str:
        return self.clipboard.text() or ""

    def set_text(self, text: str) -> None:
        clipboard = self.clipboard
        clipboard.clear()
        clipboard.setText(text)

    def has_content(self) -> bool:
        mime = self.clipboard.mimeData()
        return mime is not None and bool(mime.formats())

    def image_bytes(self) -> Optional[bytes]:
        """Encoded image currently on the clipboard, or None."""
        mime = self.clipboard.mimeData()
        if mime is None:
            return None

        for mime_type in IMAGE_MIME_TYPES:
            if mime.hasFormat(mime_type):
                data = bytes(mime.data(mime_type).data())
                if data:
                    return data

        if mime.hasImage():
            image = self.clipboard.image()
            if not image.isNull():
                return encode_png(image)
        return None
