"""Image helpers - MIME sniffing and re-encoding for upload using Qt image I/O."""

from typing import Optional, Tuple

from PySide6.QtCore import QBuffer, QByteArray, QIODevice
from PySide6.QtGui import QImage, QImageReader

# Formats the multimodal endpoint accepts as-is
UPLOAD_MIME_TYPES = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "webp": "image/webp",
    "heic": "image/heic",
    "heif": "image/heif",
}


def sniff_image_format(image_data: bytes) -> Optional[str]:
    """Return the Qt format name ("png", "jpeg", ...) or None if unreadable."""
    buffer = QBuffer()
    buffer.setData(QByteArray(image_data))
    if not buffer.open(QIODevice.OpenModeFlag.ReadOnly):
        return None
    try:
        reader = QImageReader(buffer)
        fmt = bytes(reader.format().data()).decode("ascii", errors="ignore").lower()
    finally:
        buffer.close()
    return fmt or None


def encode_png(image: QImage) -> bytes:
    buffer = QBuffer()
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    image.save(buffer, "PNG")
    data = bytes(buffer.data().data())
    buffer.close()
    return data


def prepare_image_for_upload(image_data: bytes) -> Tuple[bytes, str]:
    """
    Return (bytes, mime_type) ready to be sent inline.

    Accepted formats pass through; anything else Qt can decode (TIFF, BMP,
    GIF...) is re-encoded as PNG. Undecodable data is sent as PNG unchanged.
    """
    fmt = sniff_image_format(image_data)
    if fmt in UPLOAD_MIME_TYPES:
        return image_data, UPLOAD_MIME_TYPES[fmt]

    image = QImage.fromData(image_data)
    if image.isNull():
        return image_data, "image/png"
    return encode_png(image), "image/png"
