"""File intake - classify and read files dropped onto the popover."""

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

KIND_IMAGE = "image"
KIND_TEXT = "text"
KIND_PDF = "pdf"
KIND_UNSUPPORTED = "unsupported"

# Plain-text formats the mimetypes table does not map to text/*
TEXT_SUFFIXES = {
    ".txt", ".md", ".markdown", ".rst", ".csv", ".tsv", ".json", ".xml",
    ".yaml", ".yml", ".ini", ".cfg", ".log", ".srt", ".vtt", ".html", ".htm",
}
IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff", ".webp", ".heic", ".heif"}


@dataclass
class FileIntake:
    """Outcome of reading a dropped file."""

    path: Path
    kind: str
    text: Optional[str] = None
    image_data: Optional[bytes] = None
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


def classify_file(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in IMAGE_SUFFIXES:
        return KIND_IMAGE
    if suffix == ".pdf":
        return KIND_PDF
    if suffix in TEXT_SUFFIXES:
        return KIND_TEXT

    mime_type, _ = mimetypes.guess_type(path.name)
    if mime_type is None:
        return KIND_UNSUPPORTED
    if mime_type.startswith("image/"):
        return KIND_IMAGE
    if mime_type == "application/pdf":
        return KIND_PDF
    if mime_type.startswith("text/"):
        return KIND_TEXT
    return KIND_UNSUPPORTED


def decode_text(raw: bytes) -> str:
    """UTF-8 first, Latin-1 as the fallback encoding."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("File is not UTF-8, falling back to Latin-1")
        return raw.decode("latin-1")


def read_dropped_file(path: Path) -> FileIntake:
    """Read a dropped file according to its kind; failures become error strings."""
    path = Path(path)
    kind = classify_file(path)

    if kind == KIND_PDF:
        return FileIntake(path, kind, error="Text recognition in PDF files is not supported yet")
    if kind == KIND_UNSUPPORTED:
        return FileIntake(path, kind, error="Unsupported file format")

    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.warning("Could not read %s: %s", path, e)
        label = "image" if kind == KIND_IMAGE else "text"
        return FileIntake(path, kind, error=f"Error reading the {label} file: {e}")

    if kind == KIND_IMAGE:
        return FileIntake(path, kind, image_data=raw)
    return FileIntake(path, kind, text=decode_text(raw))
