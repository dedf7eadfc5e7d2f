"""OCR Service - Engine interface and the static fallback chain between engines."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

NO_TEXT_FOUND = "No text found in the image"


@dataclass
class OCRResult:
    """Result of a text extraction."""

    text: str
    engine: str
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


class OCREngine(ABC):
    """Converts image bytes into text."""

    name = "ocr"

    @abstractmethod
    def extract_text(self, image_data: bytes) -> OCRResult:
        pass

    def failure(self, message: str) -> OCRResult:
        return OCRResult(text="", engine=self.name, error=message)


class OCRService:
    """
    Chooses an engine per request.

    extract_text: on-device Vision if the platform supports it, otherwise
    Cloud Vision if an OCR key is configured. extract_text_with_gemini always
    uses the multimodal model.
    """

    def __init__(
        self,
        local_engine: OCREngine,
        cloud_engine_factory: Callable[[str], OCREngine],
        gemini_engine_factory: Callable[[str], OCREngine],
        local_available: Callable[[], bool],
    ):
        self._local_engine = local_engine
        self._cloud_engine_factory = cloud_engine_factory
        self._gemini_engine_factory = gemini_engine_factory
        self._local_available = local_available

    def select_engine(self, ocr_api_key: str) -> Optional[OCREngine]:
        if self._local_available():
            return self._local_engine
        if ocr_api_key:
            return self._cloud_engine_factory(ocr_api_key)
        return None

    def extract_text(self, image_data: bytes, ocr_api_key: str) -> OCRResult:
        engine = self.select_engine(ocr_api_key)
        if engine is None:
            return OCRResult(text="", engine="none", error="OCR API key not configured")
        logger.debug("Running OCR with %s engine on %d bytes", engine.name, len(image_data))
        return engine.extract_text(image_data)

    def extract_text_with_gemini(self, image_data: bytes, api_key: str) -> OCRResult:
        engine = self._gemini_engine_factory(api_key)
        logger.debug("Running OCR with %s engine on %d bytes", engine.name, len(image_data))
        return engine.extract_text(image_data)
