"""OCR services - on-device, Cloud Vision and Gemini text extraction."""

from gtranslator.services.ocr.ocr_service import NO_TEXT_FOUND, OCREngine, OCRResult, OCRService
from gtranslator.services.ocr.local_vision_ocr import LocalVisionOCR, local_vision_available
from gtranslator.services.ocr.cloud_vision_ocr import CloudVisionOCR
from gtranslator.services.ocr.gemini_ocr import GeminiOCR

__all__ = [
    "NO_TEXT_FOUND",
    "OCREngine",
    "OCRResult",
    "OCRService",
    "LocalVisionOCR",
    "local_vision_available",
    "CloudVisionOCR",
    "GeminiOCR",
]
