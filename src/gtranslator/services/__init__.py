"""Services layer - business logic and external integrations."""

from gtranslator.services.settings_manager import SettingsManager
from gtranslator.services.preferences_manager import PreferencesManager
from gtranslator.services.gemini_client import GeminiClient, GeminiError, clean_translation, extract_candidate_text
from gtranslator.services.clipboard_service import ClipboardService
from gtranslator.services.file_intake import FileIntake, read_dropped_file

# Translation services
from gtranslator.services.translation import TranslationService, TranslationResult, GeminiTranslationService

# OCR services
from gtranslator.services.ocr import (
    CloudVisionOCR,
    GeminiOCR,
    LocalVisionOCR,
    OCREngine,
    OCRResult,
    OCRService,
    local_vision_available,
)

__all__ = [
    "SettingsManager",
    "PreferencesManager",
    "GeminiClient",
    "GeminiError",
    "clean_translation",
    "extract_candidate_text",
    "ClipboardService",
    "FileIntake",
    "read_dropped_file",
    "TranslationService",
    "TranslationResult",
    "GeminiTranslationService",
    "OCREngine",
    "OCRResult",
    "OCRService",
    "LocalVisionOCR",
    "CloudVisionOCR",
    "GeminiOCR",
    "local_vision_available",
]
