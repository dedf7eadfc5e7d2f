"""Translation services - abstract interface and Gemini implementation."""

from gtranslator.services.translation.translation_service import TranslationService, TranslationResult
from gtranslator.services.translation.gemini_translation_service import GeminiTranslationService

__all__ = [
    "TranslationService",
    "TranslationResult",
    "GeminiTranslationService",
]
