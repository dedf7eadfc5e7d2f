"""Domain layer - language table and request entities."""

from .languages import AUTO_LANGUAGE, LanguageTable
from .translation_request import TranslationRequest

__all__ = ["AUTO_LANGUAGE", "LanguageTable", "TranslationRequest"]
