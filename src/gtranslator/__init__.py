"""
GTranslator - A menu-bar translator backed by Google Gemini.

This package provides a tray application with:
- Text translation with automatic source-language detection
- OCR of clipboard images and dropped files (Vision, Cloud Vision, Gemini)
- Keyboard shortcuts and auto-copy of results
"""

__version__ = "0.1.0"

# Make key components available at package level
from gtranslator.core import LanguageTable, TranslationRequest

__all__ = [
    "LanguageTable",
    "TranslationRequest",
]
