"""Translation Service - Abstract interface for text translation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from gtranslator.core import TranslationRequest


@dataclass
class TranslationResult:
    """Result of a translation request."""

    text: str
    model: str
    error: Optional[str] = None
    detected_language: Optional[str] = None

    @property
    def is_error(self) -> bool:
        """True if translation failed."""
        return self.error is not None


class TranslationService(ABC):
    """
    Abstract service for translating text between languages.

    Implementations (e.g., GeminiTranslationService) handle API calls.
    """

    @abstractmethod
    def translate(self, request: TranslationRequest, api_key: str) -> TranslationResult:
        """
        Translate the request's text.

        Args:
            request: Text, languages and optional context.
            api_key: Provider API key for authentication.

        Returns:
            TranslationResult with text or error message.
        """
        pass

    @abstractmethod
    def detect_language(self, text: str, api_key: str) -> Optional[str]:
        """Return the language name of text, or None if detection failed or was cancelled."""
        pass

    def cancel_detection(self) -> None:
        """Cancel the tracked language-detection request, if any."""
