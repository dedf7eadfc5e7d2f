"""Translation request entity - the transient input of a single translation."""

from dataclasses import dataclass
from typing import Optional

from .languages import AUTO_LANGUAGE


@dataclass(frozen=True)
class TranslationRequest:
    """Text plus source/target language names and an optional context hint."""

    text: str
    source_language: str
    target_language: str
    context: Optional[str] = None

    @property
    def has_context(self) -> bool:
        return bool(self.context)

    @property
    def needs_detection(self) -> bool:
        """Auto source on text long enough to be worth a detection call."""
        return self.source_language == AUTO_LANGUAGE and len(self.text) > 5

    def with_source(self, source_language: str) -> "TranslationRequest":
        return TranslationRequest(
            text=self.text,
            source_language=source_language,
            target_language=self.target_language,
            context=self.context,
        )
