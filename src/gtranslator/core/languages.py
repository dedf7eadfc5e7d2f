"""Language table - fixed mapping between display names and ISO codes."""

from typing import Dict, List

AUTO_LANGUAGE = "Auto"

_LANGUAGES: Dict[str, str] = {
    AUTO_LANGUAGE: "auto",
    "Italian": "it",
    "English": "en",
    "French": "fr",
    "German": "de",
    "Spanish": "es",
    "Portuguese": "pt",
    "Russian": "ru",
    "Chinese": "zh",
    "Japanese": "ja",
    "Korean": "ko",
    "Arabic": "ar",
    "Hindi": "hi",
    "Polish": "pl",
    "Dutch": "nl",
    "Swedish": "sv",
    "Greek": "el",
    "Turkish": "tr",
    "Hebrew": "he",
    "Thai": "th",
    "Vietnamese": "vi",
    "Indonesian": "id",
    "Malay": "ms",
    "Ukrainian": "uk",
}


class LanguageTable:
    """
    Read-only table of the languages offered in the pickers.

    Loaded once at startup; lookups fall back to English / "Unknown"
    instead of raising.
    """

    DEFAULT_CODE = "en"
    UNKNOWN_NAME = "Unknown"

    def __init__(self, languages: Dict[str, str] = _LANGUAGES):
        self._by_name = dict(languages)

    def code_for(self, name: str) -> str:
        """Return the ISO code for a display name (English if unknown)."""
        return self._by_name.get(name, self.DEFAULT_CODE)

    def name_for(self, code: str) -> str:
        """Return the display name for an ISO code."""
        for name, lang_code in self._by_name.items():
            if lang_code == code:
                return name
        return self.UNKNOWN_NAME

    def source_names(self) -> List[str]:
        """All names, sorted, including Auto."""
        return sorted(self._by_name)

    def target_names(self) -> List[str]:
        """Names valid as translation target (Auto excluded)."""
        return [name for name in self.source_names() if name != AUTO_LANGUAGE]

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)
