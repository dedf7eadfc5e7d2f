"""Settings Manager - Environment configuration loaded from .env."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class SettingsManager:
    """
    Reads environment-level configuration.

    Values come from the process environment, optionally populated from a
    .env file in the project root. User-editable preferences live in
    PreferencesManager instead.
    """

    DEFAULT_MODEL = "gemini-2.0-flash"
    DEFAULT_HTTP_TIMEOUT = 30.0
    DEFAULT_LOG_LEVEL = "INFO"

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def get_gemini_api_key(self) -> Optional[str]:
        """Get the Gemini API key from environment."""
        return self._stripped("GEMINI_API_KEY")

    def get_vision_api_key(self) -> Optional[str]:
        """Get the Cloud Vision API key from environment."""
        return self._stripped("GOOGLE_VISION_API_KEY")

    def get_model_name(self) -> str:
        return self._stripped("GEMINI_MODEL") or self.DEFAULT_MODEL

    def get_http_timeout(self) -> float:
        """Timeout in seconds for outbound HTTP calls."""
        raw = self._stripped("GTRANSLATOR_HTTP_TIMEOUT")
        if raw is None:
            return self.DEFAULT_HTTP_TIMEOUT
        try:
            value = float(raw)
        except ValueError:
            return self.DEFAULT_HTTP_TIMEOUT
        return value if value > 0 else self.DEFAULT_HTTP_TIMEOUT

    def get_log_level(self) -> str:
        return (self._stripped("GTRANSLATOR_LOG_LEVEL") or self.DEFAULT_LOG_LEVEL).upper()

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)

    @staticmethod
    def _stripped(name: str) -> Optional[str]:
        value = os.getenv(name)
        return value.strip() if value and value.strip() else None
