"""Gemini Client - Thin wrapper over google.genai plus response-shape parsing."""

import logging
import re
import threading
from typing import Any, Dict, Optional

import google.genai as genai
from google.genai import errors, types

logger = logging.getLogger(__name__)

_LEADING_QUOTE = re.compile(r'^"')
_TRAILING_QUOTE = re.compile(r'"$')


class GeminiError(Exception):
    """Raised when the API answers with an error payload."""


def extract_error_message(payload: Dict[str, Any]) -> Optional[str]:
    """Return error.message from a generateContent payload, if present."""
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None


def extract_candidate_text(payload: Dict[str, Any]) -> Optional[str]:
    """
    Walk candidates[0].content.parts[0].text.

    Returns None when any level is missing or has the wrong type.
    """
    try:
        candidates = payload["candidates"]
        content = candidates[0]["content"]
        text = content["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


def clean_translation(text: str) -> str:
    """Trim whitespace and drop one pair of surrounding quotes added by the model."""
    cleaned = text.strip()
    cleaned = _LEADING_QUOTE.sub("", cleaned)
    return _TRAILING_QUOTE.sub("", cleaned)


def mask_key(api_key: str) -> str:
    if len(api_key) <= 8:
        return "***"
    return f"{api_key[:4]}...{api_key[-2:]}"


class GeminiClient:
    """
    Issues generateContent calls and returns the JSON-shaped payload.

    One genai.Client is reused while the API key stays the same; a new key
    replaces it.
    """

    def __init__(self, model_name: str, timeout_seconds: float = 30.0):
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self._client_lock = threading.Lock()
        self._client = None
        self._client_key: Optional[str] = None

    def _client_for(self, api_key: str) -> genai.Client:
        with self._client_lock:
            if self._client is None or self._client_key != api_key:
                logger.debug("Creating Gemini client for key %s", mask_key(api_key))
                self._client = genai.Client(
                    api_key=api_key,
                    http_options=types.HttpOptions(timeout=int(self.timeout_seconds * 1000)),
                )
                self._client_key = api_key
            return self._client

    def generate(self, api_key: str, contents, config: types.GenerateContentConfig) -> Dict[str, Any]:
        """
        Send one generateContent request.

        Raises:
            GeminiError: The API rejected the request.
            Exception: Transport failures propagate unchanged.
        """
        client = self._client_for(api_key)
        logger.debug("generateContent model=%s key=%s", self.model_name, mask_key(api_key))
        try:
            response = client.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=config,
            )
        except errors.APIError as e:
            raise GeminiError(e.message or str(e)) from e

        return response.model_dump(mode="json", exclude_none=True)
