"""Gemini Translation Service - Implements translation via Google Gemini API."""

import logging
import threading
from typing import Optional

from google.genai import types

from gtranslator.core import AUTO_LANGUAGE, TranslationRequest
from gtranslator.services.gemini_client import (
    GeminiClient,
    GeminiError,
    clean_translation,
    extract_candidate_text,
    extract_error_message,
)
from gtranslator.services.translation.translation_service import TranslationResult, TranslationService

logger = logging.getLogger(__name__)


class GeminiTranslationService(TranslationService):
    """
    Translation service using Google Gemini API.

    Auto source language triggers a short detection request first. Only the
    most recent detection is tracked; starting another one cancels it.
    """

    TRANSLATION_PROMPT = 'Translate the following text from {source} to {target}:\n"{text}"\n'
    CONTEXT_PROMPT = "\nContext: {context}\n"
    INSTRUCTION_SUFFIX = "\nRespond only with the translated text, without any other explanations or comments."

    DETECTION_PROMPT = (
        "Analyze the following text and tell me only the name of the language it is written in, "
        "answering with a single word (e.g. 'Italian', 'English', etc.): \"{text}\""
    )
    DETECTION_SAMPLE_LENGTH = 100

    def __init__(self, client: GeminiClient):
        self.client = client
        self._detection_lock = threading.Lock()
        self._detection_ticket = 0

    @property
    def model_name(self) -> str:
        return self.client.model_name

    def build_prompt(self, request: TranslationRequest) -> str:
        prompt = self.TRANSLATION_PROMPT.format(
            source=request.source_language,
            target=request.target_language,
            text=request.text,
        )
        if request.has_context:
            prompt += self.CONTEXT_PROMPT.format(context=request.context)
        return prompt + self.INSTRUCTION_SUFFIX

    def translate(self, request: TranslationRequest, api_key: str) -> TranslationResult:
        """
        Translate text using Gemini API.

        Args:
            request: Text, languages and optional context.
            api_key: Gemini API key for authentication.

        Returns:
            TranslationResult with translated text or error message.
        """
        if not request.text:
            return TranslationResult(text="", model=self.model_name)

        if not api_key:
            return TranslationResult(text="", model=self.model_name, error="Gemini API key not configured")

        detected: Optional[str] = None
        if request.needs_detection:
            detected = self.detect_language(request.text, api_key)
            request = request.with_source(detected or AUTO_LANGUAGE)

        prompt = self.build_prompt(request)
        logger.debug(
            "Translating %d chars %s -> %s (context: %s)",
            len(request.text),
            request.source_language,
            request.target_language,
            request.has_context,
        )

        config = types.GenerateContentConfig(
            temperature=0.2,
            top_k=32,
            top_p=0.95,
            max_output_tokens=1024,
        )

        try:
            payload = self.client.generate(api_key, prompt, config)
        except GeminiError as e:
            logger.warning("Gemini API error: %s", e)
            return self._failure(f"API error: {e}", detected)
        except Exception as e:
            logger.warning("Translation request failed: %s", e)
            return self._failure(f"Connection error: {e}", detected)

        api_error = extract_error_message(payload)
        if api_error:
            logger.warning("Gemini API error: %s", api_error)
            return self._failure(f"API error: {api_error}", detected)

        translation = extract_candidate_text(payload)
        if translation is None:
            logger.warning("Unexpected translation response shape")
            return self._failure("Unrecognised response format", detected)

        cleaned = clean_translation(translation)
        logger.debug("Translation received (%d chars)", len(cleaned))
        return TranslationResult(text=cleaned, model=self.model_name, detected_language=detected)

    def detect_language(self, text: str, api_key: str) -> Optional[str]:
        """Ask Gemini for the language of text; None on any failure or cancellation."""
        with self._detection_lock:
            self._detection_ticket += 1
            ticket = self._detection_ticket

        prompt = self.DETECTION_PROMPT.format(text=text[: self.DETECTION_SAMPLE_LENGTH])
        config = types.GenerateContentConfig(temperature=0.1, max_output_tokens=10)

        try:
            payload = self.client.generate(api_key, prompt, config)
        except Exception as e:
            logger.debug("Language detection failed: %s", e)
            return None

        if not self._is_current_detection(ticket):
            logger.debug("Language detection %d was superseded", ticket)
            return None

        language = extract_candidate_text(payload)
        if language is None:
            logger.debug("Unexpected language detection response shape")
            return None

        language = language.strip().title()
        logger.debug("Detected language: %s", language)
        return language or None

    def cancel_detection(self) -> None:
        with self._detection_lock:
            self._detection_ticket += 1

    def _is_current_detection(self, ticket: int) -> bool:
        with self._detection_lock:
            return ticket == self._detection_ticket

    def _failure(self, message: str, detected: Optional[str]) -> TranslationResult:
        return TranslationResult(text="", model=self.model_name, error=message, detected_language=detected)
