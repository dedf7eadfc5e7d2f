"""Gemini OCR - text extraction through a multimodal generateContent request."""

import logging

from google.genai import types

from gtranslator.services.gemini_client import (
    GeminiClient,
    GeminiError,
    extract_candidate_text,
    extract_error_message,
)
from gtranslator.services.ocr.image_utils import prepare_image_for_upload
from gtranslator.services.ocr.ocr_service import NO_TEXT_FOUND, OCREngine, OCRResult

logger = logging.getLogger(__name__)

NO_TEXT_MARKER = "[NO_TEXT_FOUND]"


class GeminiOCR(OCREngine):
    """Sends the image inline together with an extraction instruction."""

    name = "gemini"

    EXTRACTION_PROMPT = (
        "Extract all the text present in this image. "
        f"If you find no text, respond with an empty string or '{NO_TEXT_MARKER}'."
    )

    def __init__(self, client: GeminiClient, api_key: str):
        self.client = client
        self.api_key = api_key

    def build_contents(self, image_data: bytes) -> list:
        data, mime_type = prepare_image_for_upload(image_data)
        return [
            types.Part.from_bytes(data=data, mime_type=mime_type),
            self.EXTRACTION_PROMPT,
        ]

    def extract_text(self, image_data: bytes) -> OCRResult:
        if not self.api_key:
            return self.failure("Gemini API key not configured")

        config = types.GenerateContentConfig(
            temperature=0.1,
            top_k=32,
            top_p=0.95,
            max_output_tokens=1024,
        )

        try:
            payload = self.client.generate(self.api_key, self.build_contents(image_data), config)
        except GeminiError as e:
            logger.warning("Gemini OCR API error: %s", e)
            return self.failure(f"Gemini API error: {e}")
        except Exception as e:
            logger.warning("Gemini OCR request failed: %s", e)
            return self.failure(f"Gemini OCR connection error: {e}")

        api_error = extract_error_message(payload)
        if api_error:
            return self.failure(f"Gemini API error: {api_error}")

        text = extract_candidate_text(payload)
        if text is None:
            return self.failure("Unrecognised Gemini response format")

        text = text.strip()
        if not text or text == NO_TEXT_MARKER:
            return self.failure(NO_TEXT_FOUND)

        logger.debug("Gemini OCR extracted %d chars", len(text))
        return OCRResult(text=text, engine=self.name)
