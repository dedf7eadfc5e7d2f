"""Cloud Vision OCR - TEXT_DETECTION through the images:annotate REST endpoint."""

import base64
import logging
from typing import Any, Dict, Optional

import requests

from gtranslator.services.ocr.ocr_service import NO_TEXT_FOUND, OCREngine, OCRResult

logger = logging.getLogger(__name__)

VISION_ENDPOINT = "https://vision.googleapis.com/v1/images:annotate"


def build_annotate_body(image_data: bytes) -> Dict[str, Any]:
    return {
        "requests": [
            {
                "image": {"content": base64.b64encode(image_data).decode("ascii")},
                "features": [{"type": "TEXT_DETECTION"}],
            }
        ]
    }


def extract_annotation_text(payload: Dict[str, Any]) -> Optional[str]:
    """responses[0].textAnnotations[0].description, or None."""
    try:
        description = payload["responses"][0]["textAnnotations"][0]["description"]
    except (KeyError, IndexError, TypeError):
        return None
    return description if isinstance(description, str) else None


def extract_annotation_error(payload: Dict[str, Any]) -> Optional[str]:
    """Top-level or per-response error message."""
    if not isinstance(payload, dict):
        return None
    candidates = [payload.get("error")]
    responses = payload.get("responses")
    if isinstance(responses, list) and responses and isinstance(responses[0], dict):
        candidates.append(responses[0].get("error"))
    for error in candidates:
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
    return None


class CloudVisionOCR(OCREngine):
    """Google Cloud Vision, authenticated with the key query parameter."""

    name = "vision-cloud"

    def __init__(self, api_key: str, timeout_seconds: float = 30.0, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def extract_text(self, image_data: bytes) -> OCRResult:
        if not self.api_key:
            return self.failure("OCR API key not configured")

        try:
            response = self.session.post(
                VISION_ENDPOINT,
                params={"key": self.api_key},
                json=build_annotate_body(image_data),
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            logger.warning("OCR connection error: %s", e)
            return self.failure(f"OCR connection error: {e}")

        if not response.content:
            return self.failure("No data received from the OCR server")

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning("OCR response is not JSON: %s", e)
            return self.failure(f"OCR processing error: {e}")

        api_error = extract_annotation_error(payload)
        if api_error:
            logger.warning("OCR API error: %s", api_error)
            return self.failure(f"OCR API error: {api_error}")

        text = extract_annotation_text(payload)
        if not text:
            return self.failure(NO_TEXT_FOUND)

        logger.debug("Cloud OCR extracted %d chars", len(text))
        return OCRResult(text=text, engine=self.name)
