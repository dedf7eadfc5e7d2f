"""Unit tests for the Gemini client wrapper and its response parsers."""

from unittest.mock import MagicMock, patch

import pytest
from google.genai import types

from gtranslator.services.gemini_client import (
    GeminiClient,
    GeminiError,
    clean_translation,
    extract_candidate_text,
    extract_error_message,
    mask_key,
)


def candidate_payload(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestResponseParsing:
    """Shape walking over generateContent payloads."""

    def test_extracts_first_candidate_text(self):
        assert extract_candidate_text(candidate_payload("Ciao")) == "Ciao"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {}}]},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"text": 42}]}}]},
            {"candidates": "oops"},
        ],
    )
    def test_shape_mismatch_returns_none(self, payload):
        assert extract_candidate_text(payload) is None

    def test_error_message(self):
        assert extract_error_message({"error": {"message": "API key not valid"}}) == "API key not valid"

    def test_no_error_message(self):
        assert extract_error_message(candidate_payload("x")) is None
        assert extract_error_message({"error": "plain string"}) is None


class TestCleanTranslation:
    def test_strips_whitespace_and_quotes(self):
        assert clean_translation('  "Hola"\n') == "Hola"

    def test_inner_quotes_survive(self):
        assert clean_translation('He said "hi" twice') == 'He said "hi" twice'

    def test_single_leading_quote_removed(self):
        assert clean_translation('"Bonjour') == "Bonjour"


class TestMaskKey:
    def test_short_key_fully_masked(self):
        assert mask_key("abc") == "***"

    def test_long_key_keeps_edges(self):
        assert mask_key("AIzaSyABCDEFGH") == "AIza...GH"


class TestGeminiClientGenerate:
    """generate() builds a genai.Client per call."""

    @patch("gtranslator.services.gemini_client.genai.Client")
    def test_returns_json_payload(self, mock_client_cls):
        response = MagicMock()
        response.model_dump.return_value = candidate_payload("Hallo")
        mock_client_cls.return_value.models.generate_content.return_value = response
        config = types.GenerateContentConfig(temperature=0.2)

        client = GeminiClient("gemini-test", timeout_seconds=5)
        payload = client.generate("key-123", "prompt", config)

        assert payload == candidate_payload("Hallo")
        kwargs = mock_client_cls.call_args.kwargs
        assert kwargs["api_key"] == "key-123"
        assert kwargs["http_options"].timeout == 5000
        mock_client_cls.return_value.models.generate_content.assert_called_once_with(
            model="gemini-test", contents="prompt", config=config
        )
        response.model_dump.assert_called_once_with(mode="json", exclude_none=True)

    @patch("gtranslator.services.gemini_client.genai.Client")
    def test_api_error_becomes_gemini_error(self, mock_client_cls):
        from google.genai import errors

        api_error = errors.APIError.__new__(errors.APIError)
        api_error.message = "quota exceeded"
        mock_client_cls.return_value.models.generate_content.side_effect = api_error

        client = GeminiClient("gemini-test")
        with pytest.raises(GeminiError, match="quota exceeded"):
            client.generate("key", "prompt", types.GenerateContentConfig())

    @patch("gtranslator.services.gemini_client.genai.Client")
    def test_transport_error_propagates(self, mock_client_cls):
        mock_client_cls.return_value.models.generate_content.side_effect = ConnectionError("offline")

        client = GeminiClient("gemini-test")
        with pytest.raises(ConnectionError):
            client.generate("key", "prompt", types.GenerateContentConfig())

    @patch("gtranslator.services.gemini_client.genai.Client")
    def test_client_reused_for_same_key(self, mock_client_cls):
        mock_client_cls.return_value.models.generate_content.return_value.model_dump.return_value = {}
        client = GeminiClient("gemini-test")

        client.generate("key-a", "one", types.GenerateContentConfig())
        client.generate("key-a", "two", types.GenerateContentConfig())
        assert mock_client_cls.call_count == 1

        client.generate("key-b", "three", types.GenerateContentConfig())
        assert mock_client_cls.call_count == 2
        assert mock_client_cls.call_args.kwargs["api_key"] == "key-b"
