"""
AgriScan Backend - Gemini Service Unit Tests (Mocked)
======================================================

What:  Tests for GeminiService with the Google Generative AI SDK patched out.
How:   Patches the genai module so the model object is a mock whose
       generate_content_async call can be counted and scripted.

What we test:
    ✅ Missing key → configuration message, no API call
    ✅ Prompt composition and the English default
    ✅ Candidate text extraction and the "no text" fallback
    ✅ API error status → language-specific message
    ✅ Transport failure → generic message
    ❌ Real API calls
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.api_core import exceptions as google_exceptions

from agriscan.services.gemini_service import (
    NO_TEXT_MESSAGE,
    NOT_CONFIGURED_MESSAGE,
    TRANSPORT_ERROR_MESSAGE,
    GeminiService,
    build_prompt,
)


def make_response(*texts):
    """Build a fake generateContent response with one candidate."""
    parts = [MagicMock(text=text) for text in texts]
    candidate = MagicMock()
    candidate.content.parts = parts
    response = MagicMock()
    response.candidates = [candidate]
    return response


@pytest.fixture
def mock_genai():
    with patch("agriscan.services.gemini_service.genai") as genai_mock:
        model = MagicMock()
        model.generate_content_async = AsyncMock(return_value=make_response("Use drip irrigation."))
        genai_mock.GenerativeModel.return_value = model
        yield genai_mock


class TestBuildPrompt:

    def test_default_language_is_english(self):
        """Omitting the language should ask for English."""
        assert build_prompt("How do I store wheat") == (
            "How do I store wheat. Provide the response in simple, "
            "easy-to-understand English."
        )

    def test_none_language_is_english(self):
        """An explicit None language should ask for English."""
        assert build_prompt("Hi", None).endswith("easy-to-understand English.")

    def test_requested_language(self):
        """The requested language should appear in the instruction."""
        assert build_prompt("Hi", "Hindi").endswith("easy-to-understand Hindi.")


class TestGeminiServiceConfiguration:

    @pytest.mark.asyncio
    async def test_missing_key_returns_configuration_message(self, mock_genai):
        """Without a key, the service should answer with a fixed message and skip the API."""
        service = GeminiService(api_key="", model_name="gemini-test")

        result = await service.generate("What is blight?")

        assert result == NOT_CONFIGURED_MESSAGE
        service.model.generate_content_async.assert_not_awaited()
        mock_genai.configure.assert_not_called()

    def test_key_configures_sdk(self, mock_genai):
        """A key should configure the SDK once and build the named model."""
        service = GeminiService(api_key="secret", model_name="gemini-test")

        mock_genai.configure.assert_called_once_with(api_key="secret")
        mock_genai.GenerativeModel.assert_called_once_with("gemini-test")
        assert service.is_configured is True


class TestGeminiServiceGenerate:

    @pytest.mark.asyncio
    async def test_success_returns_first_candidate_text(self, mock_genai):
        """Successful API call should return the candidate text."""
        service = GeminiService(api_key="secret", model_name="gemini-test")

        result = await service.generate("How do I water tomatoes?")

        assert result == "Use drip irrigation."

    @pytest.mark.asyncio
    async def test_omitted_language_defaults_to_english(self, mock_genai):
        """The prompt sent to Gemini should ask for English by default."""
        service = GeminiService(api_key="secret", model_name="gemini-test")

        await service.generate("How do I water tomatoes?")

        service.model.generate_content_async.assert_awaited_once_with(
            "How do I water tomatoes?. Provide the response in simple, "
            "easy-to-understand English."
        )

    @pytest.mark.asyncio
    async def test_requested_language_in_prompt(self, mock_genai):
        """The prompt sent to Gemini should name the requested language."""
        service = GeminiService(api_key="secret", model_name="gemini-test")

        await service.generate("Best fertilizer for maize", "Swahili")

        sent = service.model.generate_content_async.await_args.args[0]
        assert sent.endswith("easy-to-understand Swahili.")

    @pytest.mark.asyncio
    async def test_only_first_part_is_returned(self, mock_genai):
        """Only the first part of the first candidate should be returned."""
        service = GeminiService(api_key="secret", model_name="gemini-test")
        service.model.generate_content_async.return_value = make_response("first", "second")

        assert await service.generate("q") == "first"

    @pytest.mark.asyncio
    async def test_no_candidates_returns_no_text_message(self, mock_genai):
        """A response without candidates should give the "no text" answer."""
        service = GeminiService(api_key="secret", model_name="gemini-test")
        response = MagicMock()
        response.candidates = []
        service.model.generate_content_async.return_value = response

        assert await service.generate("q") == NO_TEXT_MESSAGE

    @pytest.mark.asyncio
    async def test_empty_text_returns_no_text_message(self, mock_genai):
        """An empty candidate text should give the "no text" answer."""
        service = GeminiService(api_key="secret", model_name="gemini-test")
        service.model.generate_content_async.return_value = make_response("")

        assert await service.generate("q") == NO_TEXT_MESSAGE

    @pytest.mark.asyncio
    async def test_error_status_names_the_language(self, mock_genai):
        """An API error status should give the message naming the language."""
        service = GeminiService(api_key="secret", model_name="gemini-test")
        service.model.generate_content_async.side_effect = google_exceptions.ServiceUnavailable(
            "model overloaded"
        )

        result = await service.generate("q", "Tamil")

        assert result == "Sorry, I could not get a response from the AI in Tamil."

    @pytest.mark.asyncio
    async def test_error_status_with_default_language(self, mock_genai):
        """An API error with no language should name English."""
        service = GeminiService(api_key="secret", model_name="gemini-test")
        service.model.generate_content_async.side_effect = google_exceptions.BadRequest("bad key")

        result = await service.generate("q")

        assert result == "Sorry, I could not get a response from the AI in English."

    @pytest.mark.asyncio
    async def test_transport_failure_returns_generic_message(self, mock_genai):
        """A network failure should give the generic contact-failure message."""
        service = GeminiService(api_key="secret", model_name="gemini-test")
        service.model.generate_content_async.side_effect = ConnectionError("network down")

        assert await service.generate("q", "Hindi") == TRANSPORT_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_single_call_per_request(self, mock_genai):
        """No retries: a failing call is attempted exactly once."""
        service = GeminiService(api_key="secret", model_name="gemini-test")
        service.model.generate_content_async.side_effect = TimeoutError("slow")

        await service.generate("q")

        assert service.model.generate_content_async.await_count == 1
