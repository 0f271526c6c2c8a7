"""
AgriScan Backend - Google Gemini Text Service
==============================================

What:  TextCompletionService backed by the Google Gemini generateContent API.
How:   Wraps the client's prompt in a language instruction, sends it as a
       single text part, and pulls the first candidate's first text part out
       of the response.
Who:   Built once by the application factory; called by POST /gemini.

Failure Policy:
    The service never raises to its caller. Each failure class maps to a
    fixed answer that the route returns with HTTP 200:

    ┌───────────────────────────────┬──────────────────────────────────────┐
    │ Condition                     │ Answer                               │
    ├───────────────────────────────┼──────────────────────────────────────┤
    │ No API key                    │ NOT_CONFIGURED_MESSAGE (no API call) │
    │ Non-success status from API   │ UPSTREAM_ERROR_MESSAGE (+ language)  │
    │ Network / decoding failure    │ TRANSPORT_ERROR_MESSAGE              │
    │ No candidate text in response │ NO_TEXT_MESSAGE                      │
    └───────────────────────────────┴──────────────────────────────────────┘

    One attempt per request: no retries and no timeout beyond the SDK's own.
"""

import logging
import time
import uuid
from typing import Any, Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from agriscan.services.llm_base import DEFAULT_LANGUAGE, TextCompletionService

logger = logging.getLogger(__name__)


NOT_CONFIGURED_MESSAGE = "Sorry, the AI service is not configured correctly."
UPSTREAM_ERROR_MESSAGE = "Sorry, I could not get a response from the AI in {language}."
TRANSPORT_ERROR_MESSAGE = "There was a problem contacting the AI service."
NO_TEXT_MESSAGE = "No response text found."

PROMPT_TEMPLATE = "{prompt}. Provide the response in simple, easy-to-understand {language}."


def build_prompt(prompt: str, language: Optional[str] = DEFAULT_LANGUAGE) -> str:
    """Combine the client prompt with the answer-language instruction."""
    if language is None:
        language = DEFAULT_LANGUAGE
    return PROMPT_TEMPLATE.format(prompt=prompt, language=language)


class GeminiService(TextCompletionService):
    """
    Google Gemini implementation of TextCompletionService.

    The SDK keeps its credentials in module-level state, so configuration
    happens once here, at construction, and only when a key is present.
    Without a key the model object still exists but is never called.
    """

    def __init__(self, api_key: str, model_name: str):
        """
        Args:
            api_key:    Gemini API key; empty string disables the service.
            model_name: Gemini model used for generateContent.
        """
        self.api_key = api_key or ""
        self.model_name = model_name

        if self.api_key:
            genai.configure(api_key=self.api_key)

        self.model = genai.GenerativeModel(model_name)

        logger.info(
            "GeminiService initialized with model=%s, configured=%s",
            model_name,
            self.is_configured,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def generate(self, prompt: str, language: Optional[str] = DEFAULT_LANGUAGE) -> str:
        """
        Ask Gemini to answer `prompt` in `language`.

        Flow:
            1. Missing key → NOT_CONFIGURED_MESSAGE, no network call
            2. Build the language-qualified prompt
            3. Single generate_content_async call
            4. Map API / transport errors to fixed answers
            5. Extract the first candidate's text
        """
        if language is None:
            language = DEFAULT_LANGUAGE

        if not self.is_configured:
            logger.error("Gemini API key is missing; returning configuration message")
            return NOT_CONFIGURED_MESSAGE

        # Correlates the log lines of one call when requests overlap
        call_id = str(uuid.uuid4())[:8]
        full_prompt = build_prompt(prompt, language)
        start_time = time.perf_counter()

        logger.info(
            "[%s] Sending prompt to Gemini (model=%s, language=%s, %d chars)",
            call_id,
            self.model_name,
            language,
            len(full_prompt),
        )

        try:
            response = await self.model.generate_content_async(full_prompt)
        except google_exceptions.GoogleAPICallError as e:
            # The API answered with a non-success status
            logger.warning(
                "[%s] Gemini returned an error status (code=%s): %s",
                call_id,
                getattr(e, "code", None),
                getattr(e, "message", str(e)),
            )
            return UPSTREAM_ERROR_MESSAGE.format(language=language)
        except Exception as e:
            logger.error(
                "[%s] Gemini call failed: %s",
                call_id,
                str(e),
                exc_info=True,
            )
            return TRANSPORT_ERROR_MESSAGE

        duration_ms = (time.perf_counter() - start_time) * 1000
        text = self._extract_text(response)

        logger.info(
            "[%s] Gemini answered in %.0fms (%d chars)",
            call_id,
            duration_ms,
            len(text),
        )
        return text

    @staticmethod
    def _extract_text(response: Any) -> str:
        """
        Return candidates[0].content.parts[0].text, or NO_TEXT_MESSAGE when
        any step of that path is missing or the text is empty.
        """
        try:
            text = response.candidates[0].content.parts[0].text
        except (AttributeError, IndexError, KeyError, TypeError):
            return NO_TEXT_MESSAGE
        return text or NO_TEXT_MESSAGE
