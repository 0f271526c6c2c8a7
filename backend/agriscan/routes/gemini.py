"""
AgriScan Backend - Gemini Route Handler
========================================

What:  POST /gemini, the web app's AI feature endpoint.
How:   Checks the prompt is present, asks the text service for an answer in
       the requested language, and returns the answer as an HTML fragment.

Request Flow:
    1. Body {"prompt": ..., "language": ...}; language optional
    2. Missing/empty prompt → 400 {"error": "Prompt is required"}
    3. TextCompletionService.generate() → raw answer (or fallback text)
    4. format_response() → HTML fragment
    5. 200 {"response": fragment}

AI failures are not HTTP errors: the fallback text is returned with 200.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends

from agriscan.dependencies import get_text_service
from agriscan.exceptions import ValidationError
from agriscan.schemas.api import ErrorResponse, GeminiResponse, PromptRequest
from agriscan.services.formatter import format_response
from agriscan.services.llm_base import TextCompletionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["AI"])

PROMPT_REQUIRED_MESSAGE = "Prompt is required"


@router.post(
    "/gemini",
    response_model=GeminiResponse,
    responses={
        200: {"description": "AI answer as an HTML fragment", "model": GeminiResponse},
        400: {"description": "Prompt missing", "model": ErrorResponse},
    },
    summary="Ask the AI a question in a given language",
)
async def ask_gemini(
    payload: Optional[PromptRequest] = Body(default=None),
    text_service: TextCompletionService = Depends(get_text_service),
) -> GeminiResponse:
    prompt = payload.prompt if payload else None
    if not prompt:
        raise ValidationError(message=PROMPT_REQUIRED_MESSAGE, field="prompt")

    # Numbers and booleans are interpolated as text
    prompt = str(prompt)
    language = None if payload.language is None else str(payload.language)

    logger.info(
        "Received AI prompt: %d chars, language=%s",
        len(prompt),
        language or "default",
    )

    answer = await text_service.generate(prompt, language)
    return GeminiResponse(response=format_response(answer))
