"""
AgriScan Backend - Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models for the JSON bodies of the public endpoints.
How:   FastAPI validates request bodies against these models and uses them
       for the OpenAPI document. Field names on the wire are camelCase
       (`farmerId`, `scanData`) to match the existing web/mobile client.

Request models accept any JSON value per field. Required-field checks live
in the routes and services so a missing or odd field yields the endpoint's
own error body rather than FastAPI's generic 422.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PromptRequest(BaseModel):
    """
    Body of POST /gemini.

    Both fields accept any JSON value; non-string values are rendered with
    str() when the prompt is built.
    """
    prompt: Optional[Any] = Field(default=None, description="Question or instruction for the AI")
    language: Optional[Any] = Field(
        default=None,
        description="Answer language (defaults to English)",
    )


class SaveScanRequest(BaseModel):
    """
    Body of POST /saveScan. `scanData` is stored verbatim.

    `farmerId` is not type-checked here: the document store rejects anything
    that is not a usable path segment, which surfaces as a save failure.
    """
    farmer_id: Optional[Any] = Field(
        default=None,
        alias="farmerId",
        description="Caller-supplied farmer identifier (trusted as-is)",
    )
    scan_data: Optional[Any] = Field(
        default=None,
        alias="scanData",
        description="Scan report payload (JSON object)",
    )

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class GeminiResponse(BaseModel):
    response: str = Field(description="AI answer formatted as an HTML fragment")


class SaveScanResponse(BaseModel):
    id: str = Field(description="Generated id of the stored scan document")


class ErrorResponse(BaseModel):
    """
    Error body returned by every endpoint.

    Example:
        {"error": "Prompt is required"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer checks."""
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    document_store: str = Field(description="Active document store backend")
    gemini: str = Field(description="Gemini configuration: configured, not_configured")
    uptime_seconds: float = Field(description="Seconds since service started")
