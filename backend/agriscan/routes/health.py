"""
AgriScan Backend - Health Check Route
======================================

What:  GET /health for monitoring and load balancer probes.
How:   Reports configuration state without calling any dependency: the
       active document store backend and whether a Gemini key is set.

Status levels:
    - healthy:   Gemini configured
    - degraded:  Gemini key missing (/gemini answers with a fixed message)
"""

import time

from fastapi import APIRouter, Request

from agriscan import __version__
from agriscan.schemas.api import HealthResponse

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    state = request.app.state

    gemini_status = "configured"
    if not getattr(state.text_service, "is_configured", True):
        gemini_status = "not_configured"

    return HealthResponse(
        status="healthy" if gemini_status == "configured" else "degraded",
        version=__version__,
        document_store=state.document_store.name,
        gemini=gemini_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
