"""
AgriScan Backend - Scan & Farm Route Handlers
==============================================

What:  POST /saveScan and GET /getFarms.
How:   Delegate to ScanService; StorageError from the service becomes a
       500 with the endpoint's fixed message via the global handler.

The farmer id is taken from the request body and trusted as-is.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends

from agriscan.dependencies import get_scan_service
from agriscan.schemas.api import ErrorResponse, SaveScanRequest, SaveScanResponse
from agriscan.services.scan_service import ScanService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Scans"])


@router.post(
    "/saveScan",
    status_code=201,
    response_model=SaveScanResponse,
    responses={
        201: {"description": "Scan stored", "model": SaveScanResponse},
        500: {"description": "Store write failed", "model": ErrorResponse},
    },
    summary="Save a farmer scan report",
)
async def save_scan(
    payload: Optional[SaveScanRequest] = Body(default=None),
    scan_service: ScanService = Depends(get_scan_service),
) -> SaveScanResponse:
    """
    Store `scanData` under farmers/{farmerId}/scans.

    A missing farmerId or scanData is rejected by the store and therefore
    reported like any other write failure (500).
    """
    payload = payload or SaveScanRequest()
    scan_id = await scan_service.save_scan(payload.farmer_id, payload.scan_data)
    return SaveScanResponse(id=scan_id)


@router.get(
    "/getFarms",
    response_model=List[Dict[str, Any]],
    responses={
        200: {"description": "All farmer records"},
        500: {"description": "Store read failed", "model": ErrorResponse},
    },
    summary="List farmer records",
)
async def get_farms(
    scan_service: ScanService = Depends(get_scan_service),
) -> List[Dict[str, Any]]:
    farms = await scan_service.list_farmers()
    logger.info("Returning %d farmer records", len(farms))
    return farms
