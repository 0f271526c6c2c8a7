"""
AgriScan Backend - Scan Service
================================

What:  Saves farmer scan reports and lists farmer records.
How:   Addresses the document store as farmers/{farmerId}/scans/{auto-id}
       and translates any store failure into a StorageError carrying the
       endpoint's fixed client message.
Who:   Called by the /saveScan and /getFarms route handlers.

Error Handling Strategy:
    The store may fail for many reasons (bad path, unreachable backend,
    permission denied). The caller only ever sees the fixed message; the
    exception type and text are logged here and kept in the error context.
"""

import logging
from typing import Any, Dict, List

from agriscan.exceptions import StorageError
from agriscan.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

FARMERS_COLLECTION = "farmers"
SCANS_SUBCOLLECTION = "scans"

SAVE_SCAN_FAILED_MESSAGE = "Failed to save scan report."
FETCH_FARMS_FAILED_MESSAGE = "Failed to fetch farm data."


class ScanService:
    """
    Scan persistence on top of a DocumentStore.

    The farmer id is trusted as supplied by the caller; there is no
    ownership check.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    async def save_scan(self, farmer_id: Any, scan_data: Any) -> str:
        """
        Append one scan report to the farmer's `scans` sub-collection.

        Returns:
            The generated scan document id.

        Raises:
            StorageError: the store rejected the write (including a missing
                farmer id or a non-object payload).
        """
        try:
            scan_id = await self.store.append_to_subcollection(
                FARMERS_COLLECTION,
                farmer_id,
                SCANS_SUBCOLLECTION,
                scan_data,
            )
        except Exception as e:
            logger.error(
                "Failed to save scan for farmer %r: %s",
                farmer_id,
                str(e),
                exc_info=True,
            )
            raise StorageError(
                message=SAVE_SCAN_FAILED_MESSAGE,
                context={"farmer_id": farmer_id, "error_type": type(e).__name__},
            )

        logger.info("Saved scan %s for farmer %s", scan_id, farmer_id)
        return scan_id

    async def list_farmers(self) -> List[Dict[str, Any]]:
        """
        Return every top-level farmer record as {"id": ..., **fields}.

        A stored field named "id" wins over the document id. No pagination,
        filtering or ordering.
        """
        try:
            documents = await self.store.list_top_level(FARMERS_COLLECTION)
        except Exception as e:
            logger.error("Failed to list farmers: %s", str(e), exc_info=True)
            raise StorageError(
                message=FETCH_FARMS_FAILED_MESSAGE,
                context={"error_type": type(e).__name__},
            )

        return [{"id": doc_id, **data} for doc_id, data in documents]
