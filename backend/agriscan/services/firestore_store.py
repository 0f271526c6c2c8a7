"""
AgriScan Backend - Cloud Firestore Document Store
==================================================

What:  DocumentStore backed by Cloud Firestore via the Firebase Admin SDK.
How:   Uses the async Firestore client (`firebase_admin.firestore_async`).
       The Firebase app and client are created on first use, so importing
       or constructing the store never needs credentials.
Who:   Selected by DOCUMENT_STORE=firestore (the default).

Credentials:
    FIREBASE_CREDENTIALS_PATH set → service-account certificate
    otherwise                     → Application Default Credentials
                                    (what a Cloud Functions / Cloud Run
                                    runtime provides)
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple

import firebase_admin
from firebase_admin import credentials, firestore_async

from agriscan.services.document_store import (
    DocumentStore,
    check_payload,
    check_segment,
)

logger = logging.getLogger(__name__)


class FirestoreDocumentStore(DocumentStore):
    """Firestore implementation of DocumentStore."""

    name = "firestore"

    def __init__(
        self,
        client: Any = None,
        project_id: Optional[str] = None,
        credentials_path: Optional[str] = None,
    ):
        """
        Args:
            client:           Ready-made async Firestore client (tests inject
                              a mock here). Built lazily when None.
            project_id:       Optional Google Cloud project override.
            credentials_path: Optional service-account JSON file.
        """
        self._client = client
        self.project_id = project_id
        self.credentials_path = credentials_path

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> Any:
        try:
            app = firebase_admin.get_app()
        except ValueError:
            # No default app yet in this process
            cred = (
                credentials.Certificate(self.credentials_path)
                if self.credentials_path
                else None
            )
            options = {"projectId": self.project_id} if self.project_id else None
            app = firebase_admin.initialize_app(cred, options)
            logger.info(
                "Firebase app initialized (project=%s, credentials=%s)",
                self.project_id or "default",
                "service account" if self.credentials_path else "application default",
            )
        return firestore_async.client(app)

    async def append_to_subcollection(
        self,
        collection: str,
        document_id: str,
        subcollection: str,
        data: Mapping,
    ) -> str:
        check_segment("collection", collection)
        check_segment("document_id", document_id)
        check_segment("subcollection", subcollection)
        payload = check_payload(data)

        scans_ref = (
            self.client.collection(collection)
            .document(document_id)
            .collection(subcollection)
        )
        # add() returns (update_time, document_reference)
        _, doc_ref = await scans_ref.add(payload)
        logger.debug("Added Firestore document %s/%s/%s/%s", collection, document_id, subcollection, doc_ref.id)
        return doc_ref.id

    async def list_top_level(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]:
        check_segment("collection", collection)

        documents: List[Tuple[str, Dict[str, Any]]] = []
        async for snapshot in self.client.collection(collection).stream():
            documents.append((snapshot.id, snapshot.to_dict() or {}))
        return documents
