"""
AgriScan Backend - Document Store Interface
============================================

What:  The narrow persistence contract the scan service is written against,
       plus a process-local implementation.
How:   A store exposes exactly two data operations:

           append_to_subcollection(collection, document_id, subcollection, data) -> new id
           list_top_level(collection) -> [(id, data), ...]

       which is all the collection → document → sub-collection model of a
       document database needs to express here.
Who:   ScanService calls it; main.build_document_store() picks the backend.

Path Model (Firestore-style):
    farmers/                      ← top-level collection
    └── {farmerId}                ← document
        └── scans/                ← sub-collection
            └── {auto-id}         ← one document per saved scan

    Appending to a sub-collection does NOT create the parent document.
    Parent documents are written by other systems; until then they are
    absent from list_top_level().

Implementations:
    - InMemoryDocumentStore: dicts in this module (tests, local runs)
    - FirestoreDocumentStore: services/firestore_store.py
    - SqlDocumentStore:      services/sql_store.py
"""

import copy
import logging
import uuid
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Mapping
from typing import Any, Dict, List, Tuple

logger = logging.getLogger(__name__)

# Firestore auto-generated ids are 20 characters long
GENERATED_ID_LENGTH = 20


def new_document_id() -> str:
    """Generate a 20-character document id for stores without native ids."""
    return uuid.uuid4().hex[:GENERATED_ID_LENGTH]


def check_segment(name: str, value: Any) -> str:
    """
    Validate one path segment (collection name or document id).

    Raises:
        ValueError if the segment is not a non-blank string or contains '/'.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string, got {value!r}")
    if "/" in value:
        raise ValueError(f"{name} must not contain '/', got {value!r}")
    return value


def check_payload(data: Any) -> Dict[str, Any]:
    """Documents are mappings; anything else is rejected with ValueError."""
    if not isinstance(data, Mapping):
        raise ValueError(f"Document data must be a mapping, got {type(data).__name__}")
    return dict(data)


def join_path(*segments: str) -> str:
    return "/".join(segments)


class DocumentStore(ABC):
    """
    Abstract document store.

    Contract:
        - append_to_subcollection() stores `data` verbatim under a fresh id
          and returns that id; the parent document is left untouched
        - list_top_level() returns a full snapshot of a top-level collection,
          no ordering guarantee
        - invalid paths or payloads raise ValueError; backend failures
          propagate as the backend's own exceptions
    """

    # Reported by GET /health
    name: str = "abstract"

    @abstractmethod
    async def append_to_subcollection(
        self,
        collection: str,
        document_id: str,
        subcollection: str,
        data: Mapping,
    ) -> str:
        ...

    @abstractmethod
    async def list_top_level(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]:
        ...

    async def close(self) -> None:
        """Release backend resources. Called once on application shutdown."""
        return None


class InMemoryDocumentStore(DocumentStore):
    """
    Dict-backed DocumentStore.

    Documents are keyed by their full collection path
    ("farmers", "farmers/f1/scans", ...). Stored and returned data are deep
    copies, so callers cannot mutate what the store holds.
    """

    name = "memory"

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(dict)

    async def append_to_subcollection(
        self,
        collection: str,
        document_id: str,
        subcollection: str,
        data: Mapping,
    ) -> str:
        path = join_path(
            check_segment("collection", collection),
            check_segment("document_id", document_id),
            check_segment("subcollection", subcollection),
        )
        payload = check_payload(data)

        doc_id = new_document_id()
        self._collections[path][doc_id] = copy.deepcopy(payload)
        logger.debug("Stored document %s/%s", path, doc_id)
        return doc_id

    async def list_top_level(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]:
        check_segment("collection", collection)
        documents = self._collections.get(collection, {})
        return [(doc_id, copy.deepcopy(data)) for doc_id, data in documents.items()]

    # ── Inspection / seeding helpers (not part of DocumentStore) ─────────

    def put_document(self, collection: str, document_id: str, data: Mapping) -> None:
        """Write a top-level document, as another writer would."""
        check_segment("collection", collection)
        check_segment("document_id", document_id)
        self._collections[collection][document_id] = copy.deepcopy(check_payload(data))

    def list_subcollection(
        self, collection: str, document_id: str, subcollection: str
    ) -> List[Tuple[str, Dict[str, Any]]]:
        path = join_path(collection, document_id, subcollection)
        documents = self._collections.get(path, {})
        return [(doc_id, copy.deepcopy(data)) for doc_id, data in documents.items()]
