"""
AgriScan Backend - SQL Document Store
======================================

What:  DocumentStore over a relational database through async SQLAlchemy.
How:   Every document is a row of the `documents` table (see
       models/document.py) keyed by (collection_path, id). Ids are generated
       here because SQL has no document-style auto ids.
Who:   Selected by DOCUMENT_STORE=sql; DATABASE_URL picks the database
       (sqlite+aiosqlite for local runs, postgresql+asyncpg in production).

Schema is managed by Alembic (`alembic upgrade head`). create_schema() exists
for throwaway databases such as the test suite's SQLite files.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine

from agriscan.database import Base, build_session_factory, session_scope
from agriscan.models.document import DocumentRecord
from agriscan.services.document_store import (
    DocumentStore,
    check_payload,
    check_segment,
    join_path,
    new_document_id,
)

logger = logging.getLogger(__name__)


class SqlDocumentStore(DocumentStore):
    """SQLAlchemy implementation of DocumentStore."""

    name = "sql"

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = build_session_factory(engine)

    async def create_schema(self) -> None:
        """Create the documents table if it does not exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

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

        async with session_scope(self._session_factory) as session:
            session.add(DocumentRecord(collection_path=path, id=doc_id, data=payload))

        logger.debug("Inserted document %s/%s", path, doc_id)
        return doc_id

    async def list_top_level(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]:
        check_segment("collection", collection)

        query = (
            select(DocumentRecord)
            .where(DocumentRecord.collection_path == collection)
            .order_by(DocumentRecord.created_at, DocumentRecord.id)
        )
        async with session_scope(self._session_factory) as session:
            result = await session.execute(query)
            records = list(result.scalars().all())

        return [(record.id, dict(record.data or {})) for record in records]

    async def close(self) -> None:
        # Returns pooled connections on shutdown
        await self.engine.dispose()
