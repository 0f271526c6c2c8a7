"""
AgriScan Backend - Document SQLAlchemy Model
=============================================

What:  ORM model for the `documents` table used by the SQL document store.
How:   One row per document. The row's collection path plus its id form the
       primary key, mirroring a document database's addressing:

           collection_path            id          data (JSON)
           ─────────────────────────  ──────────  ─────────────────────
           farmers                    f-123       {"name": "Asha", ...}
           farmers/f-123/scans        9c1e...     {"cropType": "rice"}

Who:   SqlDocumentStore for reads/writes, Alembic for schema management.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from agriscan.database import Base


class DocumentRecord(Base):
    """
    A single stored document.

    Payloads are stored verbatim; no schema is enforced on `data`.
    """

    __tablename__ = "documents"

    # Full path of the owning collection, e.g. "farmers/f-123/scans"
    collection_path: Mapped[str] = mapped_column(
        String(1024),
        primary_key=True,
        comment="Slash-separated path of the collection holding this document",
    )

    id: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        comment="Document id, unique within its collection",
    )

    data: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Caller-supplied document fields",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this document was written (UTC)",
    )

    __table_args__ = (
        Index("idx_documents_collection_created", "collection_path", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<DocumentRecord(path='{self.collection_path}/{self.id}')>"
