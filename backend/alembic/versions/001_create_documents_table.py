"""Create documents table

Revision ID: 001
Revises: None
Create Date: 2025-06-01 00:00:00.000000+00:00

What:  Creates the `documents` table backing the SQL document store.
How:   Composite primary key (collection_path, id); JSON payload column;
       portable types so the same migration runs on SQLite and PostgreSQL.

Rollback: downgrade() drops the table (all stored farmers and scans are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the documents table and its listing index."""
    op.create_table(
        "documents",
        sa.Column(
            "collection_path",
            sa.String(1024),
            nullable=False,
            comment="Slash-separated path of the collection holding this document",
        ),
        sa.Column(
            "id",
            sa.String(255),
            nullable=False,
            comment="Document id, unique within its collection",
        ),
        sa.Column(
            "data",
            sa.JSON(),
            nullable=False,
            comment="Caller-supplied document fields",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this document was written (UTC)",
        ),
        sa.PrimaryKeyConstraint("collection_path", "id"),
    )

    # list_top_level() filters on the path and orders by write time
    op.create_index(
        "idx_documents_collection_created",
        "documents",
        ["collection_path", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("idx_documents_collection_created", table_name="documents")
    op.drop_table("documents")
