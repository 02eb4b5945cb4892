# pylint: skip-file
# ruff: noqa
"""Initial schema - documents, authors, slug redirects, stats

Revision ID: 001
Revises:
Create Date: 2026-03-01 00:00:00

Tables created:
- authors: Public profiles keyed by auth provider identity
- documents: Documents with slug, status and submission history
- slug_redirects: Retired slugs (bounded per document)
- document_stats: Singleton per-status counters, seeded with id = 1

Enums created:
- document_type: own, curated, inspiration
- document_status: building, pending, published
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


document_type_enum = postgresql.ENUM(
    "own",
    "curated",
    "inspiration",
    name="document_type",
    create_type=False,
)

document_status_enum = postgresql.ENUM(
    "building",
    "pending",
    "published",
    name="document_status",
    create_type=False,
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    op.execute("CREATE TYPE document_type AS ENUM ('own', 'curated', 'inspiration')")
    op.execute("CREATE TYPE document_status AS ENUM ('building', 'pending', 'published')")

    op.create_table(
        "authors",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "documents",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "author_id",
            sa.Uuid(),
            sa.ForeignKey("authors.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("slug", sa.String(200), nullable=False, unique=True, index=True),
        sa.Column("content", postgresql.JSONB(), nullable=False),
        sa.Column("type", document_type_enum, nullable=False),
        sa.Column("cover_image_id", sa.String(255), nullable=True),
        sa.Column("curation", postgresql.JSONB(), nullable=True),
        sa.Column("references", postgresql.JSONB(), nullable=True),
        sa.Column("status", document_status_enum, nullable=False, index=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column(
            "submission_history",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        *_timestamps(),
    )
    op.create_index("ix_documents_author_status", "documents", ["author_id", "status"])
    op.create_index("ix_documents_status_created_at", "documents", ["status", "created_at"])

    op.create_table(
        "slug_redirects",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("old_slug", sa.String(200), nullable=False, unique=True, index=True),
        sa.Column(
            "document_id",
            sa.Uuid(),
            sa.ForeignKey("documents.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_slug_redirects_document_created",
        "slug_redirects",
        ["document_id", "created_at"],
    )

    op.create_table(
        "document_stats",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("building_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("pending_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("published_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.execute(
        "INSERT INTO document_stats (id, building_count, pending_count, published_count, updated_at) "
        "VALUES (1, 0, 0, 0, CURRENT_TIMESTAMP)"
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("document_stats")
    op.drop_table("slug_redirects")
    op.drop_table("documents")
    op.drop_table("authors")

    op.execute("DROP TYPE IF EXISTS document_status")
    op.execute("DROP TYPE IF EXISTS document_type")
