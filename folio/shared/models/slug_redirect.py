"""
SlugRedirect Entity Model

A slug a document used to have. Requests for the old slug resolve to the
document so shared links keep working after a rename.

Bounded History:
================
At most MAX_SLUG_REDIRECTS rows per document. Adding one more evicts the
oldest, ordered by (created_at, id); `id` is an autoincrement so rows
written in the same instant still have a stable order.
"""

from datetime import datetime
import uuid

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from folio.shared.models.base import Base


class SlugRedirect(Base):
    """
    SlugRedirect model.

    Attributes:
        id: Autoincrement key; doubles as insertion order
        old_slug: The retired slug (unique across all redirects)
        document_id: Document the slug now points to
        created_at: When the slug was retired
    """

    __tablename__ = "slug_redirects"
    __table_args__ = (
        Index("ix_slug_redirects_document_created", "document_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    old_slug: Mapped[str] = mapped_column(
        String(200),
        unique=True,
        nullable=False,
        index=True,
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<SlugRedirect(old_slug={self.old_slug}, document_id={self.document_id})>"
