"""
Document repository for data access.

Locking:
========
Writes go through get_for_update(), which issues SELECT ... FOR UPDATE and
overwrites any stale copy already in the session identity map. Ownership
and status checks therefore see the row as it is inside the writing
transaction, not as it was when an earlier read loaded it.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import and_, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from folio.shared.models.document import Document
from folio.shared.models.enums import DocumentStatus
from folio.shared.models.slug_redirect import SlugRedirect
from folio.shared.repositories.base import BaseRepository


class DocumentRepository(BaseRepository[Document]):
    """Repository for Document entity."""

    def __init__(self, session: AsyncSession):
        super().__init__(Document, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # SINGLE DOCUMENT
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_for_update(self, document_id: UUID) -> Optional[Document]:
        """
        Lock and (re)load a document inside the current transaction.

        SQL Generated:
            SELECT * FROM documents WHERE id = '...' FOR UPDATE
        """
        stmt = (
            select(Document)
            .where(Document.id == document_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_with_author(self, document_id: UUID) -> Optional[Document]:
        stmt = (
            select(Document)
            .where(Document.id == document_id)
            .options(selectinload(Document.author))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str, *, with_author: bool = False) -> Optional[Document]:
        stmt = select(Document).where(Document.slug == slug)
        if with_author:
            stmt = stmt.options(selectinload(Document.author)).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def slug_taken(self, slug: str, exclude_document_id: Optional[UUID] = None) -> bool:
        """
        Whether a slug is unavailable to a document.

        A slug is taken when another document uses it as its current slug or
        still resolves it as a redirect. A document's own current slug and
        own redirects never count against it.
        """
        doc_clause = Document.slug == slug
        redirect_clause = SlugRedirect.old_slug == slug
        if exclude_document_id is not None:
            doc_clause = and_(doc_clause, Document.id != exclude_document_id)
            redirect_clause = and_(redirect_clause, SlugRedirect.document_id != exclude_document_id)

        stmt = select(
            or_(
                exists().where(doc_clause),
                exists().where(redirect_clause),
            )
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    # ═══════════════════════════════════════════════════════════════════════════
    # LISTINGS
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_by_author(
        self,
        author_id: UUID,
        *,
        status: Optional[DocumentStatus] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[Document]:
        """Author's documents, newest first."""
        filters: dict = {"author_id": author_id}
        if status is not None:
            filters["status"] = status
        return await self.list(offset=offset, limit=limit, filters=filters, order_by="created_at")

    async def count_by_author(self, author_id: UUID, *, status: Optional[DocumentStatus] = None) -> int:
        filters: dict = {"author_id": author_id}
        if status is not None:
            filters["status"] = status
        return await self.count(filters)

    async def list_by_status(
        self,
        status: DocumentStatus,
        *,
        offset: int = 0,
        limit: int = 20,
        with_author: bool = False,
    ) -> list[Document]:
        """
        Documents in one status, newest first.

        Served by ix_documents_status_created_at.
        """
        stmt = (
            select(Document)
            .where(Document.status == status)
            .order_by(Document.created_at.desc(), Document.id.desc())
            .offset(offset)
            .limit(limit)
        )
        if with_author:
            stmt = stmt.options(selectinload(Document.author))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_status(self) -> dict[DocumentStatus, int]:
        """
        Per-status document counts from the status index.

        SQL Generated:
            SELECT status, COUNT(id) FROM documents GROUP BY status
        """
        stmt = select(Document.status, func.count(Document.id)).group_by(Document.status)
        result = await self.session.execute(stmt)
        counts = {status: 0 for status in DocumentStatus}
        for status, total in result.all():
            counts[status] = total
        return counts
