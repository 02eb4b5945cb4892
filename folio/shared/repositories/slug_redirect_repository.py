"""
SlugRedirect repository for data access.

Eviction Order:
===============
A document's redirects are always read oldest first:

    ORDER BY created_at ASC, id ASC

and select_eviction() is the one rule that picks the row to drop. Both the
read-only preview and the evicting insert go through these two, so a
preview followed by an insert evicts exactly the predicted slug.
"""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from folio.shared.models.slug_redirect import SlugRedirect
from folio.shared.repositories.base import BaseRepository


EVICTION_ORDER = (SlugRedirect.created_at.asc(), SlugRedirect.id.asc())


def select_eviction(redirects: Sequence[SlugRedirect], max_redirects: int) -> Optional[SlugRedirect]:
    """Row to evict before one more redirect fits, given rows in eviction order."""
    if len(redirects) >= max_redirects:
        return redirects[0]
    return None


class SlugRedirectRepository(BaseRepository[SlugRedirect]):
    """Repository for SlugRedirect entity."""

    def __init__(self, session: AsyncSession):
        super().__init__(SlugRedirect, session)

    async def list_for_document(self, document_id: UUID) -> list[SlugRedirect]:
        """A document's redirects, oldest first."""
        stmt = (
            select(SlugRedirect)
            .where(SlugRedirect.document_id == document_id)
            .order_by(*EVICTION_ORDER)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_old_slug(self, old_slug: str) -> Optional[SlugRedirect]:
        result = await self.session.execute(select(SlugRedirect).where(SlugRedirect.old_slug == old_slug))
        return result.scalar_one_or_none()

    async def add(self, document_id: UUID, old_slug: str, created_at: datetime) -> SlugRedirect:
        return await self.create(document_id=document_id, old_slug=old_slug, created_at=created_at)

    async def delete_all_for_document(self, document_id: UUID) -> int:
        """
        Remove every redirect of a document.

        Returns:
            Number of rows deleted
        """
        result = await self.session.execute(
            delete(SlugRedirect)
            .where(SlugRedirect.document_id == document_id)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.flush()
        return result.rowcount or 0
