"""
Slug Redirect Service

Keeps retired slugs resolvable after a rename, up to max_redirects per
document. One more redirect than that evicts the oldest.

    rename 1: a → b     redirects: [a]
    rename 2: b → c     redirects: [a, b]
    rename 3: c → d     redirects: [b, c]      evicted: a

Usage:
======
    from folio.shared.services.slug_redirect_service import SlugRedirectService

    redirects = SlugRedirectService(db, max_redirects=2)
    preview = await redirects.preview_eviction(document.id)
    evicted = await redirects.add_redirect(document.id, document.slug)
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from folio.shared.core.logging import get_logger
from folio.shared.repositories.slug_redirect_repository import (
    SlugRedirectRepository,
    select_eviction,
)
from folio.shared.utils.clock import Clock, utc_now


logger = get_logger("folio.redirects")


@dataclass
class EvictionPreview:
    """What add_redirect would evict for a document right now."""

    would_delete: Optional[str]
    count: int


class SlugRedirectService:
    """Bounded per-document slug history."""

    def __init__(self, session: AsyncSession, max_redirects: int, clock: Clock = utc_now) -> None:
        self.session = session
        self.max_redirects = max_redirects
        self.clock = clock
        self.redirect_repo = SlugRedirectRepository(session)

    async def add_redirect(self, document_id: UUID, old_slug: str) -> Optional[str]:
        """
        Record old_slug as a redirect to the document.

        Returns:
            The slug evicted to stay within max_redirects, or None
        """
        redirects = await self.redirect_repo.list_for_document(document_id)
        victim = select_eviction(redirects, self.max_redirects)

        deleted_slug = None
        if victim is not None:
            deleted_slug = victim.old_slug
            await self.redirect_repo.delete(victim)

        await self.redirect_repo.add(document_id, old_slug, self.clock())
        logger.info(
            "Slug redirect added",
            document_id=str(document_id),
            old_slug=old_slug,
            evicted_slug=deleted_slug,
        )
        return deleted_slug

    async def preview_eviction(
        self,
        document_id: UUID,
        reclaiming: Optional[str] = None,
    ) -> EvictionPreview:
        """
        Read-only: the slug the next add_redirect would evict.

        Args:
            document_id: Document about to be renamed
            reclaiming: New slug, when it is one of the document's own
                redirects; that row is removed before the insert, so it
                neither counts nor gets evicted
        """
        redirects = await self.redirect_repo.list_for_document(document_id)
        if reclaiming is not None:
            redirects = [r for r in redirects if r.old_slug != reclaiming]
        victim = select_eviction(redirects, self.max_redirects)
        return EvictionPreview(
            would_delete=victim.old_slug if victim else None,
            count=len(redirects),
        )

    async def resolve(self, old_slug: str) -> Optional[UUID]:
        redirect = await self.redirect_repo.get_by_old_slug(old_slug)
        return redirect.document_id if redirect else None

    async def reclaim(self, document_id: UUID, slug: str) -> bool:
        """
        Drop a document's own redirect for a slug it is taking back.

        Returns:
            True if a redirect was removed
        """
        redirect = await self.redirect_repo.get_by_old_slug(slug)
        if redirect is None or redirect.document_id != document_id:
            return False
        await self.redirect_repo.delete(redirect)
        return True

    async def delete_all_for_document(self, document_id: UUID) -> int:
        deleted = await self.redirect_repo.delete_all_for_document(document_id)
        if deleted:
            logger.info("Slug redirects deleted", document_id=str(document_id), count=deleted)
        return deleted
