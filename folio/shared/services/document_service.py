"""
Document Service

Business logic for the document lifecycle.

Write Path:
===========
Every write follows the same order inside the request transaction:

    1. Resolve the caller (Principal; admin check for admin actions)
    2. Re-fetch the document FOR UPDATE
    3. Ownership check against the locked row
    4. check_transition(document, action)   ← status gate + preconditions
    5. Rate limit / slug / redirect work
    6. Stats counters (singleton locked FOR UPDATE)
    7. Document fields, flush

Any exception aborts the request and get_db() rolls back steps 5-7
together, so counters, redirects and status never disagree.

Usage:
======
    from folio.shared.services.document_service import DocumentService

    service = DocumentService(db)
    created = await service.create(principal, "My Article", DocumentType.OWN)
    await service.submit(principal, created.document_id)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from folio.config.settings import settings
from folio.shared.core.exceptions import (
    DocumentEmptyError,
    DocumentInvalidTitleError,
    DocumentNotFoundError,
    DocumentOwnershipError,
    DocumentSlugDeletionRequiredError,
    DocumentValidationError,
)
from folio.shared.core.logging import get_logger
from folio.shared.models.document import Document
from folio.shared.models.enums import DocumentStatus, DocumentType
from folio.shared.repositories.author_repository import AuthorRepository
from folio.shared.repositories.document_repository import DocumentRepository
from folio.shared.services.auth_service import AuthService, Principal
from folio.shared.services.document_lifecycle import DocumentAction, check_transition
from folio.shared.services.slug_redirect_service import EvictionPreview, SlugRedirectService
from folio.shared.services.stats_service import StatsService, StatsSnapshot
from folio.shared.services.submission_rate_limiter import SubmissionRateLimiter
from folio.shared.utils.clock import Clock, to_epoch_ms, utc_now
from folio.shared.utils.content import extract_first_heading, has_content, is_valid_title
from folio.shared.utils.slug import generate_slug_with_id, generate_unique_slug


logger = get_logger("folio.documents")

# New ids drawn when a generated slug collides on its short-id suffix
_MAX_IDENTITY_ATTEMPTS = 5


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


# ═══════════════════════════════════════════════════════════════════════════════
# RESULT TYPES
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class CreatedDocument:
    document_id: UUID
    slug: str


@dataclass
class TitleUpdate:
    """Outcome of a rename; slug_deleted is the redirect evicted, if any."""

    slug: str
    slug_deleted: Optional[str] = None


@dataclass
class SlugLookup:
    """
    Result of resolving a slug.

    Exactly one of `document` (current slug) or `is_redirect` (retired slug
    pointing at `current_slug`) applies.
    """

    document: Optional[Document] = None
    is_redirect: bool = False
    current_slug: Optional[str] = None
    document_id: Optional[UUID] = None


@dataclass
class ReviewCopy:
    """Pending document as reviewers see it: no author identity."""

    id: UUID
    title: str
    type: DocumentType
    content: dict[str, Any]
    curation: Optional[dict[str, Any]]
    references: Optional[list[dict[str, Any]]]
    cover_image_id: Optional[str]
    submitted_at: Optional[datetime]
    created_at: datetime


@dataclass
class PaginatedDocuments:
    """Paginated list of documents."""

    items: list[Document]
    total: int
    page: int
    page_size: int

    @property
    def has_next(self) -> bool:
        return self.page * self.page_size < self.total

    @property
    def has_prev(self) -> bool:
        return self.page > 1


class DocumentService:
    """
    Service for document lifecycle business logic.

    Handles:
    - Creation with slug allocation
    - Draft edits (title, type, content, cover image, metadata)
    - Submission, review, direct publication and removal
    - Author, public and admin read projections
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Clock = utc_now,
        *,
        max_redirects: Optional[int] = None,
        rate_limiter: Optional[SubmissionRateLimiter] = None,
    ) -> None:
        """
        Initialize DocumentService.

        Args:
            session: Async database session
            clock: Time source (tests pass a controllable one)
            max_redirects: Override for MAX_SLUG_REDIRECTS
            rate_limiter: Override for the configured submission limiter
        """
        self.session = session
        self.clock = clock
        self.author_repo = AuthorRepository(session)
        self.document_repo = DocumentRepository(session)
        self.redirects = SlugRedirectService(
            session,
            max_redirects=max_redirects or settings.MAX_SLUG_REDIRECTS,
            clock=clock,
        )
        self.stats = StatsService(session, clock=clock)
        self.rate_limiter = rate_limiter or SubmissionRateLimiter(
            limit=settings.SUBMISSION_RATE_LIMIT,
            window_ms=settings.submission_window_ms,
            history_max=settings.SUBMISSION_HISTORY_MAX,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(
        self,
        principal: Principal,
        title: str,
        type: DocumentType,
        content: Optional[dict[str, Any]] = None,
    ) -> CreatedDocument:
        """
        Create a building document for the caller.

        A blank or "untitled" title is replaced by the content's first
        heading when there is one; otherwise the document keeps the
        placeholder title and gets an "untitled-{short_id}" slug.

        Returns:
            The new document's id and slug
        """
        author = await self.author_repo.get_or_create_for_user(principal.user_id, principal.name)
        content = content or {}
        title = (title or "").strip()
        if not is_valid_title(title):
            heading = extract_first_heading(content)
            if heading and is_valid_title(heading):
                title = heading

        document_id, slug = await self._allocate_identity(title)

        await self.stats.increment(DocumentStatus.BUILDING)

        now = self.clock()
        document = Document(
            id=document_id,
            author_id=author.id,
            title=title,
            slug=slug,
            content=content,
            type=type,
            status=DocumentStatus.BUILDING,
            submission_history=[],
            created_at=now,
            updated_at=now,
        )
        self.session.add(document)
        await self.session.flush()

        logger.info(
            "Document created",
            document_id=str(document_id),
            author_id=str(author.id),
            slug=slug,
            type=type.value,
        )
        return CreatedDocument(document_id=document_id, slug=slug)

    async def _allocate_identity(self, title: str) -> tuple[UUID, str]:
        """Pick a document id and a free slug derived from it."""
        for _ in range(_MAX_IDENTITY_ATTEMPTS):
            document_id = uuid4()
            slug = await self._slug_for(title, document_id)
            if not await self.document_repo.slug_taken(slug):
                return document_id, slug
        raise DocumentValidationError("Could not allocate a unique slug for this title")

    async def _slug_for(self, title: str, document_id: UUID) -> str:
        if not is_valid_title(title):
            return generate_slug_with_id("", document_id)
        return await generate_unique_slug(
            title,
            document_id,
            lambda candidate: self.document_repo.slug_taken(candidate, document_id),
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # DRAFT EDITS
    # ═══════════════════════════════════════════════════════════════════════════

    async def update_title(
        self,
        principal: Principal,
        document_id: UUID,
        title: str,
        *,
        confirm_slug_deletion: bool = False,
    ) -> TitleUpdate:
        """
        Rename a building document.

        Raises:
            DocumentInvalidTitleError: If the title is blank or "untitled"
            DocumentSlugDeletionRequiredError: If the rename would evict a
                redirect and confirm_slug_deletion is False
        """
        document = await self._load_for_edit(principal, document_id)
        slug_deleted = await self._retitle(document, title, confirm_slug_deletion)
        await self._touch(document)
        return TitleUpdate(slug=document.slug, slug_deleted=slug_deleted)

    async def update_type(self, principal: Principal, document_id: UUID, type: DocumentType) -> None:
        document = await self._load_for_edit(principal, document_id)
        document.type = type
        await self._touch(document)

    async def update_content(
        self,
        principal: Principal,
        document_id: UUID,
        content: dict[str, Any],
    ) -> None:
        """
        Save content; derive a title from it while the title is a placeholder.

        Raises:
            DocumentEmptyError: If there is no valid title, no heading and no text
        """
        document = await self._load_for_edit(principal, document_id)

        if not is_valid_title(document.title):
            heading = extract_first_heading(content)
            if heading and is_valid_title(heading):
                # Placeholder slugs are never recorded as redirects, so
                # nothing can be evicted here.
                await self._retitle(document, heading, confirm_slug_deletion=True)
            elif not has_content(content):
                raise DocumentEmptyError()

        document.content = content
        await self._touch(document)

    async def update_cover_image(
        self,
        principal: Principal,
        document_id: UUID,
        cover_image_id: Optional[str],
    ) -> None:
        document = await self._load_for_edit(principal, document_id)
        document.cover_image_id = cover_image_id
        await self._touch(document)

    async def update_metadata(
        self,
        principal: Principal,
        document_id: UUID,
        *,
        title: Any = UNSET,
        cover_image_id: Any = UNSET,
        curation: Any = UNSET,
        references: Any = UNSET,
        confirm_slug_deletion: bool = False,
    ) -> TitleUpdate:
        """
        Apply any subset of title, cover image, curation and references.

        Fields left as UNSET are untouched; None clears a field.
        """
        document = await self._load_for_edit(principal, document_id)

        slug_deleted = None
        if title is not UNSET:
            slug_deleted = await self._retitle(document, title, confirm_slug_deletion)
        if cover_image_id is not UNSET:
            document.cover_image_id = cover_image_id
        if curation is not UNSET:
            document.curation = dict(curation) if curation else None
        if references is not UNSET:
            document.references = [dict(ref) for ref in references] if references else None

        await self._touch(document)
        return TitleUpdate(slug=document.slug, slug_deleted=slug_deleted)

    async def preview_slug_eviction(self, principal: Principal, document_id: UUID) -> EvictionPreview:
        """What the next rename of this document would evict."""
        document = await self._get_owned(principal, document_id)
        return await self.redirects.preview_eviction(document.id)

    async def _retitle(self, document: Document, title: Optional[str], confirm_slug_deletion: bool) -> Optional[str]:
        """
        Set a new title and move the slug if it changes.

        The previous slug becomes a redirect unless it was the placeholder
        untitled-{short_id} (nothing links to it). A document renamed back to one
        of its own retired slugs takes that slug back from its redirects.

        Returns:
            The redirect slug evicted by this rename, if any
        """
        title = (title or "").strip()
        if not is_valid_title(title):
            raise DocumentInvalidTitleError()

        old_slug = document.slug
        had_real_title = old_slug != generate_slug_with_id("", document.id)
        new_slug = await generate_unique_slug(
            title,
            document.id,
            lambda candidate: self._slug_taken_by_other(candidate, document),
        )

        if new_slug == old_slug:
            document.title = title
            return None

        if await self._slug_taken_by_other(new_slug, document):
            raise DocumentValidationError(f"Slug '{new_slug}' is already in use")

        if had_real_title:
            preview = await self.redirects.preview_eviction(document.id, reclaiming=new_slug)
            if preview.would_delete and not confirm_slug_deletion:
                raise DocumentSlugDeletionRequiredError(preview.would_delete)

        await self.redirects.reclaim(document.id, new_slug)
        document.title = title
        document.slug = new_slug
        await self.session.flush()

        slug_deleted = None
        if had_real_title:
            slug_deleted = await self.redirects.add_redirect(document.id, old_slug)

        logger.info(
            "Document slug changed",
            document_id=str(document.id),
            old_slug=old_slug,
            new_slug=new_slug,
            slug_deleted=slug_deleted,
        )
        return slug_deleted

    async def _slug_taken_by_other(self, slug: str, document: Document) -> bool:
        return await self.document_repo.slug_taken(slug, exclude_document_id=document.id)

    async def _touch(self, document: Document) -> None:
        document.updated_at = self.clock()
        await self.session.flush()

    # ═══════════════════════════════════════════════════════════════════════════
    # STATUS TRANSITIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def submit(self, principal: Principal, document_id: UUID) -> None:
        """
        Send a building document to review.

        Raises:
            DocumentValidationError: Missing title, or curated without curation
            DocumentRateLimitError: Too many submissions inside the window
        """
        document = await self._load_owned_for_update(principal, document_id)
        next_status = check_transition(document, DocumentAction.SUBMIT)

        now = self.clock()
        now_ms = to_epoch_ms(now)
        history = list(document.submission_history or [])
        self.rate_limiter.check(history, now_ms)

        await self.stats.transfer(document.status, next_status)

        document.status = next_status
        document.submitted_at = now
        document.submission_history = self.rate_limiter.record(history, now_ms)
        document.rejection_reason = None
        document.updated_at = now
        await self.session.flush()

        logger.info(
            "Document submitted",
            document_id=str(document.id),
            submissions_in_window=len(self.rate_limiter.recent(document.submission_history, now_ms)),
        )

    async def approve(self, principal: Principal, document_id: UUID) -> None:
        """Admin: publish a pending document."""
        AuthService.require_admin(principal)
        document = await self._load_for_update(document_id)
        next_status = check_transition(document, DocumentAction.APPROVE)

        await self.stats.transfer(document.status, next_status)

        now = self.clock()
        document.status = next_status
        document.published_at = now
        document.updated_at = now
        await self.session.flush()

        logger.info("Document approved", document_id=str(document.id), reviewer=principal.user_id)

    async def reject(self, principal: Principal, document_id: UUID, reason: str) -> None:
        """
        Admin: send a pending document back to building with a reason.

        Raises:
            DocumentValidationError: If reason is blank
        """
        AuthService.require_admin(principal)
        document = await self._load_for_update(document_id)
        next_status = check_transition(document, DocumentAction.REJECT)

        reason = (reason or "").strip()
        if not reason:
            raise DocumentValidationError("Rejection reason is required")

        await self.stats.transfer(document.status, next_status)

        document.status = next_status
        document.rejection_reason = reason
        document.updated_at = self.clock()
        await self.session.flush()

        logger.info("Document rejected", document_id=str(document.id), reviewer=principal.user_id)

    async def publish(self, principal: Principal, document_id: UUID) -> None:
        """Publish a building document directly, bypassing review."""
        document = await self._load_owned_for_update(principal, document_id)
        next_status = check_transition(document, DocumentAction.PUBLISH)

        await self.stats.transfer(document.status, next_status)

        now = self.clock()
        document.status = next_status
        document.published_at = now
        document.updated_at = now
        await self.session.flush()

        logger.info("Document published", document_id=str(document.id))

    async def remove(self, principal: Principal, document_id: UUID) -> None:
        """Hard delete a document with its redirects, in any status."""
        document = await self._load_owned_for_update(principal, document_id)
        check_transition(document, DocumentAction.REMOVE)
        status = document.status

        redirects_deleted = await self.redirects.delete_all_for_document(document.id)
        await self.stats.decrement(status)
        await self.document_repo.delete(document)

        logger.info(
            "Document removed",
            document_id=str(document_id),
            status=status.value,
            redirects_deleted=redirects_deleted,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # AUTHOR READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, principal: Optional[Principal], document_id: UUID) -> Document:
        """
        A document the caller may see.

        Authors see their documents in any status; everyone else only sees
        published ones.
        """
        document = await self.document_repo.get_with_author(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        self._ensure_visible(principal, document)
        return document

    async def get_for_edit(self, principal: Principal, document_id: UUID) -> Document:
        """The caller's own document, any status."""
        return await self._get_owned(principal, document_id)

    async def get_by_slug(self, principal: Optional[Principal], slug: str) -> Optional[SlugLookup]:
        """
        Resolve a current or retired slug.

        Returns:
            SlugLookup with the document, redirect info for a retired slug,
            or None when the slug is unknown
        """
        document = await self.document_repo.get_by_slug(slug, with_author=True)
        if document is not None:
            self._ensure_visible(principal, document)
            return SlugLookup(document=document, document_id=document.id, current_slug=document.slug)

        target_id = await self.redirects.resolve(slug)
        if target_id is None:
            return None

        target = await self.document_repo.get_with_author(target_id)
        if target is None:
            return None
        self._ensure_visible(principal, target)
        return SlugLookup(is_redirect=True, current_slug=target.slug, document_id=target.id)

    async def list_for_author(
        self,
        principal: Principal,
        *,
        status: Optional[DocumentStatus] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> PaginatedDocuments:
        """The caller's documents, newest first, optionally one status."""
        author = await self.author_repo.get_by_user_id(principal.user_id)
        if author is None:
            return PaginatedDocuments(items=[], total=0, page=page, page_size=page_size)

        items = await self.document_repo.list_by_author(
            author.id,
            status=status,
            offset=(page - 1) * page_size,
            limit=page_size,
        )
        total = await self.document_repo.count_by_author(author.id, status=status)
        return PaginatedDocuments(items=items, total=total, page=page, page_size=page_size)

    # ═══════════════════════════════════════════════════════════════════════════
    # PUBLIC READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_published(self, document_id: UUID) -> Document:
        document = await self.document_repo.get_with_author(document_id)
        if document is None or document.status != DocumentStatus.PUBLISHED:
            raise DocumentNotFoundError(document_id)
        return document

    async def list_published(self, *, page: int = 1, page_size: int = 20) -> PaginatedDocuments:
        return await self._list_status(DocumentStatus.PUBLISHED, page, page_size, with_author=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # ADMIN READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_for_admin_review(self, principal: Principal, document_id: UUID) -> Optional[ReviewCopy]:
        """Anonymized copy of a pending document, or None."""
        AuthService.require_admin(principal)
        document = await self.document_repo.get(document_id)
        if document is None or document.status != DocumentStatus.PENDING:
            return None
        return ReviewCopy(
            id=document.id,
            title=document.title,
            type=document.type,
            content=document.content,
            curation=document.curation,
            references=document.references,
            cover_image_id=document.cover_image_id,
            submitted_at=document.submitted_at,
            created_at=document.created_at,
        )

    async def list_pending_for_admin(
        self,
        principal: Principal,
        *,
        page: int = 1,
        page_size: int = 20,
    ) -> PaginatedDocuments:
        AuthService.require_admin(principal)
        return await self._list_status(DocumentStatus.PENDING, page, page_size)

    async def get_admin_stats(self, principal: Principal) -> StatsSnapshot:
        AuthService.require_admin(principal)
        return await self.stats.get_stats()

    async def rebuild_stats(self, principal: Principal) -> StatsSnapshot:
        AuthService.require_admin(principal)
        return await self.stats.rebuild()

    async def _list_status(
        self,
        status: DocumentStatus,
        page: int,
        page_size: int,
        *,
        with_author: bool = False,
    ) -> PaginatedDocuments:
        items = await self.document_repo.list_by_status(
            status,
            offset=(page - 1) * page_size,
            limit=page_size,
            with_author=with_author,
        )
        total = await self.document_repo.count({"status": status})
        return PaginatedDocuments(items=items, total=total, page=page, page_size=page_size)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOADING & AUTHORIZATION
    # ═══════════════════════════════════════════════════════════════════════════

    async def _load_for_update(self, document_id: UUID) -> Document:
        document = await self.document_repo.get_for_update(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return document

    async def _load_owned_for_update(self, principal: Principal, document_id: UUID) -> Document:
        document = await self._load_for_update(document_id)
        await self._ensure_owner(principal, document)
        return document

    async def _load_for_edit(self, principal: Principal, document_id: UUID) -> Document:
        document = await self._load_owned_for_update(principal, document_id)
        check_transition(document, DocumentAction.EDIT)
        return document

    async def _get_owned(self, principal: Principal, document_id: UUID) -> Document:
        document = await self.document_repo.get(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        await self._ensure_owner(principal, document)
        return document

    async def _ensure_owner(self, principal: Principal, document: Document) -> None:
        author = await self.author_repo.get_by_user_id(principal.user_id)
        if author is None or document.author_id != author.id:
            raise DocumentOwnershipError()

    @staticmethod
    def _ensure_visible(principal: Optional[Principal], document: Document) -> None:
        if principal is not None and document.author.user_id == principal.user_id:
            return
        if document.status == DocumentStatus.PUBLISHED:
            return
        raise DocumentOwnershipError()
