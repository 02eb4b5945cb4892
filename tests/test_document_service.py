"""Tests for DocumentService: creation, edits, slugs and the lifecycle."""

import pytest

from folio.shared.core.exceptions import (
    AdminRequiredError,
    DocumentEmptyError,
    DocumentInvalidStatusError,
    DocumentInvalidTitleError,
    DocumentNotFoundError,
    DocumentOwnershipError,
    DocumentPendingReviewError,
    DocumentPublishedError,
    DocumentRateLimitError,
    DocumentSlugDeletionRequiredError,
    DocumentValidationError,
)
from folio.shared.models import DocumentStatus, DocumentType
from folio.shared.repositories.slug_redirect_repository import SlugRedirectRepository
from folio.shared.utils.slug import get_short_id


CURATION = {
    "source_url": "https://example.com/post",
    "source_title": "A Post",
    "spin": "Why it matters",
}


def heading_doc(text):
    return {
        "type": "doc",
        "content": [
            {"type": "heading", "attrs": {"level": 1}, "content": [{"type": "text", "text": text}]},
        ],
    }


async def counts(service, admin):
    snapshot = await service.get_admin_stats(admin)
    return snapshot.building_count, snapshot.pending_count, snapshot.published_count


# ═══════════════════════════════════════════════════════════════════════════════
# CREATE
# ═══════════════════════════════════════════════════════════════════════════════


async def test_create_building_document(service, author, admin):
    created = await service.create(author, "My Article", DocumentType.OWN)

    document = await service.get_for_edit(author, created.document_id)
    assert document.status == DocumentStatus.BUILDING
    assert created.slug == "my-article"
    assert document.submission_history == []
    assert await counts(service, admin) == (1, 0, 0)


async def test_duplicate_title_gets_short_id_suffix(service, author, other_author):
    first = await service.create(author, "My Article", DocumentType.OWN)
    second = await service.create(other_author, "My Article", DocumentType.OWN)

    assert first.slug == "my-article"
    assert second.slug == f"my-article-{get_short_id(second.document_id)}"
    assert second.slug != first.slug


async def test_create_without_title_uses_placeholder_slug(service, author):
    created = await service.create(author, "", DocumentType.OWN)

    assert created.slug == f"untitled-{get_short_id(created.document_id)}"


async def test_create_takes_title_from_first_heading(service, author):
    created = await service.create(author, "Untitled", DocumentType.OWN, content=heading_doc("From Heading"))

    document = await service.get_for_edit(author, created.document_id)
    assert document.title == "From Heading"
    assert created.slug == "from-heading"


async def test_create_ignores_untitled_heading(service, author):
    created = await service.create(author, "", DocumentType.OWN, content=heading_doc("Untitled"))

    document = await service.get_for_edit(author, created.document_id)
    assert document.title == ""
    assert created.slug == f"untitled-{get_short_id(created.document_id)}"


async def test_slug_of_retired_name_is_not_reused(service, author, other_author):
    first = await service.create(author, "Original", DocumentType.OWN)
    await service.update_title(author, first.document_id, "Renamed")

    second = await service.create(other_author, "Original", DocumentType.OWN)

    assert second.slug == f"original-{get_short_id(second.document_id)}"


# ═══════════════════════════════════════════════════════════════════════════════
# TITLES & REDIRECTS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_rename_keeps_old_slug_as_redirect(service, author):
    created = await service.create(author, "Old Name", DocumentType.OWN)

    result = await service.update_title(author, created.document_id, "New Name")

    assert result.slug == "new-name"
    assert result.slug_deleted is None
    lookup = await service.get_by_slug(author, "old-name")
    assert lookup.is_redirect
    assert lookup.current_slug == "new-name"
    assert lookup.document_id == created.document_id


async def test_third_rename_evicts_oldest_redirect(service, author, clock):
    created = await service.create(author, "Title Zero", DocumentType.OWN)
    clock.advance(minutes=1)
    await service.update_title(author, created.document_id, "Title One")
    clock.advance(minutes=1)
    await service.update_title(author, created.document_id, "Title Two")
    clock.advance(minutes=1)

    with pytest.raises(DocumentSlugDeletionRequiredError) as exc_info:
        await service.update_title(author, created.document_id, "Title Three")
    assert exc_info.value.details == {"slug": "title-zero"}
    assert "/article/title-zero " in exc_info.value.message

    result = await service.update_title(
        author, created.document_id, "Title Three", confirm_slug_deletion=True
    )

    assert result.slug == "title-three"
    assert result.slug_deleted == "title-zero"
    remaining = await SlugRedirectRepository(service.session).list_for_document(created.document_id)
    assert [r.old_slug for r in remaining] == ["title-one", "title-two"]
    assert await service.get_by_slug(author, "title-zero") is None


async def test_preview_names_the_slug_rename_would_delete(service, author, clock):
    created = await service.create(author, "Title Zero", DocumentType.OWN)
    await service.update_title(author, created.document_id, "Title One")
    clock.advance(minutes=1)
    await service.update_title(author, created.document_id, "Title Two")

    preview = await service.preview_slug_eviction(author, created.document_id)
    result = await service.update_title(author, created.document_id, "Title Three", confirm_slug_deletion=True)

    assert preview.count == 2
    assert preview.would_delete == result.slug_deleted == "title-zero"


async def test_renaming_back_reclaims_own_redirect(service, author):
    created = await service.create(author, "Alpha", DocumentType.OWN)
    await service.update_title(author, created.document_id, "Beta")
    await service.update_title(author, created.document_id, "Gamma")

    result = await service.update_title(author, created.document_id, "Alpha")

    assert result.slug == "alpha"
    assert result.slug_deleted is None
    remaining = await SlugRedirectRepository(service.session).list_for_document(created.document_id)
    assert sorted(r.old_slug for r in remaining) == ["beta", "gamma"]


async def test_same_slug_rename_changes_title_only(service, author):
    created = await service.create(author, "Same Title", DocumentType.OWN)

    result = await service.update_title(author, created.document_id, "Same   title!")

    document = await service.get_for_edit(author, created.document_id)
    assert result.slug == "same-title"
    assert document.title == "Same   title!"
    assert await SlugRedirectRepository(service.session).list_for_document(created.document_id) == []


@pytest.mark.parametrize("title", ["", "   ", "untitled", "UNTITLED"])
async def test_invalid_title_is_rejected(service, author, title):
    created = await service.create(author, "Valid", DocumentType.OWN)

    with pytest.raises(DocumentInvalidTitleError):
        await service.update_title(author, created.document_id, title)


async def test_placeholder_slug_is_not_kept_as_redirect(service, author):
    created = await service.create(author, "", DocumentType.OWN)

    result = await service.update_title(author, created.document_id, "Real Title")

    assert result.slug == "real-title"
    assert await SlugRedirectRepository(service.session).list_for_document(created.document_id) == []
    assert await service.get_by_slug(author, created.slug) is None


async def test_unsluggable_title_slug_is_not_kept_as_redirect(service, author):
    created = await service.create(author, "!!!", DocumentType.OWN)
    assert created.slug == f"untitled-{get_short_id(created.document_id)}"

    result = await service.update_title(author, created.document_id, "Real Title")

    assert result.slug == "real-title"
    assert await SlugRedirectRepository(service.session).list_for_document(created.document_id) == []


# ═══════════════════════════════════════════════════════════════════════════════
# CONTENT & METADATA
# ═══════════════════════════════════════════════════════════════════════════════


async def test_content_heading_names_untitled_document(service, author):
    created = await service.create(author, "", DocumentType.OWN)

    await service.update_content(author, created.document_id, heading_doc("Derived Title"))

    document = await service.get_for_edit(author, created.document_id)
    assert document.title == "Derived Title"
    assert document.slug == "derived-title"


async def test_content_does_not_override_real_title(service, author):
    created = await service.create(author, "Kept", DocumentType.OWN)

    await service.update_content(author, created.document_id, heading_doc("Ignored"))

    document = await service.get_for_edit(author, created.document_id)
    assert document.title == "Kept"


async def test_empty_content_on_untitled_document_is_refused(service, author):
    created = await service.create(author, "", DocumentType.OWN)

    with pytest.raises(DocumentEmptyError):
        await service.update_content(author, created.document_id, {"type": "doc", "content": []})


async def test_untitled_heading_with_body_is_saved(service, author):
    created = await service.create(author, "", DocumentType.OWN)
    content = {
        "type": "doc",
        "content": [
            {"type": "heading", "attrs": {"level": 1}, "content": [{"type": "text", "text": "Untitled"}]},
            {"type": "paragraph", "content": [{"type": "text", "text": "Body text"}]},
        ],
    }

    await service.update_content(author, created.document_id, content)

    document = await service.get_for_edit(author, created.document_id)
    assert document.content == content
    assert document.title == ""
    assert document.slug == created.slug


async def test_update_metadata_applies_only_given_fields(service, author):
    created = await service.create(author, "Meta", DocumentType.CURATED)
    await service.update_cover_image(author, created.document_id, "cover-1")

    await service.update_metadata(author, created.document_id, curation=CURATION)

    document = await service.get_for_edit(author, created.document_id)
    assert document.curation == CURATION
    assert document.cover_image_id == "cover-1"
    assert document.title == "Meta"

    await service.update_metadata(author, created.document_id, cover_image_id=None)
    document = await service.get_for_edit(author, created.document_id)
    assert document.cover_image_id is None


async def test_update_type(service, author):
    created = await service.create(author, "Typed", DocumentType.OWN)

    await service.update_type(author, created.document_id, DocumentType.INSPIRATION)

    document = await service.get_for_edit(author, created.document_id)
    assert document.type == DocumentType.INSPIRATION


async def test_edits_are_locked_outside_building(service, author):
    created = await service.create(author, "Locked", DocumentType.OWN)
    await service.submit(author, created.document_id)

    with pytest.raises(DocumentPendingReviewError):
        await service.update_title(author, created.document_id, "Other")


async def test_published_document_cannot_be_edited(service, author):
    created = await service.create(author, "Done", DocumentType.OWN)
    await service.publish(author, created.document_id)

    with pytest.raises(DocumentPublishedError):
        await service.update_type(author, created.document_id, DocumentType.INSPIRATION)


async def test_only_owner_can_edit(service, author, other_author):
    created = await service.create(author, "Mine", DocumentType.OWN)

    with pytest.raises(DocumentOwnershipError):
        await service.update_title(other_author, created.document_id, "Theirs")


# ═══════════════════════════════════════════════════════════════════════════════
# SUBMISSION & REVIEW
# ═══════════════════════════════════════════════════════════════════════════════


async def test_submit_moves_to_pending(service, author, admin, clock):
    created = await service.create(author, "Submit Me", DocumentType.OWN)

    await service.submit(author, created.document_id)

    document = await service.get_for_edit(author, created.document_id)
    assert document.status == DocumentStatus.PENDING
    assert document.submitted_at is not None
    assert len(document.submission_history) == 1
    assert await counts(service, admin) == (0, 1, 0)


async def test_submit_requires_title(service, author):
    created = await service.create(author, "", DocumentType.OWN)

    with pytest.raises(DocumentValidationError):
        await service.submit(author, created.document_id)


async def test_curated_submit_requires_curation(service, author):
    created = await service.create(author, "Curated", DocumentType.CURATED)

    with pytest.raises(DocumentValidationError):
        await service.submit(author, created.document_id)

    await service.update_metadata(author, created.document_id, curation=CURATION)
    await service.submit(author, created.document_id)


async def test_fourth_submission_in_window_is_rate_limited(service, author, admin, clock):
    created = await service.create(author, "Busy", DocumentType.OWN)
    for _ in range(3):
        await service.submit(author, created.document_id)
        await service.reject(admin, created.document_id, "Try again")
        clock.advance(hours=1)

    with pytest.raises(DocumentRateLimitError) as exc_info:
        await service.submit(author, created.document_id)

    assert exc_info.value.details["retry_after_seconds"] == 21 * 3600
    document = await service.get_for_edit(author, created.document_id)
    assert document.status == DocumentStatus.BUILDING
    assert await counts(service, admin) == (1, 0, 0)


async def test_submission_allowed_once_oldest_ages_out(service, author, admin, clock):
    created = await service.create(author, "Patient", DocumentType.OWN)
    for _ in range(3):
        await service.submit(author, created.document_id)
        await service.reject(admin, created.document_id, "Try again")
        clock.advance(hours=1)

    clock.advance(hours=21, seconds=1)
    await service.submit(author, created.document_id)


async def test_reject_returns_to_building(service, author, admin):
    created = await service.create(author, "Rejected", DocumentType.OWN)
    await service.submit(author, created.document_id)

    await service.reject(admin, created.document_id, "needs more detail")

    document = await service.get_for_edit(author, created.document_id)
    assert document.status == DocumentStatus.BUILDING
    assert document.rejection_reason == "needs more detail"
    assert await counts(service, admin) == (1, 0, 0)


async def test_resubmit_clears_rejection_reason(service, author, admin):
    created = await service.create(author, "Again", DocumentType.OWN)
    await service.submit(author, created.document_id)
    await service.reject(admin, created.document_id, "needs more detail")

    await service.submit(author, created.document_id)

    document = await service.get_for_edit(author, created.document_id)
    assert document.rejection_reason is None


async def test_reject_requires_reason(service, author, admin):
    created = await service.create(author, "Reasonless", DocumentType.OWN)
    await service.submit(author, created.document_id)

    with pytest.raises(DocumentValidationError):
        await service.reject(admin, created.document_id, "   ")


async def test_approve_publishes(service, author, admin, clock):
    created = await service.create(author, "Approved", DocumentType.OWN)
    await service.submit(author, created.document_id)

    await service.approve(admin, created.document_id)

    document = await service.get_for_edit(author, created.document_id)
    assert document.status == DocumentStatus.PUBLISHED
    assert document.published_at is not None
    assert await counts(service, admin) == (0, 0, 1)


async def test_review_actions_require_admin(service, author):
    created = await service.create(author, "Self Review", DocumentType.OWN)
    await service.submit(author, created.document_id)

    with pytest.raises(AdminRequiredError):
        await service.approve(author, created.document_id)
    with pytest.raises(AdminRequiredError):
        await service.reject(author, created.document_id, "no")


async def test_approve_of_building_document_is_refused(service, author, admin):
    created = await service.create(author, "Not Yet", DocumentType.OWN)

    with pytest.raises(DocumentInvalidStatusError):
        await service.approve(admin, created.document_id)

    document = await service.get_for_edit(author, created.document_id)
    assert document.status == DocumentStatus.BUILDING
    assert await counts(service, admin) == (1, 0, 0)


async def test_second_submit_of_pending_document_is_refused(service, author, admin):
    created = await service.create(author, "Twice", DocumentType.OWN)
    await service.submit(author, created.document_id)

    with pytest.raises(DocumentInvalidStatusError):
        await service.submit(author, created.document_id)

    document = await service.get_for_edit(author, created.document_id)
    assert len(document.submission_history) == 1
    assert await counts(service, admin) == (0, 1, 0)


async def test_direct_publish(service, author, admin):
    created = await service.create(author, "Straight Out", DocumentType.OWN)

    await service.publish(author, created.document_id)

    published = await service.get_published(created.document_id)
    assert published.author.name == "Ada"
    assert await counts(service, admin) == (0, 0, 1)


# ═══════════════════════════════════════════════════════════════════════════════
# REMOVE
# ═══════════════════════════════════════════════════════════════════════════════


async def test_remove_deletes_document_and_redirects(service, author, admin):
    created = await service.create(author, "Short Lived", DocumentType.OWN)
    await service.update_title(author, created.document_id, "Renamed Once")
    await service.publish(author, created.document_id)

    await service.remove(author, created.document_id)

    with pytest.raises(DocumentNotFoundError):
        await service.get(author, created.document_id)
    assert await service.get_by_slug(None, "short-lived") is None
    assert await counts(service, admin) == (0, 0, 0)


async def test_remove_renamed_building_document_clears_redirects(service, author, admin, clock):
    created = await service.create(author, "First Name", DocumentType.OWN)
    clock.advance(minutes=1)
    await service.update_title(author, created.document_id, "Second Name")
    clock.advance(minutes=1)
    await service.update_title(author, created.document_id, "Third Name")
    redirects = SlugRedirectRepository(service.session)
    assert len(await redirects.list_for_document(created.document_id)) == 2
    assert await counts(service, admin) == (1, 0, 0)

    await service.remove(author, created.document_id)

    assert await redirects.list_for_document(created.document_id) == []
    assert await service.get_by_slug(None, "first-name") is None
    assert await service.get_by_slug(None, "second-name") is None
    assert await counts(service, admin) == (0, 0, 0)


async def test_remove_renamed_pending_document_clears_redirects(service, author, admin, clock):
    created = await service.create(author, "Pending One", DocumentType.OWN)
    clock.advance(minutes=1)
    await service.update_title(author, created.document_id, "Pending Two")
    clock.advance(minutes=1)
    await service.update_title(author, created.document_id, "Pending Three")
    await service.submit(author, created.document_id)
    assert await counts(service, admin) == (0, 1, 0)

    await service.remove(author, created.document_id)

    redirects = SlugRedirectRepository(service.session)
    assert await redirects.list_for_document(created.document_id) == []
    assert await service.get_by_slug(None, "pending-one") is None
    assert await counts(service, admin) == (0, 0, 0)


async def test_only_owner_can_remove(service, author, other_author):
    created = await service.create(author, "Protected", DocumentType.OWN)

    with pytest.raises(DocumentOwnershipError):
        await service.remove(other_author, created.document_id)


# ═══════════════════════════════════════════════════════════════════════════════
# READS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_unpublished_document_is_private(service, author, other_author):
    created = await service.create(author, "Draft", DocumentType.OWN)

    assert (await service.get(author, created.document_id)).id == created.document_id
    with pytest.raises(DocumentOwnershipError):
        await service.get(other_author, created.document_id)
    with pytest.raises(DocumentOwnershipError):
        await service.get_by_slug(None, created.slug)
    with pytest.raises(DocumentNotFoundError):
        await service.get_published(created.document_id)


async def test_list_for_author_filters_by_status(service, author, other_author, clock):
    draft = await service.create(author, "Draft", DocumentType.OWN)
    clock.advance(minutes=1)
    sent = await service.create(author, "Sent", DocumentType.OWN)
    await service.create(other_author, "Not Mine", DocumentType.OWN)
    await service.submit(author, sent.document_id)

    everything = await service.list_for_author(author)
    pending = await service.list_for_author(author, status=DocumentStatus.PENDING)

    assert [d.id for d in everything.items] == [sent.document_id, draft.document_id]
    assert everything.total == 2
    assert [d.id for d in pending.items] == [sent.document_id]


async def test_list_for_author_without_profile_is_empty(service, other_author):
    result = await service.list_for_author(other_author)

    assert result.items == []
    assert result.total == 0


async def test_admin_review_copy_is_anonymous(service, author, admin):
    created = await service.create(author, "For Review", DocumentType.OWN)
    await service.submit(author, created.document_id)

    copy = await service.get_for_admin_review(admin, created.document_id)
    queue = await service.list_pending_for_admin(admin)

    assert copy.title == "For Review"
    assert not hasattr(copy, "author_id")
    assert [d.id for d in queue.items] == [created.document_id]


async def test_admin_review_of_non_pending_is_none(service, author, admin):
    created = await service.create(author, "Still Building", DocumentType.OWN)

    assert await service.get_for_admin_review(admin, created.document_id) is None
