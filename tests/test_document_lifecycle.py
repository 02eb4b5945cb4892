"""Tests for the status transition table."""

import pytest

from folio.shared.core.exceptions import (
    DocumentAlreadyPublishedError,
    DocumentInvalidStatusError,
    DocumentPendingReviewError,
    DocumentPublishedError,
    DocumentValidationError,
)
from folio.shared.models import Document, DocumentStatus, DocumentType
from folio.shared.services.document_lifecycle import DocumentAction, can_transition, check_transition


B, P, X = DocumentStatus.BUILDING, DocumentStatus.PENDING, DocumentStatus.PUBLISHED


def make_document(status=B, title="A Title", type=DocumentType.OWN, curation=None):
    return Document(title=title, slug="a-title", status=status, type=type, curation=curation)


@pytest.mark.parametrize(
    "status, action, expected",
    [
        (B, DocumentAction.EDIT, B),
        (B, DocumentAction.SUBMIT, P),
        (B, DocumentAction.PUBLISH, X),
        (P, DocumentAction.APPROVE, X),
        (P, DocumentAction.REJECT, B),
        (B, DocumentAction.REMOVE, None),
        (P, DocumentAction.REMOVE, None),
        (X, DocumentAction.REMOVE, None),
    ],
)
def test_allowed_transitions(status, action, expected):
    assert can_transition(status, action)
    assert check_transition(make_document(status), action) == expected


@pytest.mark.parametrize(
    "status, action, error",
    [
        (P, DocumentAction.EDIT, DocumentPendingReviewError),
        (X, DocumentAction.EDIT, DocumentPublishedError),
        (P, DocumentAction.SUBMIT, DocumentInvalidStatusError),
        (X, DocumentAction.SUBMIT, DocumentAlreadyPublishedError),
        (P, DocumentAction.PUBLISH, DocumentPendingReviewError),
        (X, DocumentAction.PUBLISH, DocumentAlreadyPublishedError),
        (B, DocumentAction.APPROVE, DocumentInvalidStatusError),
        (X, DocumentAction.APPROVE, DocumentInvalidStatusError),
        (B, DocumentAction.REJECT, DocumentInvalidStatusError),
        (X, DocumentAction.REJECT, DocumentInvalidStatusError),
    ],
)
def test_refused_transitions(status, action, error):
    assert not can_transition(status, action)
    with pytest.raises(error):
        check_transition(make_document(status), action)


@pytest.mark.parametrize("action", [DocumentAction.SUBMIT, DocumentAction.PUBLISH])
def test_placeholder_title_blocks_submit_and_publish(action):
    with pytest.raises(DocumentValidationError, match="must have a title"):
        check_transition(make_document(title="Untitled"), action)


def test_curated_requires_curation():
    document = make_document(type=DocumentType.CURATED)
    with pytest.raises(DocumentValidationError, match="curation"):
        check_transition(document, DocumentAction.SUBMIT)

    document.curation = {"source_url": "https://example.com", "source_title": "Src", "spin": "Take"}
    assert check_transition(document, DocumentAction.SUBMIT) == P


def test_edit_has_no_title_precondition():
    assert check_transition(make_document(title=""), DocumentAction.EDIT) == B
