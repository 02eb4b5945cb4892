"""
Document Lifecycle

Central transition table for document status. Every write asks this module
whether (current status, action) is allowed before touching any field, so
the rules live in one place instead of being repeated per mutation.

Transitions:
============
┌─────────┬───────────┬───────────┬──────────────────────────────────────────┐
│ Action  │ From      │ To        │ Preconditions                            │
├─────────┼───────────┼───────────┼──────────────────────────────────────────┤
│ edit    │ building  │ building  │                                          │
│ submit  │ building  │ pending   │ valid title, curated ⇒ curation          │
│ approve │ pending   │ published │ (admin, checked by the service)          │
│ reject  │ pending   │ building  │ (reason checked by the service)          │
│ publish │ building  │ published │ valid title, curated ⇒ curation          │
│ remove  │ any       │ (deleted) │ (ownership checked by the service)       │
└─────────┴───────────┴───────────┴──────────────────────────────────────────┘

Refusals carry a status-specific error so clients can tell "already
published" from "under review" from "wrong state for this admin action".

Usage:
======
    from folio.shared.services.document_lifecycle import DocumentAction, check_transition

    next_status = check_transition(document, DocumentAction.SUBMIT)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from folio.shared.core.exceptions import (
    DocumentAlreadyPublishedError,
    DocumentError,
    DocumentInvalidStatusError,
    DocumentPendingReviewError,
    DocumentPublishedError,
    DocumentValidationError,
)
from folio.shared.models.document import Document
from folio.shared.models.enums import DocumentStatus, DocumentType
from folio.shared.utils.content import is_valid_title


class DocumentAction(str, Enum):
    """Everything that can be done to an existing document."""

    EDIT = "edit"
    SUBMIT = "submit"
    APPROVE = "approve"
    REJECT = "reject"
    PUBLISH = "publish"
    REMOVE = "remove"


# ═══════════════════════════════════════════════════════════════════════════════
# PRECONDITIONS
# ═══════════════════════════════════════════════════════════════════════════════
#
# Each precondition returns an error message, or None when satisfied.

Precondition = Callable[[Document], Optional[str]]


def _has_valid_title(document: Document) -> Optional[str]:
    if not is_valid_title(document.title):
        return "Document must have a title"
    return None


def _curated_has_curation(document: Document) -> Optional[str]:
    if document.type == DocumentType.CURATED and not document.curation:
        return "Curated documents must have curation data"
    return None


READY_FOR_READERS: tuple[Precondition, ...] = (_has_valid_title, _curated_has_curation)


# ═══════════════════════════════════════════════════════════════════════════════
# TRANSITION TABLE
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Transition:
    # None for remove: the document stops existing
    next_status: Optional[DocumentStatus]
    preconditions: tuple[Precondition, ...] = field(default_factory=tuple)


_B, _P, _X = DocumentStatus.BUILDING, DocumentStatus.PENDING, DocumentStatus.PUBLISHED

TRANSITIONS: dict[tuple[DocumentStatus, DocumentAction], Transition] = {
    (_B, DocumentAction.EDIT): Transition(_B),
    (_B, DocumentAction.SUBMIT): Transition(_P, READY_FOR_READERS),
    (_B, DocumentAction.PUBLISH): Transition(_X, READY_FOR_READERS),
    (_P, DocumentAction.APPROVE): Transition(_X),
    (_P, DocumentAction.REJECT): Transition(_B),
    (_B, DocumentAction.REMOVE): Transition(None),
    (_P, DocumentAction.REMOVE): Transition(None),
    (_X, DocumentAction.REMOVE): Transition(None),
}

REFUSALS: dict[tuple[DocumentStatus, DocumentAction], type[DocumentError]] = {
    (_P, DocumentAction.EDIT): DocumentPendingReviewError,
    (_X, DocumentAction.EDIT): DocumentPublishedError,
    (_P, DocumentAction.SUBMIT): DocumentInvalidStatusError,
    (_X, DocumentAction.SUBMIT): DocumentAlreadyPublishedError,
    (_P, DocumentAction.PUBLISH): DocumentPendingReviewError,
    (_X, DocumentAction.PUBLISH): DocumentAlreadyPublishedError,
    (_B, DocumentAction.APPROVE): DocumentInvalidStatusError,
    (_X, DocumentAction.APPROVE): DocumentInvalidStatusError,
    (_B, DocumentAction.REJECT): DocumentInvalidStatusError,
    (_X, DocumentAction.REJECT): DocumentInvalidStatusError,
}

_REFUSAL_MESSAGES: dict[tuple[DocumentStatus, DocumentAction], str] = {
    (_P, DocumentAction.SUBMIT): "Document is already pending review",
    (_P, DocumentAction.PUBLISH): "Document is pending review",
    (_B, DocumentAction.APPROVE): "Only pending documents can be approved",
    (_X, DocumentAction.APPROVE): "Only pending documents can be approved",
    (_B, DocumentAction.REJECT): "Only pending documents can be rejected",
    (_X, DocumentAction.REJECT): "Only pending documents can be rejected",
}


def can_transition(status: DocumentStatus, action: DocumentAction) -> bool:
    return (status, action) in TRANSITIONS


def check_transition(document: Document, action: DocumentAction) -> Optional[DocumentStatus]:
    """
    Validate an action against the document's current status.

    Returns:
        The status the document moves to (None for remove)

    Raises:
        DocumentError subclass naming why the action is refused, or
        DocumentValidationError when a precondition fails
    """
    key = (document.status, action)
    transition = TRANSITIONS.get(key)
    if transition is None:
        error_cls = REFUSALS.get(key, DocumentInvalidStatusError)
        raise error_cls(_REFUSAL_MESSAGES.get(key))

    for precondition in transition.preconditions:
        problem = precondition(document)
        if problem:
            raise DocumentValidationError(f"{problem} to be {_past_tense(action)}")

    return transition.next_status


def _past_tense(action: DocumentAction) -> str:
    return {"submit": "submitted", "publish": "published"}.get(action.value, action.value)
