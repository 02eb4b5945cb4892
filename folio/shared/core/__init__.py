"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from folio.shared.core.logging import logger, get_logger
    from folio.shared.core.exceptions import FolioException, DocumentNotFoundError

    logger.info("Document submitted", document_id=str(document.id))
"""

from folio.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from folio.shared.core.exceptions import (
    FolioException,
    AuthenticationError,
    AuthorizationError,
    AdminRequiredError,
    NotFoundError,
    DocumentError,
    DocumentNotFoundError,
    DocumentOwnershipError,
    DocumentAlreadyPublishedError,
    DocumentPendingReviewError,
    DocumentPublishedError,
    DocumentValidationError,
    DocumentInvalidStatusError,
    DocumentInvalidTitleError,
    DocumentEmptyError,
    DocumentSlugDeletionRequiredError,
    DocumentRateLimitError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "FolioException",
    "AuthenticationError",
    "AuthorizationError",
    "AdminRequiredError",
    "NotFoundError",
    "DocumentError",
    "DocumentNotFoundError",
    "DocumentOwnershipError",
    "DocumentAlreadyPublishedError",
    "DocumentPendingReviewError",
    "DocumentPublishedError",
    "DocumentValidationError",
    "DocumentInvalidStatusError",
    "DocumentInvalidTitleError",
    "DocumentEmptyError",
    "DocumentSlugDeletionRequiredError",
    "DocumentRateLimitError",
]
