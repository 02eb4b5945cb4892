"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    FolioException (base)
       │
       ├── AuthenticationError (401)           ← Missing or invalid token
       ├── AuthorizationError (403)            ← Access denied
       │      └── AdminRequiredError           ← Admin-only operation
       ├── NotFoundError (404)                 ← Resource not found
       │
       └── DocumentError                       ← Document lifecycle failures
              ├── DocumentNotFoundError (404)
              ├── DocumentOwnershipError (403)
              ├── DocumentAlreadyPublishedError (400)
              ├── DocumentPendingReviewError (400)
              ├── DocumentPublishedError (400)
              ├── DocumentValidationError (400)
              ├── DocumentInvalidStatusError (400)
              ├── DocumentInvalidTitleError (400)
              ├── DocumentEmptyError (400)
              ├── DocumentSlugDeletionRequiredError (409)
              └── DocumentRateLimitError (429)

Usage:
======
    from folio.shared.core.exceptions import DocumentNotFoundError

    raise DocumentNotFoundError(document_id)
    # Results in: {"error": {"code": "DOCUMENT_NOT_FOUND", "message": "Document not found"}}

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and converted to JSON:
    {
        "error": {
            "code": "DOCUMENT_RATE_LIMIT",
            "message": "Rate limit exceeded: ...",
            "details": {"retry_after_seconds": 3600}
        }
    }
"""

from typing import Any, Optional


class FolioException(Exception):
    """
    Base exception for all Folio application errors.

    All custom exceptions inherit from this class, providing:
    - HTTP status code mapping
    - Error code for programmatic handling
    - Optional details dictionary
    - Consistent JSON serialization

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(FolioException):
    """
    Authentication failed error (401 Unauthorized).

    Raised when:
    - Missing or invalid credentials
    - Token expired or malformed
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class AuthorizationError(FolioException):
    """
    Authorization failed error (403 Forbidden).

    Raised when user is authenticated but lacks permission.
    """

    def __init__(
        self,
        message: str = "Access denied",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "AUTHORIZATION_ERROR",
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code=error_code,
            details=details,
        )


class AdminRequiredError(AuthorizationError):
    """Caller is authenticated but not on the admin allow-list."""

    def __init__(self) -> None:
        super().__init__(message="Admin access required", error_code="ADMIN_REQUIRED")


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(FolioException):
    """
    Resource not found error (404 Not Found).

    Example:
        raise NotFoundError("Author", author_id)
        # Message: "Author with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# DOCUMENT ERRORS
# ═══════════════════════════════════════════════════════════════════════════════
#
# One class per failure kind. The error_code is the stable contract for
# clients; messages are for humans and may change.


class DocumentError(FolioException):
    """Base class for document lifecycle errors (400 unless overridden)."""

    error_code = "DOCUMENT_ERROR"
    status_code = 400
    default_message = "Document operation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message or self.default_message,
            status_code=type(self).status_code,
            error_code=type(self).error_code,
            details=details,
        )


class DocumentNotFoundError(DocumentError):
    error_code = "DOCUMENT_NOT_FOUND"
    status_code = 404
    default_message = "Document not found"

    def __init__(self, document_id: Optional[Any] = None) -> None:
        details = {"document_id": str(document_id)} if document_id else None
        super().__init__(details=details)


class DocumentOwnershipError(DocumentError):
    error_code = "DOCUMENT_OWNERSHIP"
    status_code = 403
    default_message = "You don't own this document"


class DocumentAlreadyPublishedError(DocumentError):
    error_code = "DOCUMENT_ALREADY_PUBLISHED"
    default_message = "Document is already published"


class DocumentPendingReviewError(DocumentError):
    error_code = "DOCUMENT_PENDING_REVIEW"
    default_message = "Cannot edit a document that is pending review"


class DocumentPublishedError(DocumentError):
    error_code = "DOCUMENT_PUBLISHED"
    default_message = "Cannot edit a published document"


class DocumentValidationError(DocumentError):
    error_code = "DOCUMENT_VALIDATION"
    default_message = "Document validation failed"


class DocumentInvalidStatusError(DocumentError):
    error_code = "DOCUMENT_INVALID_STATUS"
    default_message = "Invalid document status for this operation"


class DocumentInvalidTitleError(DocumentError):
    error_code = "DOCUMENT_INVALID_TITLE"
    default_message = "Document title cannot be empty or 'Untitled'"


class DocumentEmptyError(DocumentError):
    error_code = "DOCUMENT_EMPTY"
    default_message = "Document has no title and no content"


class DocumentSlugDeletionRequiredError(DocumentError):
    """
    Renaming would evict the oldest retired slug.

    The client re-sends the rename with confirm_slug_deletion=True after
    showing the user which old link stops working.
    """

    error_code = "DOCUMENT_SLUG_DELETION_REQUIRED"
    status_code = 409

    def __init__(self, slug: str) -> None:
        super().__init__(
            message=(
                f"Changing the title will delete the old link /article/{slug} permanently; "
                "confirm the slug deletion to continue"
            ),
            details={"slug": slug},
        )


class DocumentRateLimitError(DocumentError):
    """
    Submission rate limit exceeded (429 Too Many Requests).

    Includes retry_after hint for clients.
    """

    error_code = "DOCUMENT_RATE_LIMIT"
    status_code = 429

    def __init__(self, limit: int, window_hours: int, retry_after: Optional[int] = None) -> None:
        details: dict[str, Any] = {"limit": limit, "window_hours": window_hours}
        if retry_after is not None:
            details["retry_after_seconds"] = retry_after
        super().__init__(
            message=(
                f"Rate limit exceeded: You can only submit a document {limit} times "
                f"per {window_hours} hours"
            ),
            details=details,
        )
