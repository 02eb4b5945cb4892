"""
Error Handler Middleware

Global exception handling for the API.

Error Response Format:
======================
    {
        "error": {
            "code": "DOCUMENT_PENDING_REVIEW",
            "message": "Document is pending review",
            "details": {}
        }
    }

Exception Handling:
===================
1. FolioException subclasses → Use their status_code and to_dict()
2. Request/Pydantic validation errors → 400 VALIDATION_ERROR
3. Other exceptions → 500 with generic message (details hidden)

A 429 also carries a Retry-After header taken from the error details.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from folio.shared.core.exceptions import FolioException
from folio.shared.core.logging import logger


def _validation_response(errors: list) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": {"errors": jsonable_encoder(errors)},
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(FolioException)
    async def folio_exception_handler(
        request: Request,
        exc: FolioException,
    ) -> JSONResponse:
        logger.warning(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        headers = None
        retry_after = exc.details.get("retry_after_seconds")
        if exc.status_code == 429 and retry_after is not None:
            headers = {"Retry-After": str(retry_after)}
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Request body, path or query did not match the schema."""
        logger.warning("Validation error", errors=exc.errors(), path=request.url.path)
        return _validation_response(exc.errors())

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        logger.warning("Validation error", errors=exc.errors(), path=request.url.path)
        return _validation_response(exc.errors())

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Full error details are logged but not exposed to clients.
        """
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                }
            },
        )
