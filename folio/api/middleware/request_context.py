"""
Request Context Middleware

Binds a request id and the route to the structlog context for the
duration of each request, and clears it afterwards so values bound by
dependencies (user_id) never leak into the next request.
"""

from uuid import uuid4

from fastapi import FastAPI, Request

from folio.shared.core.logging import clear_log_context, log_context


def setup_request_context(app: FastAPI) -> None:
    """Register the request context middleware."""

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        clear_log_context()
        log_context(request_id=request_id, method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        finally:
            clear_log_context()
        response.headers["X-Request-ID"] = request_id
        return response
