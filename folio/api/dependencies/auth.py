"""
Authentication Dependencies

FastAPI dependencies that resolve the caller from the bearer token.

Dependency Hierarchy:
=====================
    get_bearer_token()      ← Raw token from the Authorization header (or None)
           │
           ├──► get_optional_user()   ← Principal or None (public reads)
           │
           └──► get_current_user()    ← Principal, 401 without a valid token
                       │
                       ▼
                get_current_admin()   ← Principal, 403 unless on ADMIN_EMAILS

Type Aliases:
=============
    CurrentUser   - Authenticated principal
    OptionalUser  - Principal when a token was sent, else None
    CurrentAdmin  - Authenticated admin principal

Usage:
======
    from folio.api.dependencies.auth import CurrentUser

    @router.post("/{document_id}/submit")
    async def submit(document_id: UUID, current_user: CurrentUser):
        ...
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from folio.shared.core.exceptions import AuthenticationError
from folio.shared.core.logging import log_context
from folio.shared.services.auth_service import AuthService, Principal


# auto_error=False: missing credentials surface as our 401 error body
security = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> Optional[str]:
    return credentials.credentials if credentials else None


async def get_optional_user(
    token: Annotated[Optional[str], Depends(get_bearer_token)],
) -> Optional[Principal]:
    """
    Principal for requests that may be anonymous.

    A token that is present but invalid is still rejected.
    """
    if token is None:
        return None
    principal = AuthService().principal_from_token(token)
    log_context(user_id=principal.user_id)
    return principal


async def get_current_user(
    principal: Annotated[Optional[Principal], Depends(get_optional_user)],
) -> Principal:
    """
    Authenticated principal.

    Raises:
        AuthenticationError: If no token was sent
    """
    if principal is None:
        raise AuthenticationError("Authorization header required")
    return principal


async def get_current_admin(
    principal: Annotated[Principal, Depends(get_current_user)],
) -> Principal:
    """
    Authenticated admin principal.

    Raises:
        AdminRequiredError: If the caller is not on ADMIN_EMAILS
    """
    return AuthService.require_admin(principal)


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

CurrentUser = Annotated[Principal, Depends(get_current_user)]
OptionalUser = Annotated[Optional[Principal], Depends(get_optional_user)]
CurrentAdmin = Annotated[Principal, Depends(get_current_admin)]
