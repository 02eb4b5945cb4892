"""
Authentication Service

Turns identity provider tokens into a Principal.

Folio does not register or log users in; the provider does. A request is
authenticated when its bearer JWT verifies against SECRET_KEY and names a
user_id. A principal is an admin when its email is on ADMIN_EMAILS.

Usage:
======
    from folio.shared.services.auth_service import AuthService

    principal = AuthService().principal_from_token(token)
    AuthService.require_admin(principal)
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from folio.config.settings import settings
from folio.shared.core.exceptions import AdminRequiredError, AuthenticationError
from folio.shared.utils.security import SecurityUtils


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""

    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    is_admin: bool = False


class AuthService:
    """
    Service for resolving callers.

    Attributes:
        secret_key: Key the provider signs tokens with
        admin_emails: Lowercased admin allow-list
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        admin_emails: Optional[Iterable[str]] = None,
        algorithm: Optional[str] = None,
    ) -> None:
        self.secret_key = secret_key or settings.SECRET_KEY
        self.algorithm = algorithm or settings.JWT_ALGORITHM
        self.admin_emails = (
            {email.strip().lower() for email in admin_emails}
            if admin_emails is not None
            else settings.admin_emails
        )

    def principal_from_token(self, token: str) -> Principal:
        """
        Verify a bearer token and build the principal it names.

        Raises:
            AuthenticationError: If the token is invalid, expired, or has no user_id
        """
        try:
            payload = SecurityUtils.decode_access_token(token, self.secret_key, self.algorithm)
        except ValueError as e:
            raise AuthenticationError(str(e)) from e
        return self.principal_from_claims(payload)

    def principal_from_claims(self, claims: dict[str, Any]) -> Principal:
        user_id = claims.get("user_id")
        if not user_id:
            raise AuthenticationError("Invalid token payload")

        email = claims.get("email")
        return Principal(
            user_id=str(user_id),
            email=email,
            name=claims.get("name"),
            is_admin=bool(email) and email.strip().lower() in self.admin_emails,
        )

    @staticmethod
    def require_admin(principal: Principal) -> Principal:
        if not principal.is_admin:
            raise AdminRequiredError()
        return principal
