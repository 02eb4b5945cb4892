"""
Security Utilities

JWT handling for identities issued by the auth provider.

Folio never stores credentials. Requests carry a bearer JWT signed with
SECRET_KEY; its claims identify the caller:

    {"user_id": "user_2b7Qx...", "email": "ada@example.com", "name": "Ada"}

Usage:
======
    from folio.shared.utils.security import SecurityUtils

    payload = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)

    # Tests and local tooling mint tokens the same way the provider does
    token = SecurityUtils.create_access_token(
        data={"user_id": "u-1", "email": "ada@example.com"},
        secret_key=settings.SECRET_KEY,
    )
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt


class SecurityUtils:
    """JWT token creation and validation."""

    @staticmethod
    def create_access_token(
        data: dict,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        """
        Create a signed JWT.

        Args:
            data: Claims to encode (user_id, email, name)
            secret_key: Secret key for signing
            expires_delta: Token lifetime (default: 7 days)
            algorithm: JWT algorithm (default: HS256)

        Returns:
            Encoded JWT token string
        """
        to_encode = data.copy()
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(days=7))
        to_encode.update({"exp": expire, "iat": now})
        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> dict:
        """
        Decode and verify a JWT.

        Raises:
            ValueError: If token is expired or invalid
        """
        try:
            return jwt.decode(token, secret_key, algorithms=[algorithm])
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")
