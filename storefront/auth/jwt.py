"""
JWT token handling for authentication.

This module provides functionality for:
- Creating signed session tokens
- Validating session tokens
- Refreshing session tokens

Tokens are never revoked server-side: a token stays valid until its
expiry, so the TTL is the only invalidation mechanism.
"""
import time
from typing import Optional

import jwt
from jwt.exceptions import PyJWTError
from pydantic import BaseModel, ValidationError as PydanticValidationError

DEFAULT_ALGORITHM = "HS256"
DEFAULT_EXPIRE_SECONDS = 3600


class TokenData(BaseModel):
    """Identity carried by a verified token."""
    user_id: str
    email: str
    is_admin: bool
    exp: int


class TokenService:
    """
    Issues and verifies session tokens.

    The signing secret and TTL are fixed for the lifetime of the service.
    """
    def __init__(
        self,
        secret_key: str,
        expire_seconds: int = DEFAULT_EXPIRE_SECONDS,
        algorithm: str = DEFAULT_ALGORITHM,
    ):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self.secret_key = secret_key
        self.expire_seconds = expire_seconds
        self.algorithm = algorithm

    def generate_token(self, user_id: str, email: str, is_admin: bool) -> str:
        """
        Create a signed token for a user.

        Args:
            user_id: User's ID
            email: User's email
            is_admin: Whether the user may manage the catalog

        Returns:
            Encoded JWT string expiring expire_seconds from now
        """
        now = int(time.time())
        payload = {
            "sub": user_id,
            "email": email,
            "is_admin": bool(is_admin),
            "iat": now,
            "exp": now + self.expire_seconds,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Optional[TokenData]:
        """
        Verify a token and return its claims.

        Args:
            token: JWT token string

        Returns:
            TokenData if valid, None for a bad signature, malformed
            token, missing claims or an expired token
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
            return TokenData(
                user_id=payload["sub"],
                email=payload["email"],
                is_admin=payload["is_admin"],
                exp=payload["exp"],
            )
        except PyJWTError:
            return None
        except (KeyError, TypeError, PydanticValidationError):
            return None

    def refresh_token(self, token: str) -> Optional[str]:
        """
        Re-issue a still-valid token with a fresh expiry.

        Returns:
            New token carrying the same claims, or None if token is invalid
        """
        token_data = self.verify_token(token)
        if token_data is None:
            return None
        return self.generate_token(
            user_id=token_data.user_id,
            email=token_data.email,
            is_admin=token_data.is_admin,
        )
