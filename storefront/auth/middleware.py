"""
Authentication dependencies.

This module provides FastAPI dependencies for:
- Resolving the caller identity from a bearer token
- Admin-only access control

Authorization happens here, before a route calls into a service;
the services themselves trust their caller.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.errors import AuthenticationError, AuthorizationError
from storefront.auth.jwt import TokenData, TokenService
from storefront.auth.users import UserService

# auto_error=False so a missing header is reported as 401, not 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
) -> TokenData:
    """
    FastAPI dependency to get the current authenticated user from token.

    Raises:
        AuthenticationError: If the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")

    token_data = token_service.verify_token(credentials.credentials)
    if token_data is None:
        raise AuthenticationError("Invalid or expired token")
    return token_data


class RBACMiddleware:
    """
    Role-Based Access Control dependencies.
    """

    @staticmethod
    def is_admin():
        """
        Dependency requiring the admin claim on a verified token.

        Returns:
            Dependency function
        """
        async def verify_admin(token_data: TokenData = Depends(get_current_user)) -> TokenData:
            if not token_data.is_admin:
                raise AuthorizationError("Admin access required")
            return token_data

        return verify_admin


require_admin = RBACMiddleware.is_admin()
