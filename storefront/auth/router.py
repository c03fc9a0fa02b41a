"""
Authentication router.

This module provides FastAPI router for authentication endpoints:
- User registration and login
- Current user profile
- Token refresh
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from storefront.base_service import BaseService
from storefront.errors import AuthenticationError, NotFoundError, StorefrontError, ValidationError
from storefront.auth.jwt import TokenData, TokenService
from storefront.auth.middleware import get_current_user, get_token_service, get_user_service
from storefront.auth.users import TokenRefresh, UserCreate, UserLogin, UserService

# Create router
router = APIRouter(tags=["auth"])

# Create service instance
base_service = BaseService("auth")


@router.post("/register")
async def register_user(
    user_data: UserCreate,
    users: UserService = Depends(get_user_service),
):
    """
    Register a new customer account and return a session token.
    """
    try:
        user_info, token = await users.register_user(user_data.email, user_data.password)
    except StorefrontError as e:
        base_service.log_event("user.register.failed", {
            "email": user_data.email,
            "reason": e.message
        })
        raise

    base_service.log_event("user.registered", {
        "id": user_info.id,
        "email": user_info.email
    })

    return base_service.api_response(
        data={
            "userId": user_info.id,
            "email": user_info.email,
            "token": token
        },
        message="User registered successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.post("/login")
async def login(
    login_data: UserLogin,
    users: UserService = Depends(get_user_service),
):
    """
    Authenticate with email and password.
    """
    try:
        user_info, token = await users.authenticate_user(login_data.email, login_data.password)
    except StorefrontError as e:
        # Log failed login attempt
        base_service.log_event("user.login.failed", {
            "email": login_data.email,
            "reason": e.message
        })
        raise

    base_service.log_event("user.login", {
        "id": user_info.id,
        "email": user_info.email
    })

    return base_service.api_response(
        data={
            "userId": user_info.id,
            "email": user_info.email,
            "isAdmin": user_info.is_admin,
            "token": token
        },
        message="Login successful",
    )


@router.get("/me")
async def get_current_user_info(
    token_data: TokenData = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    """
    Get information about the current authenticated user.
    """
    user_info = await users.get_user_by_id(token_data.user_id)

    if user_info is None:
        raise NotFoundError("User not found")

    return base_service.api_response(
        data={
            "userId": user_info.id,
            "email": user_info.email,
            "isAdmin": user_info.is_admin
        }
    )


@router.post("/refresh")
async def refresh_token(
    body: TokenRefresh,
    tokens: TokenService = Depends(get_token_service),
):
    """
    Exchange a still-valid token for one with a fresh expiry.
    """
    if not body.token:
        raise ValidationError("Token is required")

    new_token = tokens.refresh_token(body.token)
    if new_token is None:
        raise AuthenticationError("Invalid or expired token")

    token_data = tokens.verify_token(new_token)
    return base_service.api_response(
        data={
            "token": new_token,
            "userId": token_data.user_id,
            "email": token_data.email,
            "isAdmin": token_data.is_admin
        },
        message="Token refreshed successfully",
    )


@router.get("/ping")
async def ping():
    """Liveness check for the auth routes."""
    return base_service.api_response(
        data={"timestamp": datetime.now(timezone.utc).isoformat()},
        message="Auth service is alive",
    )
