"""
User management service.

This module provides functionality for:
- User registration
- User authentication
- User lookup for authenticated requests
"""
import asyncio
from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import IntegrityError
from sqlalchemy.future import select

from storefront.base_service import Database, utcnow
from storefront.errors import AuthenticationError, ConflictError, ValidationError
from storefront.auth.jwt import TokenService
from storefront.auth.models import User
from storefront.auth.passwords import (
    generate_user_id, hash_password, validate_email, validate_password, verify_password
)

INVALID_CREDENTIALS = "Invalid email or password"


# Request bodies keep every field optional so that missing values are
# reported as validation errors by the service rather than by the framework.
class UserCreate(BaseModel):
    """Model for user registration."""
    email: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    """Model for user login."""
    email: Optional[str] = None
    password: Optional[str] = None


class TokenRefresh(BaseModel):
    """Model for token refresh."""
    token: Optional[str] = None


class UserOut(BaseModel):
    """Model for user information returned to clients."""
    id: str
    email: str
    is_admin: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserService:
    """
    Service for user management operations.
    """
    def __init__(self, database: Database, token_service: TokenService):
        self.database = database
        self.token_service = token_service

    async def register_user(
        self,
        email: Optional[str],
        password: Optional[str],
        is_admin: bool = False,
    ) -> Tuple[UserOut, str]:
        """
        Register a new user.

        Args:
            email: Email address, stored exactly as given
            password: Plaintext password checked against the policy
            is_admin: Grant catalog management rights

        Returns:
            Tuple of user information and session token

        Raises:
            ValidationError: If a field is missing or fails validation
            ConflictError: If the email is already registered
        """
        if not email or not password:
            raise ValidationError("Email and password are required")
        if not validate_email(email):
            raise ValidationError("Invalid email format")
        check = validate_password(password)
        if not check.valid:
            raise ValidationError(", ".join(check.errors))

        async with self.database.session() as db:
            result = await db.execute(select(User).where(User.email == email))
            if result.scalar_one_or_none() is not None:
                raise ConflictError("Email already registered")

            hashed = await asyncio.to_thread(hash_password, password)
            now = utcnow()
            new_user = User(
                id=generate_user_id(),
                email=email,
                password_hash=hashed,
                is_admin=is_admin,
                created_at=now,
                updated_at=now,
            )
            db.add(new_user)
            try:
                await db.commit()
            except IntegrityError:
                # Lost a race with a concurrent registration
                await db.rollback()
                raise ConflictError("Email already registered")

        token = self.token_service.generate_token(new_user.id, new_user.email, new_user.is_admin)
        return UserOut.model_validate(new_user), token

    async def authenticate_user(
        self,
        email: Optional[str],
        password: Optional[str],
    ) -> Tuple[UserOut, str]:
        """
        Authenticate a user and return a token.

        Unknown emails and wrong passwords fail identically.

        Raises:
            ValidationError: If email or password is missing
            AuthenticationError: If the credentials do not match
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        async with self.database.session() as db:
            result = await db.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()

        if user is None:
            raise AuthenticationError(INVALID_CREDENTIALS)
        matches = await asyncio.to_thread(verify_password, password, user.password_hash)
        if not matches:
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = self.token_service.generate_token(user.id, user.email, user.is_admin)
        return UserOut.model_validate(user), token

    async def get_user_by_id(self, user_id: str) -> Optional[UserOut]:
        """
        Get user by ID.

        Returns:
            User information or None if not found
        """
        async with self.database.session() as db:
            result = await db.execute(select(User).where(User.id == user_id))
            user = result.scalar_one_or_none()

        if user is None:
            return None
        return UserOut.model_validate(user)
