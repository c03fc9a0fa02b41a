"""
Authentication models for the storefront.
"""
from sqlalchemy import Column, String, Boolean, DateTime

from storefront.base_service import Base, utcnow


class User(Base):
    """Registered customer or administrator."""
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email}>"
