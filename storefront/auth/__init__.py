"""
Authentication service for the storefront.

This package provides:
- Password hashing and credential policy checks
- JWT session tokens
- User registration and login
- Admin-only route protection
"""
