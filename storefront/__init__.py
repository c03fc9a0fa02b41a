"""
Storefront backend.

Product catalog, user accounts and token-based authentication
served as a single FastAPI application.
"""

__version__ = "0.1.0"
