"""
Product catalog service for the storefront.

This package provides:
- Filterable product listing and lookup
- Product create, update and delete for administrators
"""
