#!/usr/bin/env python3
"""
Seed the storefront database with sample suits and two accounts.

Existing products and users are removed first.

    python -m storefront.seed
"""
import asyncio
import sys

from sqlalchemy import delete

from storefront.base_service import BaseService, Database
from storefront.config import get_settings
from storefront.auth.jwt import TokenService
from storefront.auth.models import User
from storefront.auth.users import UserService
from storefront.catalog.models import Product
from storefront.catalog.products import ProductCreate, ProductService

base_service = BaseService("seed")

SAMPLE_PRODUCTS = [
    {
        "name": "Classic Black Formal Suit",
        "description": "Elegant black suit perfect for formal occasions",
        "price": 299.99,
        "style": "formal",
        "sizes": ["S", "M", "L", "XL"],
        "image_url": "/images/deep-blue-suit.webp",
        "stock": 15,
    },
    {
        "name": "Navy Blue Wedding Suit",
        "description": "Premium wedding suit with perfect tailoring",
        "price": 449.99,
        "style": "wedding",
        "sizes": ["S", "M", "L", "XL", "XXL"],
        "image_url": "/images/navy-blue-suit.webp",
        "stock": 10,
    },
    {
        "name": "Charcoal Casual Suit",
        "description": "Comfortable casual suit for everyday wear",
        "price": 199.99,
        "style": "casual",
        "sizes": ["XS", "S", "M", "L", "XL"],
        "image_url": "/images/deep-blue-suit.webp",
        "stock": 20,
    },
    {
        "name": "Burgundy Formal Suit",
        "description": "Deep burgundy suit for special events",
        "price": 329.99,
        "style": "formal",
        "sizes": ["S", "M", "L"],
        "image_url": "/images/burgundy-suit.webp",
        "stock": 8,
    },
    {
        "name": "Light Gray Casual Suit",
        "description": "Light and airy casual suit perfect for summer",
        "price": 189.99,
        "style": "casual",
        "sizes": ["S", "M", "L", "XL"],
        "image_url": "/images/light-gray-suit.webp",
        "stock": 12,
    },
    {
        "name": "White Wedding Suit",
        "description": "Pristine white suit for grooms and formal events",
        "price": 499.99,
        "style": "wedding",
        "sizes": ["S", "M", "L", "XL"],
        "image_url": "/images/white-wedding-suit.jpg",
        "stock": 6,
    },
    {
        "name": "Brown Tweed Casual Suit",
        "description": "Classic tweed suit with rustic charm",
        "price": 219.99,
        "style": "casual",
        "sizes": ["S", "M", "L"],
        "image_url": "/images/brown-tweed-suit.webp",
        "stock": 9,
    },
    {
        "name": "Deep Blue Formal Suit",
        "description": "Rich navy formal suit for business and events",
        "price": 349.99,
        "style": "formal",
        "sizes": ["XS", "S", "M", "L", "XL", "XXL"],
        "image_url": "/images/deep-blue-suit.webp",
        "stock": 16,
    },
    {
        "name": "Rose Gold Wedding Suit",
        "description": "Stunning rose gold suit for modern weddings",
        "price": 459.99,
        "style": "wedding",
        "sizes": ["S", "M", "L", "XL"],
        "image_url": "/images/rose-gold-suit.webp",
        "stock": 7,
    },
    {
        "name": "Olive Green Casual Suit",
        "description": "Trendy olive green suit for a modern look",
        "price": 209.99,
        "style": "casual",
        "sizes": ["S", "M", "L", "XL"],
        "image_url": "/images/olive-green-suit.webp",
        "stock": 11,
    },
]

SAMPLE_USERS = [
    ("admin@example.com", "AdminPass123", True),
    ("customer@example.com", "CustomerPass123", False),
]


async def seed(database: Database, token_service: TokenService):
    """Replace all products and users with the sample data."""
    await database.create_tables()

    async with database.session() as db:
        await db.execute(delete(Product))
        await db.execute(delete(User))
        await db.commit()

    products = ProductService(database)
    for item in SAMPLE_PRODUCTS:
        await products.create_product(ProductCreate(**item))

    users = UserService(database, token_service)
    for email, password, is_admin in SAMPLE_USERS:
        await users.register_user(email, password, is_admin=is_admin)

    base_service.log_event("database.seeded", {
        "products": len(SAMPLE_PRODUCTS),
        "users": [email for email, _, _ in SAMPLE_USERS]
    })


async def main():
    settings = get_settings()
    database = Database(settings.database_url)
    token_service = TokenService(
        settings.jwt_secret_key,
        expire_seconds=settings.access_token_expire_seconds,
        algorithm=settings.jwt_algorithm,
    )
    try:
        await seed(database, token_service)
    finally:
        await database.dispose()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except Exception as e:
        base_service.log_error(e, context="Database seed")
        sys.exit(1)
