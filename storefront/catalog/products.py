"""
Catalog query service.

This module provides functionality for:
- Listing products with optional, AND-combined filters
- Looking up a single product
- Creating, partially updating and deleting products

The service performs no authorization of its own; routes that mutate
the catalog must check the caller first.
"""
import json
import math
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy import delete, or_
from sqlalchemy.future import select

from storefront.base_service import Database, utcnow
from storefront.errors import ValidationError
from storefront.catalog.models import DEFAULT_STOCK, PRODUCT_ID_PREFIX, Product

REQUIRED_FIELDS = ("name", "price", "style", "sizes")
NOT_NULL_FIELDS = REQUIRED_FIELDS + ("stock",)

SizesInput = Union[str, List[str]]


class ProductFilters(BaseModel):
    """Optional listing filters. Unset filters match everything."""
    style: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    search: Optional[str] = None
    size: Optional[str] = None


class ProductCreate(BaseModel):
    """Model for creating a product."""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    style: Optional[str] = None
    sizes: Optional[SizesInput] = None
    image_url: Optional[str] = None
    stock: Optional[int] = None


class ProductPatch(BaseModel):
    """
    Model for a partial product update.

    Only fields present in the request replace stored values. An explicit
    null clears description or image_url; it is rejected for any other field.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    style: Optional[str] = None
    sizes: Optional[SizesInput] = None
    image_url: Optional[str] = None
    stock: Optional[int] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ProductOut(BaseModel):
    """Model for product information returned to clients."""
    id: str
    name: str
    description: Optional[str] = None
    price: float
    style: str
    sizes: List[str]
    image_url: Optional[str] = None
    stock: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("sizes", mode="before")
    @classmethod
    def decode_sizes(cls, v):
        if isinstance(v, str):
            return json.loads(v)
        return v


def generate_product_id() -> str:
    return f"{PRODUCT_ID_PREFIX}{uuid.uuid4()}"


def normalize_sizes(sizes: SizesInput) -> str:
    """
    Canonical stored form of a size list: a compact JSON array of strings.

    Accepts a list of labels, a JSON array string, or a comma-separated
    string. Order is preserved. Labels from a list or JSON array are kept
    exactly as given; only the comma-separated form is trimmed, with empty
    pieces dropped.
    """
    if isinstance(sizes, str):
        text = sizes.strip()
        if text.startswith("["):
            try:
                sizes = json.loads(text)
            except json.JSONDecodeError:
                raise ValidationError("sizes must be a list of strings")
        else:
            sizes = [s.strip() for s in text.split(",") if s.strip()]

    if not isinstance(sizes, (list, tuple)) or not all(isinstance(s, str) for s in sizes):
        raise ValidationError("sizes must be a list of strings")
    if not sizes:
        raise ValidationError("sizes must contain at least one size")
    if any(not s.strip() for s in sizes):
        raise ValidationError("size labels must not be empty")
    return json.dumps(list(sizes), separators=(",", ":"))


def _check_values(values: Dict[str, Any]) -> Dict[str, Any]:
    """Validate supplied product fields and return them in stored form."""
    checked = dict(values)
    for field in NOT_NULL_FIELDS:
        if field in checked and checked[field] is None:
            raise ValidationError(f"{field} must not be null")
    for field in ("name", "style"):
        if field in checked and not checked[field].strip():
            raise ValidationError(f"{field} must not be empty")
    if "price" in checked:
        price = checked["price"]
        if not math.isfinite(price) or price < 0:
            raise ValidationError("price must be a non-negative number")
    if "stock" in checked and checked["stock"] < 0:
        raise ValidationError("stock must be a non-negative integer")
    if "sizes" in checked:
        checked["sizes"] = normalize_sizes(checked["sizes"])
    return checked


class ProductService:
    """
    Service for catalog operations. Every call re-queries the store.
    """
    def __init__(self, database: Database):
        self.database = database

    async def list_products(self, filters: Optional[ProductFilters] = None) -> List[Product]:
        """
        List products matching every supplied filter.

        Results are ordered by creation time, then id.
        """
        filters = filters or ProductFilters()
        query = select(Product)

        if filters.style:
            query = query.where(Product.style == filters.style)
        if filters.min_price is not None:
            query = query.where(Product.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.where(Product.price <= filters.max_price)
        if filters.search:
            query = query.where(
                or_(
                    Product.name.icontains(filters.search, autoescape=True),
                    Product.description.icontains(filters.search, autoescape=True),
                )
            )
        if filters.size:
            # Narrow in SQL, then confirm the exact label below
            query = query.where(
                Product.sizes.contains(json.dumps(filters.size), autoescape=True)
            )

        query = query.order_by(Product.created_at, Product.id)

        async with self.database.session() as db:
            result = await db.execute(query)
            products = list(result.scalars().all())

        if filters.size:
            products = [p for p in products if filters.size in p.size_list]
        return products

    async def get_product(self, product_id: str) -> Optional[Product]:
        """
        Get product by ID.

        Returns:
            Product or None if not found
        """
        async with self.database.session() as db:
            result = await db.execute(select(Product).where(Product.id == product_id))
            return result.scalar_one_or_none()

    async def create_product(self, data: ProductCreate) -> Product:
        """
        Create a product with a fresh id.

        Raises:
            ValidationError: If name, price, style or sizes is missing,
                or a supplied value is out of range
        """
        values = data.model_dump()
        missing = [field for field in REQUIRED_FIELDS if values.get(field) is None]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        if values.get("stock") is None:
            values["stock"] = DEFAULT_STOCK
        values = _check_values(values)

        now = utcnow()
        product = Product(
            id=generate_product_id(),
            name=values["name"],
            description=values.get("description"),
            price=values["price"],
            style=values["style"],
            sizes=values["sizes"],
            image_url=values.get("image_url"),
            stock=values["stock"],
            created_at=now,
            updated_at=now,
        )

        async with self.database.session() as db:
            db.add(product)
            await db.commit()
        return product

    async def update_product(self, product_id: str, patch: ProductPatch) -> Optional[Product]:
        """
        Apply a partial update.

        Fields absent from the patch keep their stored values. The
        updated timestamp always advances, even for an empty patch.

        Returns:
            Updated product, or None if not found (nothing is written)
        """
        changes = _check_values(patch.changes())

        async with self.database.session() as db:
            result = await db.execute(select(Product).where(Product.id == product_id))
            product = result.scalar_one_or_none()
            if product is None:
                return None

            for field, value in changes.items():
                setattr(product, field, value)

            now = utcnow()
            if product.updated_at is not None and now <= product.updated_at:
                now = product.updated_at + timedelta(microseconds=1)
            product.updated_at = now

            await db.commit()
            return product

    async def delete_product(self, product_id: str) -> bool:
        """
        Delete a product.

        Returns:
            True if a row was removed, False if the id did not exist
        """
        async with self.database.session() as db:
            result = await db.execute(delete(Product).where(Product.id == product_id))
            await db.commit()
            return result.rowcount > 0
