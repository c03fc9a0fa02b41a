"""
Catalog models for the storefront.
"""
import json
from typing import List

from sqlalchemy import Column, String, Text, Float, Integer, DateTime

from storefront.base_service import Base, utcnow

PRODUCT_ID_PREFIX = "prod_"
DEFAULT_STOCK = 10

# Known styles. Stored values are not restricted to these.
STYLES = ("casual", "formal", "wedding")


class Product(Base):
    """Catalog entry."""
    __tablename__ = "products"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    style = Column(String, index=True, nullable=False)
    sizes = Column(Text, nullable=False)  # JSON array of size labels
    image_url = Column(String, nullable=True)
    stock = Column(Integer, nullable=False, default=DEFAULT_STOCK)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    @property
    def size_list(self) -> List[str]:
        """Sizes decoded from their stored form."""
        return json.loads(self.sizes) if self.sizes else []

    def __repr__(self) -> str:
        return f"<Product {self.id} {self.name!r}>"
