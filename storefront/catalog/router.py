"""
Catalog router.

Listing and lookup are public. Create, update and delete require a
token carrying the admin claim.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from storefront.base_service import BaseService
from storefront.errors import NotFoundError
from storefront.auth.jwt import TokenData
from storefront.auth.middleware import require_admin
from storefront.catalog.models import STYLES
from storefront.catalog.products import (
    ProductCreate, ProductFilters, ProductOut, ProductPatch, ProductService
)

router = APIRouter(tags=["products"])

base_service = BaseService("catalog")


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


@router.get("/ping")
async def ping():
    return base_service.api_response(message="Catalog service is alive")


@router.get("")
async def list_products(
    style: Optional[str] = Query(None, description=f"Product style, e.g. {', '.join(STYLES)}"),
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    search: Optional[str] = None,
    size: Optional[str] = None,
    products: ProductService = Depends(get_product_service),
):
    """List products, optionally filtered by style, price range, text and size."""
    filters = ProductFilters(
        style=style,
        min_price=min_price,
        max_price=max_price,
        search=search,
        size=size,
    )
    rows = await products.list_products(filters)
    return base_service.api_response(data=[ProductOut.model_validate(p) for p in rows])


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    products: ProductService = Depends(get_product_service),
):
    product = await products.get_product(product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return base_service.api_response(data=ProductOut.model_validate(product))


@router.post("")
async def create_product(
    data: ProductCreate,
    admin: TokenData = Depends(require_admin),
    products: ProductService = Depends(get_product_service),
):
    product = await products.create_product(data)

    base_service.log_event("product.created", {
        "id": product.id,
        "name": product.name,
        "by": admin.user_id
    })

    return base_service.api_response(
        data=ProductOut.model_validate(product),
        message="Product created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    patch: ProductPatch,
    admin: TokenData = Depends(require_admin),
    products: ProductService = Depends(get_product_service),
):
    product = await products.update_product(product_id, patch)
    if product is None:
        raise NotFoundError("Product not found")

    base_service.log_event("product.updated", {
        "id": product_id,
        "fields_updated": list(patch.changes().keys()),
        "by": admin.user_id
    })

    return base_service.api_response(
        data=ProductOut.model_validate(product),
        message="Product updated successfully",
    )


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    admin: TokenData = Depends(require_admin),
    products: ProductService = Depends(get_product_service),
):
    deleted = await products.delete_product(product_id)
    if not deleted:
        raise NotFoundError("Product not found")

    base_service.log_event("product.deleted", {"id": product_id, "by": admin.user_id})

    return base_service.api_response(
        data={"id": product_id},
        message="Product deleted successfully",
    )
