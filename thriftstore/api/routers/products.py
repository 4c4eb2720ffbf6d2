"""Product listing endpoints."""

from __future__ import annotations

import json
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...errors import ForbiddenError, NotFoundError, ValidationError
from ...models import Product
from ...repositories import ProductQuery, ProductRepository
from ...repositories.products import SORT_OPTIONS
from ...services.serializers import product_to_dict
from ..deps import CurrentUser, get_current_user, get_product_repository, require_seller
from ..schemas import Category, Condition, Gender, ProductCreate, ProductUpdate

router = APIRouter(prefix="/products", tags=["products"])


def _get_product(products: ProductRepository, product_id: int) -> Product:
    product = products.get(product_id)
    if not product:
        raise NotFoundError("Product not found")
    return product


@router.get("")
def list_products(
    category: Optional[Category] = None,
    gender: Optional[Gender] = None,
    condition: Optional[Condition] = None,
    min_price: Optional[float] = Query(default=None, ge=0),
    max_price: Optional[float] = Query(default=None, ge=0),
    search: Optional[str] = None,
    sort: str = "newest",
    limit: int = Query(default=20, ge=1, le=100),
    products: ProductRepository = Depends(get_product_repository),
):
    if sort not in SORT_OPTIONS:
        raise ValidationError(f"sort must be one of: {', '.join(SORT_OPTIONS)}")
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ValidationError("min_price cannot be greater than max_price")

    found = products.search(
        ProductQuery(
            category=category,
            gender=gender,
            condition=condition,
            min_price=min_price,
            max_price=max_price,
            search=search,
            sort=sort,
            limit=limit,
        )
    )
    return {
        "success": True,
        "products": [product_to_dict(product) for product in found],
        "total_products": len(found),
    }


@router.get("/seller/products")
def list_my_products(
    seller: CurrentUser = Depends(require_seller),
    products: ProductRepository = Depends(get_product_repository),
):
    """Listings owned by the calling seller, newest first."""

    return {
        "success": True,
        "products": [product_to_dict(p) for p in products.list_for_seller(seller.id)],
    }


@router.get("/{product_id}")
def get_product(product_id: int, products: ProductRepository = Depends(get_product_repository)):
    product = products.record_view(_get_product(products, product_id))
    return {"success": True, "product": product_to_dict(product)}


@router.post("", status_code=201)
def create_product(
    body: ProductCreate,
    seller: CurrentUser = Depends(require_seller),
    products: ProductRepository = Depends(get_product_repository),
):
    data = body.model_dump()
    images = data.pop("images")
    product = products.save(
        Product(seller_id=seller.id, images_json=json.dumps(images), **data)
    )
    return {"success": True, "product": product_to_dict(product)}


@router.put("/{product_id}")
def update_product(
    product_id: int,
    body: ProductUpdate,
    current: CurrentUser = Depends(get_current_user),
    products: ProductRepository = Depends(get_product_repository),
):
    product = _get_product(products, product_id)
    if product.seller_id != current.id:
        raise ForbiddenError("Not authorized to update this product")

    updates = body.model_dump(exclude_unset=True)
    for field, value in updates.items():
        if value is None:
            raise ValidationError(f"{field} cannot be null")
    if "images" in updates:
        product.images_json = json.dumps(updates.pop("images"))
    for field, value in updates.items():
        setattr(product, field, value)

    product = products.save(product)
    return {"success": True, "product": product_to_dict(product)}


@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    current: CurrentUser = Depends(get_current_user),
    products: ProductRepository = Depends(get_product_repository),
):
    product = _get_product(products, product_id)
    if product.seller_id != current.id and not current.is_admin:
        raise ForbiddenError("Not authorized to delete this product")
    products.delete(product)
    return {"success": True, "message": "Product deleted successfully"}


__all__ = ["router"]
