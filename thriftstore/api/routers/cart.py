"""Per-user cart endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...errors import NotFoundError, ValidationError
from ...repositories import CartRepository, ProductRepository
from ...services.serializers import cart_to_dict
from ..deps import CurrentUser, get_cart_repository, get_current_user, get_product_repository
from ..schemas import CartAdd, CartUpdate

router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_response(carts: CartRepository, current: CurrentUser) -> dict:
    return {"success": True, "cart": cart_to_dict(carts.lines(current.id))}


@router.get("")
def get_cart(
    current: CurrentUser = Depends(get_current_user),
    carts: CartRepository = Depends(get_cart_repository),
):
    return _cart_response(carts, current)


@router.post("", status_code=201)
def add_to_cart(
    body: CartAdd,
    current: CurrentUser = Depends(get_current_user),
    carts: CartRepository = Depends(get_cart_repository),
    products: ProductRepository = Depends(get_product_repository),
):
    product = products.get(body.product_id)
    if not product:
        raise NotFoundError("Product not found")
    if product.status != "available":
        raise ValidationError("Product is not available")
    if product.seller_id == current.id:
        raise ValidationError("You cannot add your own product to the cart")

    carts.add(current.id, product.id, body.quantity)
    return _cart_response(carts, current)


@router.put("/{product_id}")
def update_cart_item(
    product_id: int,
    body: CartUpdate,
    current: CurrentUser = Depends(get_current_user),
    carts: CartRepository = Depends(get_cart_repository),
):
    item = carts.get_item(current.id, product_id)
    if not item:
        raise NotFoundError("Item not found in cart")
    carts.set_quantity(item, body.quantity)
    return _cart_response(carts, current)


@router.delete("/{product_id}")
def remove_cart_item(
    product_id: int,
    current: CurrentUser = Depends(get_current_user),
    carts: CartRepository = Depends(get_cart_repository),
):
    item = carts.get_item(current.id, product_id)
    if item:
        carts.remove(item)
    return _cart_response(carts, current)


@router.delete("")
def clear_cart(
    current: CurrentUser = Depends(get_current_user),
    carts: CartRepository = Depends(get_cart_repository),
):
    carts.clear(current.id)
    return _cart_response(carts, current)


__all__ = ["router"]
