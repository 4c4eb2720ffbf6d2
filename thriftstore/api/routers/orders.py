"""Order endpoints: checkout, history, cancellation and payment status."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends

from ...errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from ...models import Order
from ...models.order import CANCELLABLE_STATUSES
from ...repositories import CartRepository, OrderRepository
from ...services.serializers import order_to_dict
from ..deps import CurrentUser, get_cart_repository, get_current_user, get_order_repository
from ..schemas import CheckoutRequest, PaymentUpdate

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def _owned_order(orders: OrderRepository, order_id: int, current: CurrentUser, action: str) -> Order:
    order = orders.get(order_id)
    if not order:
        raise NotFoundError("Order not found")
    if order.user_id != current.id:
        raise ForbiddenError(f"Not authorized to {action} this order")
    return order


@router.post("", status_code=201)
def place_order(
    body: CheckoutRequest,
    current: CurrentUser = Depends(get_current_user),
    carts: CartRepository = Depends(get_cart_repository),
    orders: OrderRepository = Depends(get_order_repository),
):
    """Check out the caller's cart.

    Payment always starts ``pending``; the outcome is reported later
    through ``PUT /orders/{id}/payment``.
    """

    lines = carts.lines(current.id)
    if not lines:
        raise ValidationError("No items provided for order")
    for _, product in lines:
        if product.status != "available":
            raise ConflictError(f"Product '{product.name}' is no longer available")

    order = orders.place(
        current.id,
        lines,
        shipping_address=body.shipping_address.model_dump(),
        payment_method=body.payment_method,
    )
    logger.info("order_placed", order_id=order.id, user_id=str(current.id), total=order.total_amount)
    return {"success": True, "order": order_to_dict(order, orders.items(order.id))}


@router.get("")
def list_orders(
    current: CurrentUser = Depends(get_current_user),
    orders: OrderRepository = Depends(get_order_repository),
):
    return {
        "success": True,
        "orders": [
            order_to_dict(order, orders.items(order.id))
            for order in orders.list_for_user(current.id)
        ],
    }


@router.get("/{order_id}")
def get_order(
    order_id: int,
    current: CurrentUser = Depends(get_current_user),
    orders: OrderRepository = Depends(get_order_repository),
):
    order = _owned_order(orders, order_id, current, "view")
    return {"success": True, "order": order_to_dict(order, orders.items(order.id))}


@router.put("/{order_id}/cancel")
def cancel_order(
    order_id: int,
    current: CurrentUser = Depends(get_current_user),
    orders: OrderRepository = Depends(get_order_repository),
):
    order = _owned_order(orders, order_id, current, "cancel")
    if order.status not in CANCELLABLE_STATUSES:
        raise ValidationError("Cannot cancel order at this stage")
    order = orders.cancel(order)
    logger.info("order_cancelled", order_id=order.id, user_id=str(current.id))
    return {"success": True, "order": order_to_dict(order, orders.items(order.id))}


@router.put("/{order_id}/payment")
def update_payment(
    order_id: int,
    body: PaymentUpdate,
    current: CurrentUser = Depends(get_current_user),
    orders: OrderRepository = Depends(get_order_repository),
):
    order = _owned_order(orders, order_id, current, "update")
    if order.status == "cancelled":
        raise ValidationError("Cannot update payment of a cancelled order")
    order = orders.record_payment(order, body.payment_status, body.transaction_id)
    logger.info(
        "order_payment_recorded",
        order_id=order.id,
        payment_status=order.payment_status,
        user_id=str(current.id),
    )
    return {"success": True, "order": order_to_dict(order, orders.items(order.id))}


__all__ = ["router"]
