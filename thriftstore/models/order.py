"""Database models for orders and their line items."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled")
CANCELLABLE_STATUSES = ("pending", "processing")
PAYMENT_METHODS = ("cod", "razorpay")
PAYMENT_STATUSES = ("pending", "paid", "failed")


class Order(SQLModel, table=True):
    """Checkout of a user's cart."""

    __tablename__ = "orders"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    user_id: uuid.UUID = ORMField(foreign_key="users.id", index=True)
    total_amount: float
    status: str = "pending"
    payment_method: str = "cod"
    payment_status: str = "pending"
    transaction_id: Optional[str] = None
    # full_name, phone, line1, line2, city, state, postal_code
    shipping_address_json: str = "{}"
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: datetime = ORMField(default_factory=utcnow)


class OrderItem(SQLModel, table=True):
    """Product snapshot taken when the order was placed."""

    __tablename__ = "order_item"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    order_id: int = ORMField(foreign_key="orders.id", index=True)
    product_id: int
    name: str
    unit_price: float
    quantity: int


__all__ = [
    "CANCELLABLE_STATUSES",
    "ORDER_STATUSES",
    "PAYMENT_METHODS",
    "PAYMENT_STATUSES",
    "Order",
    "OrderItem",
]
