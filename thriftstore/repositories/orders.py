"""Persistence for orders."""

from __future__ import annotations

import json
import uuid
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import delete, update
from sqlmodel import Session, col, select

from ..core.time import utcnow
from ..errors import ConflictError
from ..models import CartItem, Order, OrderItem, Product
from .carts import CartLine


class OrderRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, order_id: int) -> Optional[Order]:
        return self._session.get(Order, order_id)

    def items(self, order_id: int) -> List[OrderItem]:
        return list(
            self._session.exec(
                select(OrderItem)
                .where(OrderItem.order_id == order_id)
                .order_by(col(OrderItem.id))
            ).all()
        )

    def list_for_user(self, user_id: uuid.UUID) -> List[Order]:
        return list(
            self._session.exec(
                select(Order)
                .where(Order.user_id == user_id)
                .order_by(col(Order.created_at).desc(), col(Order.id).desc())
            ).all()
        )

    def place(
        self,
        user_id: uuid.UUID,
        lines: Sequence[CartLine],
        *,
        shipping_address: Dict[str, Any],
        payment_method: str = "cod",
    ) -> Order:
        """Turn cart lines into an order in a single transaction.

        Each product is flipped from ``available`` to ``sold`` with a
        conditional update; if any flip matches no row the whole
        transaction is rolled back.
        """

        total = round(sum(product.price * item.quantity for item, product in lines), 2)
        order = Order(
            user_id=user_id,
            total_amount=total,
            payment_method=payment_method,
            shipping_address_json=json.dumps(shipping_address),
        )
        try:
            self._session.add(order)
            self._session.flush()
            for item, product in lines:
                result = self._session.exec(
                    update(Product)
                    .where(col(Product.id) == product.id, col(Product.status) == "available")
                    .values(status="sold")
                )
                if result.rowcount != 1:
                    raise ConflictError(f"Product '{product.name}' is no longer available")
                self._session.add(
                    OrderItem(
                        order_id=order.id,
                        product_id=product.id,
                        name=product.name,
                        unit_price=product.price,
                        quantity=item.quantity,
                    )
                )
            self._session.exec(delete(CartItem).where(CartItem.user_id == user_id))
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._session.refresh(order)
        return order

    def cancel(self, order: Order) -> Order:
        """Mark ``order`` cancelled and put its products back on sale."""

        product_ids = [item.product_id for item in self.items(order.id)]
        order.status = "cancelled"
        order.updated_at = utcnow()
        self._session.add(order)
        if product_ids:
            self._session.exec(
                update(Product)
                .where(col(Product.id).in_(product_ids), col(Product.status) == "sold")
                .values(status="available")
            )
        self._session.commit()
        self._session.refresh(order)
        return order

    def record_payment(
        self, order: Order, payment_status: str, transaction_id: Optional[str] = None
    ) -> Order:
        """Store the outcome reported for ``order``'s payment."""

        order.payment_status = payment_status
        if transaction_id:
            order.transaction_id = transaction_id
        order.updated_at = utcnow()
        self._session.add(order)
        self._session.commit()
        self._session.refresh(order)
        return order


__all__ = ["OrderRepository"]
