"""Persistence for per-user carts."""

from __future__ import annotations

import uuid
from typing import List, Optional, Tuple

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from ..errors import ConflictError
from ..models import CartItem, Product

CartLine = Tuple[CartItem, Product]


class CartRepository:
    """Cart rows keyed by user id. Every mutation commits on its own."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def lines(self, user_id: uuid.UUID) -> List[CartLine]:
        rows = self._session.exec(
            select(CartItem, Product)
            .join(Product, col(Product.id) == col(CartItem.product_id))
            .where(CartItem.user_id == user_id)
            .order_by(col(CartItem.added_at), col(CartItem.id))
        ).all()
        return [(item, product) for item, product in rows]

    def get_item(self, user_id: uuid.UUID, product_id: int) -> Optional[CartItem]:
        return self._session.exec(
            select(CartItem).where(
                CartItem.user_id == user_id, CartItem.product_id == product_id
            )
        ).first()

    def add(self, user_id: uuid.UUID, product_id: int, quantity: int) -> CartItem:
        """Add ``quantity`` of a product, merging into an existing line."""

        item = self.get_item(user_id, product_id)
        if item:
            item.quantity += quantity
        else:
            item = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
        self._session.add(item)
        try:
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            raise ConflictError("Cart was modified concurrently, please retry") from exc
        self._session.refresh(item)
        return item

    def set_quantity(self, item: CartItem, quantity: int) -> CartItem:
        item.quantity = quantity
        self._session.add(item)
        self._session.commit()
        self._session.refresh(item)
        return item

    def remove(self, item: CartItem) -> None:
        self._session.delete(item)
        self._session.commit()

    def clear(self, user_id: uuid.UUID) -> int:
        result = self._session.exec(delete(CartItem).where(CartItem.user_id == user_id))
        self._session.commit()
        return result.rowcount or 0


__all__ = ["CartLine", "CartRepository"]
