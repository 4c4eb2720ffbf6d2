"""Persistence and search for product listings."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import delete
from sqlmodel import Session, col, or_, select

from ..core.time import utcnow
from ..models import CartItem, Product

SORT_OPTIONS = ("newest", "oldest", "price-asc", "price-desc")


@dataclass
class ProductQuery:
    """Filters accepted by the public product listing."""

    category: Optional[str] = None
    gender: Optional[str] = None
    condition: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    search: Optional[str] = None
    sort: str = "newest"
    limit: int = 20


class ProductRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, product_id: int) -> Optional[Product]:
        return self._session.get(Product, product_id)

    def search(self, query: ProductQuery) -> List[Product]:
        stmt = select(Product)
        if query.category:
            stmt = stmt.where(Product.category == query.category)
        if query.gender:
            stmt = stmt.where(Product.gender == query.gender)
        if query.condition:
            stmt = stmt.where(Product.condition == query.condition)
        if query.min_price is not None:
            stmt = stmt.where(Product.price >= query.min_price)
        if query.max_price is not None:
            stmt = stmt.where(Product.price <= query.max_price)
        if query.search:
            pattern = f"%{query.search.strip()}%"
            stmt = stmt.where(
                or_(col(Product.name).ilike(pattern), col(Product.description).ilike(pattern))
            )

        if query.sort == "price-asc":
            stmt = stmt.order_by(col(Product.price).asc())
        elif query.sort == "price-desc":
            stmt = stmt.order_by(col(Product.price).desc())
        elif query.sort == "oldest":
            stmt = stmt.order_by(col(Product.created_at).asc(), col(Product.id).asc())
        else:
            stmt = stmt.order_by(col(Product.created_at).desc(), col(Product.id).desc())

        return list(self._session.exec(stmt.limit(query.limit)).all())

    def list_for_seller(self, seller_id: uuid.UUID) -> List[Product]:
        return list(
            self._session.exec(
                select(Product)
                .where(Product.seller_id == seller_id)
                .order_by(col(Product.created_at).desc(), col(Product.id).desc())
            ).all()
        )

    def save(self, product: Product) -> Product:
        product.updated_at = utcnow()
        self._session.add(product)
        self._session.commit()
        self._session.refresh(product)
        return product

    def record_view(self, product: Product) -> Product:
        product.views = (product.views or 0) + 1
        self._session.add(product)
        self._session.commit()
        self._session.refresh(product)
        return product

    def delete(self, product: Product) -> None:
        self._session.exec(delete(CartItem).where(CartItem.product_id == product.id))
        self._session.delete(product)
        self._session.commit()


__all__ = ["ProductQuery", "ProductRepository", "SORT_OPTIONS"]
