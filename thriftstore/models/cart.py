"""Database model for per-user cart lines."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class CartItem(SQLModel, table=True):
    """One product line in a user's cart."""

    __tablename__ = "cart_item"
    __table_args__ = (UniqueConstraint("user_id", "product_id"),)

    id: Optional[int] = ORMField(default=None, primary_key=True)
    user_id: uuid.UUID = ORMField(foreign_key="users.id", index=True)
    product_id: int = ORMField(foreign_key="product.id")
    quantity: int = 1
    added_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["CartItem"]
