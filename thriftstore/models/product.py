"""Database model for product listings."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

CATEGORIES = ("clothing", "electronics", "home", "books", "accessories", "other")
GENDERS = ("men", "women", "unisex")
CONDITIONS = ("new", "like-new", "good", "fair", "poor")
STATUSES = ("available", "sold", "reserved")


class Product(SQLModel, table=True):
    """Second-hand item listed by a seller."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    seller_id: uuid.UUID = ORMField(foreign_key="users.id", index=True)
    name: str
    description: str
    price: float
    category: str = ORMField(index=True)
    gender: str = "unisex"
    condition: str
    # JSON list of image URLs
    images_json: str = "[]"
    location: str
    status: str = ORMField(default="available", index=True)
    views: int = 0
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["CATEGORIES", "CONDITIONS", "GENDERS", "Product", "STATUSES"]
