"""Database models for marketplace accounts."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Role(str, Enum):
    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


class User(SQLModel, table=True):
    """Account that signs in with a password, Google, or both.

    ``google_id`` is nullable and unique; SQL unique constraints ignore
    NULLs, so password-only accounts never collide with each other.
    """

    __tablename__ = "users"

    id: uuid.UUID = ORMField(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    email: str = ORMField(index=True, unique=True)
    name: str
    password_hash: Optional[str] = None
    google_id: Optional[str] = ORMField(default=None, unique=True, nullable=True)
    avatar_url: Optional[str] = None
    role: str = ORMField(default=Role.BUYER.value)
    created_at: datetime = ORMField(default_factory=utcnow)

    def has_login_method(self) -> bool:
        return bool(self.password_hash or self.google_id)


class SellerProfile(SQLModel, table=True):
    """Business details captured when a buyer upgrades to seller."""

    __tablename__ = "seller_profile"

    user_id: uuid.UUID = ORMField(foreign_key="users.id", primary_key=True)
    business_name: str = ""
    business_address: str = ""
    phone_number: str = ""
    description: str = ""
    approved: bool = True
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Role", "SellerProfile", "User"]
