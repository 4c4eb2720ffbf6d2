"""Repositories wrapping SQLModel sessions."""

from .carts import CartLine, CartRepository
from .orders import OrderRepository
from .products import ProductQuery, ProductRepository
from .users import UserRepository, normalize_email

__all__ = [
    "CartLine",
    "CartRepository",
    "OrderRepository",
    "ProductQuery",
    "ProductRepository",
    "UserRepository",
    "normalize_email",
]
