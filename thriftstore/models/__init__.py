"""Database model exports."""

from .cart import CartItem
from .order import Order, OrderItem
from .product import Product
from .user import Role, SellerProfile, User

__all__ = [
    "CartItem",
    "Order",
    "OrderItem",
    "Product",
    "Role",
    "SellerProfile",
    "User",
]
