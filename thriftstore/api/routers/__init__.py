"""Aggregate API routers."""

from fastapi import APIRouter

from .auth import router as auth_router
from .cart import router as cart_router
from .orders import router as orders_router
from .products import router as products_router
from .system import router as system_router
from .users import router as users_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    auth_router,
    users_router,
    products_router,
    cart_router,
    orders_router,
)

__all__ = ["ALL_ROUTERS"]
