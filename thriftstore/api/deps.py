"""Request dependencies: repositories, the bearer-token check and role guards."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

import structlog
from fastapi import Depends, Request
from sqlmodel import Session

from ..core import get_session
from ..errors import ForbiddenError, UnauthenticatedError
from ..models import Role
from ..repositories import (
    CartRepository,
    OrderRepository,
    ProductRepository,
    UserRepository,
)
from ..services.security import TokenError, TokenExpiredError, decode_access_token

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class CurrentUser:
    """Identity decoded from a verified bearer token."""

    id: uuid.UUID
    email: str
    name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def get_user_repository(session: Session = Depends(get_session)) -> UserRepository:
    return UserRepository(session)


def get_product_repository(session: Session = Depends(get_session)) -> ProductRepository:
    return ProductRepository(session)


def get_cart_repository(session: Session = Depends(get_session)) -> CartRepository:
    return CartRepository(session)


def get_order_repository(session: Session = Depends(get_session)) -> OrderRepository:
    return OrderRepository(session)


def _identity_claim(payload: dict) -> str | None:
    # ``id`` is what we issue; ``userId`` is accepted from older tokens.
    return payload.get("id") or payload.get("userId")


def get_current_user(request: Request) -> CurrentUser:
    """Verify ``Authorization: Bearer <token>`` and return the caller.

    The decoded identity is also stored on ``request.state.user``.
    """

    header = request.headers.get("Authorization")
    if not header:
        raise UnauthenticatedError("No token, authorization denied")
    if not header.startswith(BEARER_PREFIX):
        raise UnauthenticatedError("Invalid token format")
    token = header[len(BEARER_PREFIX):].strip()
    if not token:
        raise UnauthenticatedError("Token is empty")

    try:
        payload = decode_access_token(token)
    except TokenExpiredError as exc:
        logger.info("token_rejected", reason="expired")
        raise UnauthenticatedError("Token expired") from exc
    except TokenError as exc:
        logger.info("token_rejected", reason="invalid")
        raise UnauthenticatedError("Invalid token") from exc

    raw_id = _identity_claim(payload)
    if not raw_id:
        logger.info("token_rejected", reason="missing_user_id")
        raise UnauthenticatedError("Invalid token format - missing user ID")
    try:
        user_id = uuid.UUID(str(raw_id))
    except ValueError as exc:
        logger.info("token_rejected", reason="malformed_user_id")
        raise UnauthenticatedError("Invalid token") from exc

    user = CurrentUser(
        id=user_id,
        email=payload.get("email") or "",
        name=payload.get("name") or "",
        role=payload.get("role") or Role.BUYER.value,
    )
    request.state.user = user
    return user


def require_seller(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if user.role != Role.SELLER.value:
        raise ForbiddenError("Access denied - Seller privileges required")
    return user


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if user.role != Role.ADMIN.value:
        raise ForbiddenError("Access denied - Admin privileges required")
    return user


__all__ = [
    "CurrentUser",
    "get_cart_repository",
    "get_current_user",
    "get_order_repository",
    "get_product_repository",
    "get_user_repository",
    "require_admin",
    "require_seller",
]
