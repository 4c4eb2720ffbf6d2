"""Serialise models to API-friendly dicts."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..models import Order, OrderItem, Product, SellerProfile, User
from ..repositories import CartLine


def _iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    out = value.isoformat()
    # SQLite hands back naive datetimes; they are stored as UTC.
    if value.tzinfo is None:
        out += "Z"
    return out


def user_to_dict(user: User) -> Dict[str, Any]:
    """Public fields returned alongside a token."""

    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "role": user.role,
    }


def user_profile_dict(user: User, seller: Optional[SellerProfile] = None) -> Dict[str, Any]:
    data = user_to_dict(user)
    data.update(
        {
            "avatar_url": user.avatar_url,
            "has_password": bool(user.password_hash),
            "google_linked": bool(user.google_id),
            "created_at": _iso(user.created_at),
        }
    )
    if seller is not None:
        data["seller_info"] = {
            "business_name": seller.business_name,
            "business_address": seller.business_address,
            "phone_number": seller.phone_number,
            "description": seller.description,
            "approved": seller.approved,
            "created_at": _iso(seller.created_at),
        }
    return data


def images_from_product(product: Product) -> List[str]:
    return json.loads(product.images_json or "[]")


def product_to_dict(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "seller_id": str(product.seller_id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "category": product.category,
        "gender": product.gender,
        "condition": product.condition,
        "images": images_from_product(product),
        "location": product.location,
        "status": product.status,
        "views": product.views,
        "created_at": _iso(product.created_at),
        "updated_at": _iso(product.updated_at),
    }


def cart_to_dict(lines: Sequence[CartLine]) -> Dict[str, Any]:
    """Cart totals are computed from current product prices."""

    items = []
    for item, product in lines:
        items.append(
            {
                "product": {
                    "id": product.id,
                    "name": product.name,
                    "price": product.price,
                    "images": images_from_product(product),
                    "status": product.status,
                },
                "quantity": item.quantity,
                "price": round(product.price * item.quantity, 2),
            }
        )
    return {
        "items": items,
        "total_items": sum(entry["quantity"] for entry in items),
        "total_price": round(sum(entry["price"] for entry in items), 2),
    }


def order_to_dict(order: Order, items: Sequence[OrderItem]) -> Dict[str, Any]:
    return {
        "id": order.id,
        "user_id": str(order.user_id),
        "status": order.status,
        "total_amount": order.total_amount,
        "payment_method": order.payment_method,
        "payment_status": order.payment_status,
        "payment_info": {"transaction_id": order.transaction_id},
        "shipping_address": json.loads(order.shipping_address_json or "{}"),
        "created_at": _iso(order.created_at),
        "updated_at": _iso(order.updated_at),
        "items": [
            {
                "product_id": item.product_id,
                "name": item.name,
                "unit_price": item.unit_price,
                "quantity": item.quantity,
                "price": round(item.unit_price * item.quantity, 2),
            }
            for item in items
        ],
    }


__all__ = [
    "cart_to_dict",
    "images_from_product",
    "order_to_dict",
    "product_to_dict",
    "user_profile_dict",
    "user_to_dict",
]
