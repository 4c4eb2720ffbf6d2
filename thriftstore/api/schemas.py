"""Request bodies accepted by the API."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Category = Literal["clothing", "electronics", "home", "books", "accessories", "other"]
Gender = Literal["men", "women", "unisex"]
Condition = Literal["new", "like-new", "good", "fair", "poor"]
ProductStatus = Literal["available", "sold", "reserved"]
PaymentMethod = Literal["cod", "razorpay"]
PaymentStatus = Literal["pending", "paid", "failed"]


class RegisterRequest(BaseModel):
    # Presence and length are checked in the service so the messages match
    # the rest of the auth errors.
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    avatar_url: Optional[str] = None


class BecomeSellerRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    business_name: str = ""
    business_address: str = ""
    phone_number: str = ""
    description: str = ""


class ProductCreate(BaseModel):
    """The one accepted shape for a new listing."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    category: Category
    gender: Gender = "unisex"
    condition: Condition
    images: List[str] = Field(min_length=1, max_length=5)
    location: str = Field(min_length=1)


class ProductUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    category: Optional[Category] = None
    gender: Optional[Gender] = None
    condition: Optional[Condition] = None
    images: Optional[List[str]] = Field(default=None, min_length=1, max_length=5)
    location: Optional[str] = Field(default=None, min_length=1)
    status: Optional[ProductStatus] = None


class CartAdd(BaseModel):
    model_config = ConfigDict(extra="forbid")

    product_id: int
    quantity: int = Field(default=1, ge=1)


class CartUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    quantity: int = Field(ge=1)


class ShippingAddress(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    full_name: str = Field(min_length=1, max_length=120)
    phone: str = Field(min_length=1, max_length=30)
    line1: str = Field(min_length=1)
    line2: str = ""
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    postal_code: str = Field(min_length=1, max_length=20)


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    shipping_address: ShippingAddress
    payment_method: PaymentMethod = "cod"


class PaymentUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    payment_status: PaymentStatus
    transaction_id: Optional[str] = Field(default=None, max_length=200)


__all__ = [
    "BecomeSellerRequest",
    "CartAdd",
    "CartUpdate",
    "CheckoutRequest",
    "LoginRequest",
    "PaymentUpdate",
    "ProductCreate",
    "ProductUpdate",
    "ProfileUpdate",
    "RegisterRequest",
    "ShippingAddress",
]
