"""User profile, seller upgrade and admin listing endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from ...errors import NotFoundError, ValidationError
from ...models import User
from ...repositories import UserRepository
from ...services import upgrade_to_seller
from ...services.serializers import user_profile_dict, user_to_dict
from ..deps import CurrentUser, get_current_user, get_user_repository, require_admin
from ..schemas import BecomeSellerRequest, ProfileUpdate

router = APIRouter(prefix="/users", tags=["users"])


def _load_user(users: UserRepository, current: CurrentUser) -> User:
    user = users.get(current.id)
    if not user:
        raise NotFoundError("User not found")
    return user


@router.get("/profile")
def get_profile(
    current: CurrentUser = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    user = _load_user(users, current)
    return {
        "success": True,
        "user": user_profile_dict(user, users.get_seller_profile(user.id)),
    }


@router.put("/profile")
def update_profile(
    body: ProfileUpdate,
    current: CurrentUser = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """Update display name and avatar. Other fields are not editable here."""

    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise ValidationError("Nothing to update")

    user = _load_user(users, current)
    if "name" in updates:
        name = (updates["name"] or "").strip()
        if not name:
            raise ValidationError("Name cannot be empty")
        user.name = name
    if "avatar_url" in updates:
        user.avatar_url = updates["avatar_url"] or None
    user = users.save(user)
    return {"success": True, "user": user_profile_dict(user)}


@router.put("/become-seller")
def become_seller(
    body: Optional[BecomeSellerRequest] = Body(default=None),
    current: CurrentUser = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    user = _load_user(users, current)
    details = body or BecomeSellerRequest()
    result = upgrade_to_seller(users, user, **details.model_dump())
    return {
        "success": True,
        "message": "Your account has been upgraded to seller",
        "token": result.token,
        "user": user_to_dict(result.user),
    }


@router.get("")
def list_users(
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    _: CurrentUser = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
):
    return {
        "success": True,
        "users": [user_profile_dict(user) for user in users.list(limit=limit, offset=offset)],
    }


__all__ = ["router"]
