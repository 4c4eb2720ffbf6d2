"""Password and Google authentication routes."""

from __future__ import annotations

from urllib.parse import urlencode

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from ...core import FRONTEND_URL
from ...errors import AppError, NotFoundError
from ...services import (
    GoogleIdentityProvider,
    get_identity_provider,
    login_user,
    register_user,
    resolve_external_identity,
)
from ...services.serializers import user_profile_dict, user_to_dict
from ...repositories import UserRepository
from ..deps import CurrentUser, get_current_user, get_user_repository
from ..schemas import LoginRequest, RegisterRequest

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _login_redirect(**params: str) -> RedirectResponse:
    return RedirectResponse(f"{FRONTEND_URL}/login?{urlencode(params)}", status_code=302)


@router.post("/register", status_code=201)
def register(body: RegisterRequest, users: UserRepository = Depends(get_user_repository)):
    result = register_user(users, name=body.name, email=body.email, password=body.password)
    return {"success": True, "token": result.token, "user": user_to_dict(result.user)}


@router.post("/login")
def login(body: LoginRequest, users: UserRepository = Depends(get_user_repository)):
    result = login_user(users, email=body.email, password=body.password)
    return {"success": True, "token": result.token, "user": user_to_dict(result.user)}


@router.get("/me")
def me(
    current: CurrentUser = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """Return the stored account behind the bearer token."""

    user = users.get(current.id)
    if not user:
        raise NotFoundError("User not found")
    return {"success": True, "user": user_profile_dict(user)}


@router.get("/google")
async def auth_google_start(
    request: Request,
    provider: GoogleIdentityProvider = Depends(get_identity_provider),
):
    if not provider.configured:
        return _login_redirect(error="Google OAuth is not configured")
    logger.info("google_oauth_started")
    try:
        return await provider.authorize_redirect(request)
    except AppError as exc:
        logger.warning("google_start_failed", error=exc.message, kind=exc.kind)
        return _login_redirect(error=exc.message)
    except Exception as exc:
        logger.exception("google_start_error")
        return _login_redirect(error=str(exc) or "Authentication failed")


@router.get("/google/callback")
async def auth_google_callback(
    request: Request,
    provider: GoogleIdentityProvider = Depends(get_identity_provider),
    users: UserRepository = Depends(get_user_repository),
):
    """Finish the Google handshake and hand the token to the frontend.

    There is no JSON channel on this path, so every failure becomes a
    redirect carrying ``error=<message>``.
    """

    try:
        profile = await provider.fetch_profile(request)
        result = await run_in_threadpool(resolve_external_identity, users, profile)
    except AppError as exc:
        logger.warning("google_callback_failed", error=exc.message, kind=exc.kind)
        return _login_redirect(error=exc.message)
    except Exception as exc:
        logger.exception("google_callback_error")
        return _login_redirect(error=str(exc) or "Authentication failed")

    return _login_redirect(token=result.token)


__all__ = ["router"]
