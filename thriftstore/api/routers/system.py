"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from ... import __version__
from ...core import GOOGLE_OAUTH_CONFIGURED

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/config")
def get_config() -> Dict[str, Any]:
    """Expose values the frontend needs to pick login options."""

    return {"version": __version__, "google_login": GOOGLE_OAUTH_CONFIGURED}


__all__ = ["router"]
