"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

import structlog
from dotenv import load_dotenv

load_dotenv(override=False)

logger = structlog.get_logger(__name__)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Token signing --------------------------------------------------------------
_DEV_JWT_SECRET = "insecure-development-secret"

JWT_SECRET = os.getenv("JWT_SECRET") or _DEV_JWT_SECRET
JWT_ALGORITHM = "HS256"
TOKEN_TTL_DAYS = int(_env_float("TOKEN_TTL_DAYS", 7))

if JWT_SECRET == _DEV_JWT_SECRET:
    logger.warning(
        "jwt_secret_not_configured",
        detail="JWT_SECRET is unset; using a development-only signing secret",
    )


# Google OAuth configuration -------------------------------------------------
GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID") or None
GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET") or None
GOOGLE_CALLBACK_URL = os.getenv(
    "GOOGLE_CALLBACK_URL", "http://localhost:5001/auth/google/callback"
)
GOOGLE_OAUTH_CONFIGURED = bool(GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET)


# Frontend and CORS ----------------------------------------------------------
FRONTEND_URL = (os.getenv("FRONTEND_URL") or "http://localhost:3000").rstrip("/")

_additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

_local_dev_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

ALLOWED_CORS_ORIGINS = _unique(
    [
        FRONTEND_URL,
        *_additional_origins,
        *_local_dev_origins,
    ]
)


# Runtime behaviour ----------------------------------------------------------
# The session cookie only carries the OAuth state between redirect and callback.
SESSION_SECRET = os.getenv("SESSION_SECRET") or JWT_SECRET
COOKIE_SECURE = _env_bool("COOKIE_SECURE", False)

DATABASE_URL = os.getenv("DATABASE_URL") or ""
DB_RESET = _env_bool("DB_RESET", False)

LOOKUP_RETRY_ATTEMPTS = 3
LOOKUP_RETRY_DELAY = _env_float("LOOKUP_RETRY_DELAY", 1.0)

DATA_DIR = Path(os.getenv("DATA_DIR", "data"))


__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "COOKIE_SECURE",
    "DATABASE_URL",
    "DATA_DIR",
    "DB_RESET",
    "FRONTEND_URL",
    "GOOGLE_CALLBACK_URL",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "GOOGLE_OAUTH_CONFIGURED",
    "JWT_ALGORITHM",
    "JWT_SECRET",
    "LOOKUP_RETRY_ATTEMPTS",
    "LOOKUP_RETRY_DELAY",
    "SESSION_SECRET",
    "TOKEN_TTL_DAYS",
]
