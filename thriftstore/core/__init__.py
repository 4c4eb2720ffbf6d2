"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    COOKIE_SECURE,
    DB_RESET,
    FRONTEND_URL,
    GOOGLE_CALLBACK_URL,
    GOOGLE_CLIENT_ID,
    GOOGLE_CLIENT_SECRET,
    GOOGLE_OAUTH_CONFIGURED,
    JWT_ALGORITHM,
    JWT_SECRET,
    LOOKUP_RETRY_ATTEMPTS,
    LOOKUP_RETRY_DELAY,
    SESSION_SECRET,
    TOKEN_TTL_DAYS,
)
from .database import get_engine, get_session, init_db
from .logging import configure_logging
from .time import utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "COOKIE_SECURE",
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
    "configure_logging",
    "get_engine",
    "get_session",
    "init_db",
    "utcnow",
]
