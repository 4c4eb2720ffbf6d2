"""Password hashing and bearer token helpers.

Passwords are hashed with bcrypt. Session tokens are HS256 JWTs signed with
``JWT_SECRET`` and carry the canonical ``id`` claim plus email, name and
role. There is no server-side revocation: a token is valid until ``exp``.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, Optional

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from ..core import JWT_ALGORITHM, JWT_SECRET, TOKEN_TTL_DAYS, utcnow
from ..models import User


class TokenError(Exception):
    """Raised when a token cannot be decoded or fails signature checks."""


class TokenExpiredError(TokenError):
    """Raised when a correctly signed token is past its expiry."""


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Constant-time check of ``password`` against a stored bcrypt hash.

    Accounts without a hash (Google-only) never match.
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # malformed hash
        return False


def token_claims(user: User) -> Dict[str, Any]:
    return {
        "id": str(user.id),
        "email": user.email,
        "name": user.name,
        "role": user.role,
    }


def create_access_token(
    user: User,
    *,
    secret: str | None = None,
    expires_in: timedelta | None = None,
) -> str:
    """Issue a signed token for ``user``, valid for ``TOKEN_TTL_DAYS`` by default."""

    issued_at = utcnow()
    payload = token_claims(user)
    payload["iat"] = issued_at
    payload["exp"] = issued_at + (expires_in or timedelta(days=TOKEN_TTL_DAYS))
    return jwt.encode(payload, secret or JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, *, secret: str | None = None) -> Dict[str, Any]:
    """Verify signature and expiry and return the payload.

    Raises:
        TokenExpiredError: signature is valid but ``exp`` has passed.
        TokenError: anything else wrong with the token.
    """

    try:
        return jwt.decode(token, secret or JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError as exc:
        raise TokenExpiredError("Token expired") from exc
    except JWTError as exc:
        raise TokenError("Invalid token") from exc


__all__ = [
    "TokenError",
    "TokenExpiredError",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "token_claims",
    "verify_password",
]
