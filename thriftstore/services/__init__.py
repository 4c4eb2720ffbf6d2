"""Service layer helpers."""

from .auth import (
    AuthResult,
    login_user,
    register_user,
    resolve_external_identity,
    upgrade_to_seller,
    with_retry,
)
from .google import ExternalProfile, GoogleIdentityProvider, get_identity_provider
from .security import (
    TokenError,
    TokenExpiredError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

__all__ = [
    "AuthResult",
    "ExternalProfile",
    "GoogleIdentityProvider",
    "TokenError",
    "TokenExpiredError",
    "create_access_token",
    "decode_access_token",
    "get_identity_provider",
    "hash_password",
    "login_user",
    "register_user",
    "resolve_external_identity",
    "upgrade_to_seller",
    "verify_password",
    "with_retry",
]
