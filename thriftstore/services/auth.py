"""Password and Google account flows on top of :class:`UserRepository`."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

import structlog
from sqlalchemy.exc import SQLAlchemyError

from ..core import LOOKUP_RETRY_ATTEMPTS, LOOKUP_RETRY_DELAY
from ..errors import ConflictError, InvalidCredentialsError, ValidationError
from ..models import Role, SellerProfile, User
from ..repositories import UserRepository, normalize_email
from .google import ExternalProfile
from .security import create_access_token, hash_password, verify_password

logger = structlog.get_logger(__name__)

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72

_DUMMY_PASSWORD_HASH = hash_password("thriftstore-no-such-account")

T = TypeVar("T")


@dataclass(frozen=True)
class AuthResult:
    user: User
    token: str


def with_retry(
    operation: Callable[[], T],
    *,
    attempts: int = LOOKUP_RETRY_ATTEMPTS,
    delay: Optional[float] = None,
    label: str = "store_call",
    on_retry: Optional[Callable[[], None]] = None,
) -> T:
    """Run ``operation``, retrying store errors with a fixed backoff.

    ``on_retry`` runs before each pause. A session that saw a dropped
    connection refuses further work until it is rolled back, so callers
    sharing a session pass its rollback here. After ``attempts`` failures
    the last error is re-raised.
    """

    pause = LOOKUP_RETRY_DELAY if delay is None else delay
    for attempt in range(1, attempts + 1):
        try:
            return operation()
        except SQLAlchemyError as exc:
            if attempt == attempts:
                logger.error("retry_exhausted", operation=label, attempts=attempts, error=str(exc))
                raise
            logger.warning("retrying", operation=label, attempt=attempt, error=str(exc))
            if on_retry is not None:
                on_retry()
            time.sleep(pause)
    raise AssertionError("unreachable")  # pragma: no cover


def register_user(
    users: UserRepository,
    *,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> AuthResult:
    """Create a buyer account with a password and issue its first token."""

    name = (name or "").strip()
    normalized_email = normalize_email(email)
    if not name:
        raise ValidationError("Name is required")
    if not normalized_email or "@" not in normalized_email:
        raise ValidationError("A valid email is required")
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

    if users.get_by_email(normalized_email):
        raise ConflictError("User already exists with this email")

    user = users.save(
        User(
            name=name,
            email=normalized_email,
            password_hash=hash_password(password),
            role=Role.BUYER.value,
        )
    )
    logger.info("user_registered", user_id=str(user.id), email=user.email)
    return AuthResult(user=user, token=create_access_token(user))


def login_user(
    users: UserRepository, *, email: Optional[str], password: Optional[str]
) -> AuthResult:
    """Check a password login.

    Unknown email, Google-only account and wrong password all raise the
    same :class:`InvalidCredentialsError`.
    """

    user = users.get_by_email(email) if email else None
    # Unknown and Google-only accounts still pay for one bcrypt check.
    stored_hash = user.password_hash if user and user.password_hash else _DUMMY_PASSWORD_HASH
    password_ok = verify_password(password or "", stored_hash)
    if user is None or not user.password_hash or not password_ok:
        logger.info("login_failed", email=normalize_email(email))
        raise InvalidCredentialsError()
    logger.info("login_succeeded", user_id=str(user.id))
    return AuthResult(user=user, token=create_access_token(user))


def resolve_external_identity(
    users: UserRepository,
    profile: ExternalProfile,
    *,
    retry_delay: Optional[float] = None,
) -> AuthResult:
    """Map a provider profile onto an account, linking or creating as needed.

    An existing account without ``google_id`` gets it backfilled; an account
    that is already linked is returned untouched.
    """

    if not profile.email:
        raise ValidationError("No email found in Google profile")
    if not profile.subject:
        raise ValidationError("No account id found in Google profile")

    email = normalize_email(profile.email)
    user = with_retry(
        lambda: users.find_for_external_identity(google_id=profile.subject, email=email),
        delay=retry_delay,
        label="find_user_for_google",
        on_retry=users.rollback,
    )

    if user is None:
        user = users.save(
            User(
                name=profile.name or email.split("@")[0],
                email=email,
                google_id=profile.subject,
                avatar_url=profile.picture,
                role=Role.BUYER.value,
            )
        )
        logger.info("google_user_created", user_id=str(user.id), email=email)
    elif not user.google_id:
        user.google_id = profile.subject
        user.avatar_url = user.avatar_url or profile.picture
        user = users.save(user)
        logger.info("google_identity_linked", user_id=str(user.id), email=email)
    else:
        logger.info("google_user_found", user_id=str(user.id))

    return AuthResult(user=user, token=create_access_token(user))


def upgrade_to_seller(
    users: UserRepository,
    user: User,
    *,
    business_name: str = "",
    business_address: str = "",
    phone_number: str = "",
    description: str = "",
) -> AuthResult:
    """Promote ``user`` to seller and record a seller profile.

    Admins keep their role. A fresh token is issued since the role claim
    may have changed.
    """

    if user.role == Role.BUYER.value:
        user.role = Role.SELLER.value

    profile = users.get_seller_profile(user.id) or SellerProfile(user_id=user.id)
    profile.business_name = business_name or profile.business_name
    profile.business_address = business_address or profile.business_address
    profile.phone_number = phone_number or profile.phone_number
    profile.description = description or profile.description

    user = users.save_seller(user, profile)
    logger.info("user_upgraded_to_seller", user_id=str(user.id), role=user.role)
    return AuthResult(user=user, token=create_access_token(user))


__all__ = [
    "AuthResult",
    "MIN_PASSWORD_LENGTH",
    "login_user",
    "register_user",
    "resolve_external_identity",
    "upgrade_to_seller",
    "with_retry",
]
