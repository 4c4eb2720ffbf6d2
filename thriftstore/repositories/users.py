"""Persistence for user accounts and seller profiles."""

from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from ..errors import ConflictError, ValidationError
from ..models import SellerProfile, User


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


class UserRepository:
    """SQLModel-backed store for :class:`User` records.

    Uniqueness of ``email`` and ``google_id`` is enforced by the table, so a
    concurrent insert that loses the race surfaces here as ``ConflictError``.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: uuid.UUID) -> Optional[User]:
        return self._session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        normalized = normalize_email(email)
        return self._session.exec(
            select(User).where(func.lower(User.email) == normalized)
        ).first()

    def find_for_external_identity(self, *, google_id: str, email: str) -> Optional[User]:
        """Return the account matching either the Google subject or the email."""

        linked = self._session.exec(select(User).where(User.google_id == google_id)).first()
        return linked or self.get_by_email(email)

    def list(self, *, limit: int = 50, offset: int = 0) -> List[User]:
        return list(
            self._session.exec(
                select(User).order_by(User.created_at).offset(offset).limit(limit)
            ).all()
        )

    def save(self, user: User) -> User:
        """Insert or update ``user`` and commit."""

        if not user.has_login_method():
            raise ValidationError("Account needs a password or a linked Google identity")
        self._session.add(user)
        try:
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            raise ConflictError("User already exists with this email") from exc
        self._session.refresh(user)
        return user

    def rollback(self) -> None:
        """Discard the session's failed transaction so it can be reused."""

        self._session.rollback()

    def get_seller_profile(self, user_id: uuid.UUID) -> Optional[SellerProfile]:
        return self._session.get(SellerProfile, user_id)

    def save_seller(self, user: User, profile: SellerProfile) -> User:
        """Persist a role change together with its seller profile."""

        self._session.add(user)
        self._session.add(profile)
        self._session.commit()
        self._session.refresh(user)
        return user


__all__ = ["UserRepository", "normalize_email"]
