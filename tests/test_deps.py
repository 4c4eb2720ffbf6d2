"""Tests for the bearer-token dependency and role guards."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from starlette.requests import Request

from thriftstore.api.deps import CurrentUser, get_current_user, require_admin, require_seller
from thriftstore.errors import ForbiddenError, UnauthenticatedError
from thriftstore.models import User
from thriftstore.services.security import create_access_token


def _request(authorization: str | None = None) -> Request:
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


def _signed(claims: dict, secret: str = "test-secret") -> str:
    claims = {"exp": datetime.now(timezone.utc) + timedelta(hours=1), **claims}
    return jwt.encode(claims, secret, algorithm="HS256")


def _current(role: str) -> CurrentUser:
    return CurrentUser(id=uuid.uuid4(), email="a@x.com", name="A", role=role)


class TestGetCurrentUser:
    def test_valid_token_populates_request_state(self):
        user = User(id=uuid.uuid4(), email="a@x.com", name="A", role="buyer")
        request = _request(f"Bearer {create_access_token(user)}")

        current = get_current_user(request)

        assert current.id == user.id
        assert current.role == "buyer"
        assert request.state.user == current

    @pytest.mark.parametrize(
        "header, message",
        [
            (None, "No token, authorization denied"),
            ("Token abc", "Invalid token format"),
            ("bearer abc", "Invalid token format"),
            ("Bearer ", "Token is empty"),
            ("Bearer    ", "Token is empty"),
        ],
    )
    def test_malformed_header_is_rejected(self, header, message):
        with pytest.raises(UnauthenticatedError) as excinfo:
            get_current_user(_request(header))
        assert excinfo.value.message == message
        assert excinfo.value.status_code == 401

    def test_expired_token_is_rejected_as_expired(self):
        user = User(id=uuid.uuid4(), email="a@x.com", name="A", role="buyer")
        token = create_access_token(user, expires_in=timedelta(seconds=-1))

        with pytest.raises(UnauthenticatedError) as excinfo:
            get_current_user(_request(f"Bearer {token}"))
        assert excinfo.value.message == "Token expired"

    def test_token_from_other_secret_is_rejected(self):
        token = _signed({"id": str(uuid.uuid4()), "role": "buyer"}, secret="wrong")

        with pytest.raises(UnauthenticatedError) as excinfo:
            get_current_user(_request(f"Bearer {token}"))
        assert excinfo.value.message == "Invalid token"

    def test_token_without_any_identity_is_rejected(self):
        token = _signed({"email": "a@x.com", "role": "buyer"})

        with pytest.raises(UnauthenticatedError) as excinfo:
            get_current_user(_request(f"Bearer {token}"))
        assert "missing user ID" in excinfo.value.message

    def test_legacy_user_id_claim_is_accepted(self):
        user_id = uuid.uuid4()
        token = _signed({"userId": str(user_id), "email": "a@x.com", "role": "seller"})

        current = get_current_user(_request(f"Bearer {token}"))

        assert current.id == user_id
        assert current.role == "seller"

    def test_non_uuid_identity_is_rejected(self):
        token = _signed({"id": "507f1f77bcf86cd799439011", "role": "buyer"})

        with pytest.raises(UnauthenticatedError):
            get_current_user(_request(f"Bearer {token}"))


class TestGuards:
    def test_seller_guard_rejects_buyer(self):
        with pytest.raises(ForbiddenError) as excinfo:
            require_seller(_current("buyer"))
        assert excinfo.value.status_code == 403

    def test_seller_guard_accepts_seller(self):
        seller = _current("seller")
        assert require_seller(seller) is seller

    def test_seller_guard_rejects_admin(self):
        with pytest.raises(ForbiddenError):
            require_seller(_current("admin"))

    def test_admin_guard(self):
        admin = _current("admin")
        assert require_admin(admin) is admin
        with pytest.raises(ForbiddenError):
            require_admin(_current("seller"))
