"""Shared fixtures: in-memory database, fake Google provider, test client."""

from __future__ import annotations

import os

os.environ["JWT_SECRET"] = "test-secret"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["FRONTEND_URL"] = "http://frontend.test"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"
os.environ["LOOKUP_RETRY_DELAY"] = "0"

from typing import Callable, Iterator, Optional, Tuple  # noqa: E402

import pytest  # noqa: E402
from fastapi.responses import RedirectResponse  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from thriftstore.app import app  # noqa: E402
from thriftstore.core import get_session  # noqa: E402
from thriftstore.core.database import build_engine  # noqa: E402
from thriftstore.models import User  # noqa: E402
from thriftstore.services import (  # noqa: E402
    ExternalProfile,
    create_access_token,
    get_identity_provider,
    hash_password,
)


class FakeIdentityProvider:
    """Stands in for Google: returns a canned profile or raises a canned error."""

    name = "google"

    def __init__(self) -> None:
        self.configured = True
        self.profile: Optional[ExternalProfile] = None
        self.error: Optional[Exception] = None
        self.redirect_error: Optional[Exception] = None
        self.redirects = 0

    async def authorize_redirect(self, request):
        if self.redirect_error is not None:
            raise self.redirect_error
        self.redirects += 1
        return RedirectResponse(
            "https://accounts.google.test/o/oauth2/auth?scope=openid+email+profile",
            status_code=302,
        )

    async def fetch_profile(self, request) -> ExternalProfile:
        if self.error is not None:
            raise self.error
        assert self.profile is not None, "set provider.profile in the test"
        return self.profile


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def client(session, identity_provider) -> Iterator[TestClient]:
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    try:
        yield TestClient(app, follow_redirects=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(session) -> Callable[..., Tuple[User, str]]:
    """Insert a user directly and return it with a valid token."""

    def _make(
        email: str,
        *,
        role: str = "buyer",
        name: str = "Test User",
        password: Optional[str] = "secret1",
    ) -> Tuple[User, str]:
        user = User(
            email=email,
            name=name,
            role=role,
            password_hash=hash_password(password) if password else None,
            google_id=None if password else f"google-{email}",
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user, create_access_token(user)

    return _make
