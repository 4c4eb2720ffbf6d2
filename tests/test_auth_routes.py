"""End-to-end tests for password registration, login and /auth/me."""

from __future__ import annotations

from sqlmodel import select

from thriftstore.models import User
from thriftstore.repositories import UserRepository
from thriftstore.services import auth as auth_service
from thriftstore.services.security import decode_access_token


def _register(client, **overrides):
    body = {"name": "A", "email": "a@x.com", "password": "secret1"}
    body.update(overrides)
    return client.post("/auth/register", json=body)


def test_register_login_scenario(client, session):
    registered = _register(client)
    assert registered.status_code == 201
    data = registered.json()
    assert data["success"] is True
    assert data["user"]["role"] == "buyer"
    assert data["user"]["email"] == "a@x.com"
    registered_claims = decode_access_token(data["token"])
    assert registered_claims["role"] == "buyer"

    stored = session.exec(select(User).where(User.email == "a@x.com")).one()
    assert registered_claims["id"] == str(stored.id)
    assert stored.password_hash and stored.password_hash != "secret1"

    wrong = client.post("/auth/login", json={"email": "a@x.com", "password": "wrong"})
    assert wrong.status_code == 401
    assert wrong.json()["error"] == "invalid_credentials"

    ok = client.post("/auth/login", json={"email": "a@x.com", "password": "secret1"})
    assert ok.status_code == 200
    assert decode_access_token(ok.json()["token"])["id"] == registered_claims["id"]


def test_duplicate_registration_conflicts_without_second_record(client, session):
    assert _register(client).status_code == 201

    again = _register(client, name="Other", email="A@X.com ")

    assert again.status_code == 409
    assert again.json() == {
        "success": False,
        "message": "User already exists with this email",
        "error": "conflict",
    }
    assert len(session.exec(select(User)).all()) == 1


def test_short_password_fails_before_any_write(client, session):
    response = _register(client, password="12345")

    assert response.status_code == 400
    assert response.json()["error"] == "validation"
    assert "at least 6" in response.json()["message"]
    assert session.exec(select(User)).all() == []


def test_missing_fields_are_validation_errors(client):
    assert _register(client, name="").status_code == 400
    assert _register(client, email=None).status_code == 400
    assert client.post("/auth/register", json={}).status_code == 400


def test_login_errors_are_indistinguishable(client):
    _register(client)

    wrong_password = client.post("/auth/login", json={"email": "a@x.com", "password": "nope!!"})
    unknown_email = client.post("/auth/login", json={"email": "b@x.com", "password": "nope!!"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


def test_login_rejects_google_only_account(client, make_user):
    make_user("g@x.com", password=None)

    response = client.post("/auth/login", json={"email": "g@x.com", "password": "anything"})

    assert response.status_code == 401
    assert response.json()["error"] == "invalid_credentials"


def test_me_returns_stored_profile(client):
    token = _register(client).json()["token"]

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == "a@x.com"
    assert user["has_password"] is True
    assert user["google_linked"] is False


def test_me_requires_bearer_token(client):
    missing = client.get("/auth/me")
    wrong_scheme = client.get("/auth/me", headers={"Authorization": "Basic abc"})
    garbage = client.get("/auth/me", headers={"Authorization": "Bearer abc.def.ghi"})

    for response in (missing, wrong_scheme, garbage):
        assert response.status_code == 401
        assert response.json()["success"] is False
        assert response.json()["error"] == "unauthenticated"


def test_me_for_deleted_account_is_not_found(client, make_user, session):
    user, token = make_user("gone@x.com")
    session.delete(user)
    session.commit()

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 404


def test_register_race_resolved_by_unique_email(client, session, monkeypatch):
    # both requests pass the existence check; the table decides
    monkeypatch.setattr(UserRepository, "get_by_email", lambda self, email: None)

    first = _register(client)
    second = _register(client, name="Other")

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json() == {
        "success": False,
        "message": "User already exists with this email",
        "error": "conflict",
    }
    assert len(session.exec(select(User)).all()) == 1


def test_unknown_email_still_checks_a_password_hash(client, monkeypatch):
    checked = []
    real_verify = auth_service.verify_password

    def spy(password, password_hash):
        checked.append(password_hash)
        return real_verify(password, password_hash)

    monkeypatch.setattr(auth_service, "verify_password", spy)

    response = client.post("/auth/login", json={"email": "ghost@x.com", "password": "secret1"})

    assert response.status_code == 401
    assert len(checked) == 1
    assert checked[0].startswith("$2")


def test_dummy_hash_never_logs_in_google_only_account(client, make_user, monkeypatch):
    make_user("g@x.com", password=None)
    monkeypatch.setattr(auth_service, "verify_password", lambda password, password_hash: True)

    response = client.post("/auth/login", json={"email": "g@x.com", "password": "anything"})

    assert response.status_code == 401
