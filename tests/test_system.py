"""Tests for system endpoints, route assembly and the catch-all error handler."""

from __future__ import annotations

from fastapi.testclient import TestClient

from thriftstore import __version__
from thriftstore.app import app, create_app


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_config_reports_login_options(client):
    body = client.get("/config").json()

    assert body["version"] == __version__
    assert body["google_login"] is True


def test_every_router_is_mounted():
    paths = {route.path for route in app.routes}

    for path in (
        "/health",
        "/auth/register",
        "/auth/google/callback",
        "/users/become-seller",
        "/products/{product_id}",
        "/cart",
        "/orders/{order_id}/payment",
    ):
        assert path in paths


def test_unexpected_error_is_hidden_behind_generic_500():
    broken = create_app()

    @broken.get("/explode")
    def explode():
        raise RuntimeError("database password is hunter2")

    client = TestClient(broken, raise_server_exceptions=False)

    response = client.get("/explode")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "Internal server error",
        "error": "internal",
    }
    assert "hunter2" not in response.text
    assert "Traceback" not in response.text
