"""Tests for product listings."""

from __future__ import annotations

import pytest


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _listing(**overrides) -> dict:
    body = {
        "name": "Denim jacket",
        "description": "Barely worn, size M",
        "price": 25.0,
        "category": "clothing",
        "gender": "unisex",
        "condition": "like-new",
        "images": ["https://img.test/jacket.jpg"],
        "location": "Pune",
    }
    body.update(overrides)
    return body


@pytest.fixture
def seller(make_user):
    return make_user("seller@x.com", role="seller", name="Seller")


def _create(client, token, **overrides):
    response = client.post("/products", json=_listing(**overrides), headers=_auth(token))
    assert response.status_code == 201, response.text
    return response.json()["product"]


def test_buyer_cannot_list_products(client, make_user):
    _, token = make_user("a@x.com")

    response = client.post("/products", json=_listing(), headers=_auth(token))

    assert response.status_code == 403
    assert response.json()["message"] == "Access denied - Seller privileges required"


def test_seller_creates_listing(client, seller):
    user, token = seller

    product = _create(client, token)

    assert product["seller_id"] == str(user.id)
    assert product["status"] == "available"
    assert product["images"] == ["https://img.test/jacket.jpg"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"price": -1},
        {"category": "cars"},
        {"images": []},
        {"productData": "{\"name\": \"nested\"}"},
    ],
)
def test_invalid_listing_bodies_are_rejected(client, seller, overrides):
    _, token = seller

    response = client.post("/products", json=_listing(**overrides), headers=_auth(token))

    assert response.status_code == 400
    assert response.json()["error"] == "validation"


def test_listing_filters_and_sorting(client, seller):
    _, token = seller
    _create(client, token, name="Cheap book", category="books", price=3)
    _create(client, token, name="Lamp", category="home", price=15, description="Brass desk lamp")
    _create(client, token, name="Blazer", price=40)

    books = client.get("/products", params={"category": "books"}).json()
    assert [p["name"] for p in books["products"]] == ["Cheap book"]
    assert books["total_products"] == 1

    by_price = client.get("/products", params={"sort": "price-desc"}).json()["products"]
    assert [p["price"] for p in by_price] == [40, 15, 3]

    ranged = client.get("/products", params={"min_price": 10, "max_price": 20}).json()
    assert [p["name"] for p in ranged["products"]] == ["Lamp"]

    searched = client.get("/products", params={"search": "BRASS"}).json()
    assert [p["name"] for p in searched["products"]] == ["Lamp"]


def test_listing_rejects_unknown_sort(client):
    assert client.get("/products", params={"sort": "random"}).status_code == 400


def test_get_product_counts_views(client, seller):
    _, token = seller
    product = _create(client, token)

    client.get(f"/products/{product['id']}")
    second = client.get(f"/products/{product['id']}").json()["product"]

    assert second["views"] == 2
    assert client.get("/products/9999").status_code == 404


def test_only_owner_can_update(client, seller, make_user):
    _, token = seller
    _, other_token = make_user("other@x.com", role="seller")
    product = _create(client, token)

    forbidden = client.put(
        f"/products/{product['id']}", json={"price": 1}, headers=_auth(other_token)
    )
    assert forbidden.status_code == 403

    updated = client.put(
        f"/products/{product['id']}",
        json={"price": 20, "status": "reserved"},
        headers=_auth(token),
    )
    assert updated.status_code == 200
    assert updated.json()["product"]["price"] == 20
    assert updated.json()["product"]["status"] == "reserved"


def test_update_rejects_unknown_fields(client, seller):
    _, token = seller
    product = _create(client, token)

    response = client.put(
        f"/products/{product['id']}", json={"seller_id": "someone"}, headers=_auth(token)
    )

    assert response.status_code == 400


def test_delete_by_owner_or_admin(client, seller, make_user):
    _, token = seller
    _, buyer_token = make_user("a@x.com")
    _, admin_token = make_user("root@x.com", role="admin")
    first = _create(client, token)
    second = _create(client, token, name="Scarf")

    assert client.delete(f"/products/{first['id']}", headers=_auth(buyer_token)).status_code == 403
    assert client.delete(f"/products/{first['id']}", headers=_auth(token)).status_code == 200
    assert client.delete(f"/products/{second['id']}", headers=_auth(admin_token)).status_code == 200
    assert client.get("/products").json()["products"] == []


def test_seller_listing_only_shows_own_products(client, seller, make_user):
    _, token = seller
    _, other_token = make_user("other@x.com", role="seller")
    _create(client, token, name="Mine")
    _create(client, other_token, name="Theirs")

    mine = client.get("/products/seller/products", headers=_auth(token)).json()["products"]

    assert [p["name"] for p in mine] == ["Mine"]
