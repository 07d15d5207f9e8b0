import uuid

import pytest

from storefront_cart.utils.settings import SESSION_COOKIE_NAME


@pytest.fixture
def product(make_product):
    return make_product(stock=10, price=1500, images=[{"url": "https://cdn.example.com/p.jpg", "isThumbnail": True}])


def _payload(product, quantity, **selections):
    return {
        "product": {
            "productId": product.id,
            "productGroupId": product.product_group_id,
            "name": product.name,
            "sku": product.sku,
            "price": product.price,
            "stock": product.stock,
            "thumbnailUrl": None,
            "variantSelections": selections,
        },
        "quantity": quantity,
    }


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "database": "ok"}


def test_guest_cart_flow_sets_session_cookie(client, product):
    resp = client.post("/api/cart", json=_payload(product, 3, color="Black"))
    assert resp.status_code == 201
    assert resp.json()["success"] is True
    assert SESSION_COOKIE_NAME in resp.cookies
    session_id = resp.cookies[SESSION_COOKIE_NAME]

    body = client.get("/api/cart").json()
    data = body["data"]
    assert data["sessionId"] == session_id
    assert data["total"] == 4500
    assert data["itemCount"] == 3
    [item] = data["items"]
    assert item["productId"] == product.id
    assert item["variantSelections"] == {"color": "Black"}
    assert item["thumbnailUrl"] == "https://cdn.example.com/p.jpg"

    resp = client.patch(f"/api/cart/{item['id']}", json={"quantity": 5})
    assert resp.status_code == 200
    assert client.get("/api/cart").json()["data"]["items"][0]["quantity"] == 5

    resp = client.delete(f"/api/cart/{item['id']}")
    assert resp.status_code == 200
    assert client.get("/api/cart").json()["data"]["items"] == []


def test_stock_ceiling_maps_to_validation_envelope(client, product):
    client.post("/api/cart", json=_payload(product, 3))

    resp = client.post("/api/cart", json=_payload(product, 8))

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["type"] == "VALIDATION_ERROR"
    assert client.get("/api/cart").json()["data"]["items"][0]["quantity"] == 3


def test_zero_quantity_add_is_rejected(client, product):
    resp = client.post("/api/cart", json=_payload(product, 0))
    assert resp.status_code == 400
    assert resp.json()["error"]["type"] == "VALIDATION_ERROR"


def test_malformed_body_is_a_validation_error(client):
    resp = client.post("/api/cart", json={"quantity": 1})
    assert resp.status_code == 400
    assert resp.json()["error"]["type"] == "VALIDATION_ERROR"


def test_unknown_item_is_not_found(client, product):
    client.post("/api/cart", json=_payload(product, 1))

    resp = client.delete("/api/cart/does-not-exist")

    assert resp.status_code == 404
    assert resp.json()["error"]["type"] == "NOT_FOUND_ERROR"


def test_clear_cart(client, product):
    client.post("/api/cart", json=_payload(product, 2))

    resp = client.delete("/api/cart")

    assert resp.status_code == 200
    assert client.get("/api/cart").json()["data"]["items"] == []


def test_user_cart_uses_header_and_sets_no_session(client, product):
    headers = {"X-User-Id": str(uuid.uuid4())}
    client.post("/api/cart", json=_payload(product, 1), headers=headers)

    data = client.get("/api/cart", headers=headers).json()["data"]
    assert data["sessionId"] is None
    assert len(data["items"]) == 1
    # the anonymous view of the same client is a different cart
    assert client.get("/api/cart").json()["data"]["items"] == []


def test_invalid_user_header_is_forbidden(client):
    resp = client.get("/api/cart", headers={"X-User-Id": "not-a-uuid"})
    assert resp.status_code == 403
    assert resp.json()["error"]["type"] == "AUTHORIZATION_ERROR"


def test_claim_requires_authenticated_user(client):
    resp = client.post("/api/cart/claim", json={"guestId": "some-guest-session"})
    assert resp.status_code == 403


def test_claim_merges_guest_cart_into_user_cart(client, product, make_product):
    other = make_product(stock=5)
    client.post("/api/cart", json=_payload(product, 2))
    guest_id = client.cookies[SESSION_COOKIE_NAME]

    headers = {"X-User-Id": str(uuid.uuid4())}
    client.post("/api/cart", json=_payload(product, 5), headers=headers)
    client.post("/api/cart", json=_payload(other, 1), headers=headers)

    resp = client.post("/api/cart/claim", json={"guestId": guest_id}, headers=headers)
    assert resp.status_code == 200

    items = client.get("/api/cart", headers=headers).json()["data"]["items"]
    assert {i["productId"]: i["quantity"] for i in items} == {product.id: 7, other.id: 1}
    assert client.get("/api/cart/session").json()["data"]["hasCart"] is False


def test_claim_falls_back_to_session_cookie(client, product):
    client.post("/api/cart", json=_payload(product, 2))
    headers = {"X-User-Id": str(uuid.uuid4())}

    resp = client.post("/api/cart/claim", json={}, headers=headers)

    assert resp.status_code == 200
    items = client.get("/api/cart", headers=headers).json()["data"]["items"]
    assert items[0]["quantity"] == 2


def test_validate_endpoint_reports_drift(client, product):
    client.post("/api/cart", json=_payload(product, 4))
    items = client.get("/api/cart").json()["data"]["items"]
    items[0]["price"] = 999

    resp = client.post("/api/cart/validate", json={"items": items})

    assert resp.status_code == 200
    result = resp.json()["data"]
    assert result["valid"] is False
    [error] = result["errors"]
    assert error["type"] == "PRICE_CHANGED"
    assert error["suggestedAction"] == "UPDATE_PRICE"
    assert error["currentPrice"] == 1500


def test_session_endpoint(client, product):
    assert client.get("/api/cart/session").json()["data"]["hasCart"] is False
    client.post("/api/cart", json=_payload(product, 1))
    assert client.get("/api/cart/session").json()["data"]["hasCart"] is True



def test_claim_without_guest_id_or_cookie_is_rejected(client):
    headers = {"X-User-Id": str(uuid.uuid4())}

    resp = client.post("/api/cart/claim", json={}, headers=headers)

    assert resp.status_code == 400
    body = resp.json()
    assert body["error"]["type"] == "VALIDATION_ERROR"
    assert body["message"] == "Guest ID required"


def test_claim_rejects_user_shaped_guest_id(client):
    headers = {"X-User-Id": str(uuid.uuid4())}

    resp = client.post("/api/cart/claim", json={"guestId": str(uuid.uuid4())}, headers=headers)

    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid guest ID"
