import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_cart_requires_token(client: AsyncClient):
    response = await client.get("/api/v1/cart")
    assert response.status_code == 401


async def test_empty_cart(client: AsyncClient, auth_headers):
    response = await client.get("/api/v1/cart", headers=auth_headers)
    assert response.json() == {"items": [], "total": 0, "item_count": 0}


async def test_add_catalogue_item_uses_server_price(client: AsyncClient, auth_headers, make_product):
    product = await make_product(price=650)

    response = await client.post(
        "/api/v1/cart/items", json={"product_id": product.id, "size": "L", "quantity": 2}, headers=auth_headers
    )
    assert response.status_code == 201
    cart = response.json()
    assert cart["items"][0]["price"] == 650
    assert cart["total"] == 1300

    response = await client.post(
        "/api/v1/cart/items", json={"product_id": product.id, "size": "L"}, headers=auth_headers
    )
    cart = response.json()
    assert len(cart["items"]) == 1
    assert cart["item_count"] == 3


async def test_add_custom_tshirt(client: AsyncClient, auth_headers):
    payload = {"customization": {"front_design": {"design_image": "upload.png"}}, "size": "M"}

    response = await client.post("/api/v1/cart/items", json=payload, headers=auth_headers)

    item = response.json()["items"][0]
    assert item["is_custom"] is True
    assert item["product_id"] is None
    # blank 499 plus the default design fee
    assert item["price"] == 649


@pytest.mark.parametrize(
    "payload,status",
    [
        ({"size": "M"}, 422),
        ({"product_id": 999, "size": "M"}, 404),
        ({"customization": {}, "size": "M"}, 422),
    ],
)
async def test_add_invalid_items(client: AsyncClient, auth_headers, payload, status):
    response = await client.post("/api/v1/cart/items", json=payload, headers=auth_headers)
    assert response.status_code == status


async def test_size_not_offered(client: AsyncClient, auth_headers, make_product):
    product = await make_product(available_sizes=["S", "M"])

    response = await client.post(
        "/api/v1/cart/items", json={"product_id": product.id, "size": "XXL"}, headers=auth_headers
    )
    assert response.status_code == 400


async def test_update_and_remove(client: AsyncClient, auth_headers, product):
    response = await client.post(
        "/api/v1/cart/items", json={"product_id": product.id, "size": "M"}, headers=auth_headers
    )
    item_id = response.json()["items"][0]["id"]

    response = await client.put(f"/api/v1/cart/items/{item_id}", json={"quantity": 4}, headers=auth_headers)
    assert response.json()["item_count"] == 4

    response = await client.put(f"/api/v1/cart/items/{item_id}", json={"quantity": 0}, headers=auth_headers)
    assert response.json()["items"] == []

    response = await client.delete(f"/api/v1/cart/items/{item_id}", headers=auth_headers)
    assert response.status_code == 404


async def test_other_users_cannot_touch_items(client: AsyncClient, auth_headers, other_headers, product):
    response = await client.post(
        "/api/v1/cart/items", json={"product_id": product.id, "size": "M"}, headers=auth_headers
    )
    item_id = response.json()["items"][0]["id"]

    response = await client.delete(f"/api/v1/cart/items/{item_id}", headers=other_headers)
    assert response.status_code == 404


async def test_clear(client: AsyncClient, auth_headers, product):
    await client.post("/api/v1/cart/items", json={"product_id": product.id, "size": "M"}, headers=auth_headers)

    response = await client.delete("/api/v1/cart", headers=auth_headers)
    assert response.json() == {"message": "Cart cleared"}
    assert (await client.get("/api/v1/cart", headers=auth_headers)).json()["items"] == []


async def test_merge_skips_unorderable_lines(client: AsyncClient, auth_headers, product):
    payload = {
        "items": [
            {"product_id": product.id, "size": "S", "quantity": 2},
            {"product_id": 999, "size": "S"},
        ]
    }

    response = await client.post("/api/v1/cart/merge", json=payload, headers=auth_headers)

    assert response.status_code == 200
    cart = response.json()
    assert len(cart["items"]) == 1
    assert cart["total"] == 1000
