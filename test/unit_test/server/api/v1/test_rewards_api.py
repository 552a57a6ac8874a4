import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_balance(client: AsyncClient, auth_headers):
    response = await client.get("/api/v1/rewards/balance", headers=auth_headers)
    assert response.json() == {"points": 100, "value": 50.0, "max_points_per_order": 50}


async def test_admin_adjust_and_history(client: AsyncClient, auth_headers, admin_headers, customer):
    response = await client.post(
        f"/api/v1/rewards/users/{customer.id}/adjust",
        json={"points": 20, "reason": "Goodwill"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    transaction = response.json()
    assert transaction["type"] == "admin_adjustment"
    assert transaction["balance"] == 120

    response = await client.get("/api/v1/rewards/history", headers=auth_headers)
    assert [(t["amount"], t["description"]) for t in response.json()] == [(20, "Goodwill")]


async def test_adjust_cannot_go_negative(client: AsyncClient, admin_headers, customer):
    response = await client.post(
        f"/api/v1/rewards/users/{customer.id}/adjust",
        json={"points": -150, "reason": "Correction"},
        headers=admin_headers,
    )
    assert response.status_code == 400


async def test_adjust_unknown_user(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/v1/rewards/users/999/adjust", json={"points": 5, "reason": "x"}, headers=admin_headers
    )
    assert response.status_code == 404


async def test_adjust_is_admin_only(client: AsyncClient, auth_headers, customer):
    response = await client.post(
        f"/api/v1/rewards/users/{customer.id}/adjust", json={"points": 5, "reason": "x"}, headers=auth_headers
    )
    assert response.status_code == 403


async def test_points_earned_from_order(client: AsyncClient, auth_headers, product):
    await client.post(
        "/api/v1/orders",
        json={
            "items": [{"product_id": product.id, "size": "M", "quantity": 2}],
            "payment_method": "cod",
            "shipping": {"name": "Asha", "phone": "98765", "pincode": "560001", "city": "Bengaluru", "state": "KA"},
            "address": "12 MG Road",
        },
        headers=auth_headers,
    )

    response = await client.get("/api/v1/rewards/history", headers=auth_headers)
    assert [(t["type"], t["amount"]) for t in response.json()] == [("earned", 100)]
