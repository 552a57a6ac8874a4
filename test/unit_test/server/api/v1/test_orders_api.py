import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

SHIPPING = {"name": "Asha Rao", "phone": "9876543210", "pincode": "560001", "city": "Bengaluru", "state": "KA"}


async def _place(client: AsyncClient, headers, items, **fields):
    payload = {"items": items, "shipping": SHIPPING, "address": "12 MG Road", "payment_method": "cod"}
    payload.update(fields)
    return await client.post("/api/v1/orders", json=payload, headers=headers)


async def test_place_cod_order(client: AsyncClient, session, auth_headers, customer, make_product):
    product = await make_product(price=500, stock=5)

    response = await _place(client, auth_headers, [{"product_id": product.id, "size": "M", "quantity": 3}])

    assert response.status_code == 201, response.text
    order = response.json()
    assert order["status"] == "Received"
    assert order["payment_status"] == "pending"
    assert order["amount"] == 1350
    assert order["reward_points_earned"] == 135
    assert order["items"][0]["count"] == 3
    assert order["shipping"]["city"] == "Bengaluru"

    await session.refresh(product)
    assert product.stock_m == 2


async def test_online_order_requires_payment_confirmation(client: AsyncClient, auth_headers, product):
    response = await _place(
        client, auth_headers, [{"product_id": product.id, "size": "M"}], payment_method="razorpay"
    )
    assert response.status_code == 422


async def test_insufficient_stock(client: AsyncClient, auth_headers, make_product):
    product = await make_product(stock=1)

    response = await _place(client, auth_headers, [{"product_id": product.id, "size": "S", "quantity": 2}])

    assert response.status_code == 409
    assert response.json()["error_type"] == "InsufficientStockError"


async def test_read_access(client: AsyncClient, auth_headers, other_headers, admin_headers, product):
    order = (await _place(client, auth_headers, [{"product_id": product.id, "size": "M"}])).json()

    assert (await client.get(f"/api/v1/orders/{order['id']}", headers=auth_headers)).status_code == 200
    assert (await client.get(f"/api/v1/orders/{order['id']}", headers=other_headers)).status_code == 403
    assert (await client.get(f"/api/v1/orders/{order['id']}", headers=admin_headers)).status_code == 200
    assert (await client.get("/api/v1/orders/999", headers=admin_headers)).status_code == 404


async def test_my_orders_and_breakdown(client: AsyncClient, auth_headers, other_headers, product):
    order = (await _place(client, auth_headers, [{"product_id": product.id, "size": "M", "quantity": 3}])).json()

    response = await client.get("/api/v1/orders/mine", headers=auth_headers)
    assert [o["id"] for o in response.json()] == [order["id"]]
    assert (await client.get("/api/v1/orders/mine", headers=other_headers)).json() == []

    response = await client.get(f"/api/v1/orders/{order['id']}/breakdown", headers=auth_headers)
    breakdown = response.json()
    assert breakdown["subtotal"] == 1500
    assert breakdown["quantity_discount"] == 150
    assert breakdown["total_savings"] == 150
    assert breakdown["final_amount"] == 1350
    assert breakdown["item_count"] == 3


async def test_admin_listing(client: AsyncClient, auth_headers, admin_headers, product):
    await _place(client, auth_headers, [{"product_id": product.id, "size": "M"}])

    assert (await client.get("/api/v1/orders", headers=auth_headers)).status_code == 403

    response = await client.get("/api/v1/orders", params={"status": "Received"}, headers=admin_headers)
    assert response.json()["pagination"]["total"] == 1

    response = await client.get("/api/v1/orders", params={"status": "Shipped"}, headers=admin_headers)
    assert response.json()["orders"] == []


async def test_statuses(client: AsyncClient):
    response = await client.get("/api/v1/orders/statuses")
    assert response.json() == ["Received", "Processing", "Shipped", "Delivered", "Cancelled"]


async def test_status_workflow(client: AsyncClient, auth_headers, admin_headers, product):
    order = (await _place(client, auth_headers, [{"product_id": product.id, "size": "M"}])).json()
    url = f"/api/v1/orders/{order['id']}/status"

    response = await client.put(url, json={"status": "Shipped"}, headers=auth_headers)
    assert response.status_code == 403

    response = await client.put(url, json={"status": "Delivered"}, headers=admin_headers)
    assert response.json()["status"] == "Delivered"

    response = await client.put(url, json={"status": "Cancelled"}, headers=admin_headers)
    assert response.status_code == 400


async def test_cancel_restocks(client: AsyncClient, session, auth_headers, admin_headers, make_product):
    product = await make_product(stock=5)
    order = (await _place(client, auth_headers, [{"product_id": product.id, "size": "L", "quantity": 2}])).json()

    response = await client.put(
        f"/api/v1/orders/{order['id']}/status", json={"status": "Cancelled"}, headers=admin_headers
    )

    assert response.json()["status"] == "Cancelled"
    await session.refresh(product)
    assert product.stock_l == 5
    assert product.sold == 0


async def test_update_shipping(client: AsyncClient, auth_headers, admin_headers, product):
    order = (await _place(client, auth_headers, [{"product_id": product.id, "size": "M"}])).json()

    response = await client.put(
        f"/api/v1/orders/{order['id']}/shipping",
        json={"courier": "Delhivery", "tracking_id": "TRK123"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["shipping"]["courier"] == "Delhivery"
    assert response.json()["shipping"]["tracking_id"] == "TRK123"
    assert response.json()["shipping"]["city"] == "Bengaluru"
