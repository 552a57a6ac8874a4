from datetime import timedelta

import pytest
from httpx import AsyncClient

from teestore.core.database.base import utc_now

pytestmark = pytest.mark.asyncio


def _coupon(code: str, **fields) -> dict:
    payload = {
        "code": code,
        "discount_type": "fixed",
        "discount_value": 100,
        "valid_until": (utc_now() + timedelta(days=7)).isoformat(),
    }
    payload.update(fields)
    return payload


async def _create(client: AsyncClient, headers, payload) -> dict:
    response = await client.post("/api/v1/coupons", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_normalizes_code(client: AsyncClient, admin_headers):
    coupon = await _create(client, admin_headers, _coupon(" save10 "))
    assert coupon["code"] == "SAVE10"
    assert coupon["usage_count"] == 0

    response = await client.post("/api/v1/coupons", json=_coupon("SAVE10"), headers=admin_headers)
    assert response.status_code == 409


async def test_percentage_over_100_rejected(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/v1/coupons", json=_coupon("HUGE", discount_type="percentage", discount_value=150), headers=admin_headers
    )
    assert response.status_code == 422


async def test_management_is_admin_only(client: AsyncClient, auth_headers):
    assert (await client.get("/api/v1/coupons", headers=auth_headers)).status_code == 403
    assert (await client.post("/api/v1/coupons", json=_coupon("X"), headers=auth_headers)).status_code == 403


async def test_validate(client: AsyncClient, admin_headers):
    await _create(
        client, admin_headers, _coupon("TENOFF", discount_type="percentage", discount_value=10, max_discount=50)
    )

    response = await client.post("/api/v1/coupons/validate", json={"code": "tenoff", "subtotal": 1000})
    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is True
    assert data["coupon"]["discount"] == 50


async def test_validate_minimum_and_unknown(client: AsyncClient, admin_headers):
    await _create(client, admin_headers, _coupon("BIG", minimum_purchase=2000))

    response = await client.post("/api/v1/coupons/validate", json={"code": "BIG", "subtotal": 1000})
    assert response.status_code == 400
    assert "Minimum purchase" in response.json()["detail"]

    response = await client.post("/api/v1/coupons/validate", json={"code": "NOPE", "subtotal": 1000})
    assert response.status_code == 404


async def test_validate_expired(client: AsyncClient, admin_headers):
    await _create(
        client,
        admin_headers,
        _coupon(
            "OLD",
            valid_from=(utc_now() - timedelta(days=10)).isoformat(),
            valid_until=(utc_now() - timedelta(days=1)).isoformat(),
        ),
    )

    response = await client.post("/api/v1/coupons/validate", json={"code": "OLD", "subtotal": 1000})
    assert response.status_code == 400


async def test_active_lists_promotional_only(client: AsyncClient, admin_headers):
    await _create(client, admin_headers, _coupon("PROMO", display_type="promotional", banner_text="Sale"))
    await _create(client, admin_headers, _coupon("SECRET"))

    response = await client.get("/api/v1/coupons/active")
    coupons = response.json()
    assert [c["code"] for c in coupons] == ["PROMO"]
    assert "usage_count" not in coupons[0]


async def test_auto_apply_picks_highest_priority(client: AsyncClient, admin_headers, auth_headers):
    await _create(client, admin_headers, _coupon("LOW", display_type="auto-apply", auto_apply_priority=1, discount_value=300))
    await _create(client, admin_headers, _coupon("HIGH", display_type="auto-apply", auto_apply_priority=5))

    response = await client.post("/api/v1/coupons/auto-apply", json={"subtotal": 1000}, headers=auth_headers)
    assert response.json()["coupon"]["code"] == "HIGH"


async def test_auto_apply_none(client: AsyncClient):
    response = await client.post("/api/v1/coupons/auto-apply", json={"subtotal": 1000})
    assert response.status_code == 200
    assert response.json() is None


async def test_update_and_delete(client: AsyncClient, admin_headers):
    coupon = await _create(client, admin_headers, _coupon("EDIT"))

    response = await client.put(f"/api/v1/coupons/{coupon['id']}", json={"is_active": False}, headers=admin_headers)
    assert response.json()["is_active"] is False

    response = await client.post("/api/v1/coupons/validate", json={"code": "EDIT", "subtotal": 1000})
    assert response.status_code == 400

    response = await client.delete(f"/api/v1/coupons/{coupon['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert (await client.get(f"/api/v1/coupons/{coupon['id']}", headers=admin_headers)).status_code == 404
