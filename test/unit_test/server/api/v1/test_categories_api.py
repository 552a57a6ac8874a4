import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _create(client: AsyncClient, headers, **payload):
    response = await client.post("/api/v1/categories", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_requires_admin(client: AsyncClient, auth_headers):
    response = await client.post("/api/v1/categories", json={"name": "Kids"}, headers=auth_headers)
    assert response.status_code == 403


async def test_create_main_and_subcategory(client: AsyncClient, admin_headers):
    women = await _create(client, admin_headers, name="Women")
    assert women["slug"] == "women"
    assert women["level"] == 0

    tops = await _create(client, admin_headers, name="Crop Tops", parent_id=women["id"])
    assert tops["slug"] == "crop-tops"
    assert tops["level"] == 1

    response = await client.get(f"/api/v1/categories/{women['id']}/subcategories")
    assert [c["id"] for c in response.json()] == [tops["id"]]

    response = await client.get(f"/api/v1/categories/{women['id']}/hierarchy")
    assert response.json()["subcategories"][0]["name"] == "Crop Tops"


async def test_duplicate_name(client: AsyncClient, admin_headers, category):
    response = await client.post("/api/v1/categories", json={"name": category.name}, headers=admin_headers)
    assert response.status_code == 409


async def test_unknown_parent(client: AsyncClient, admin_headers):
    response = await client.post("/api/v1/categories", json={"name": "Orphan", "parent_id": 999}, headers=admin_headers)
    assert response.status_code == 404


async def test_list_main_and_tree(client: AsyncClient, admin_headers, category):
    await _create(client, admin_headers, name="Polos", parent_id=category.id)

    response = await client.get("/api/v1/categories")
    assert len(response.json()) == 2

    response = await client.get("/api/v1/categories/main")
    assert [c["slug"] for c in response.json()] == ["men"]

    response = await client.get("/api/v1/categories/tree")
    tree = response.json()
    assert len(tree) == 1
    assert [c["slug"] for c in tree[0]["subcategories"]] == ["polos"]


async def test_update_renames_slug(client: AsyncClient, admin_headers, category):
    response = await client.put(
        f"/api/v1/categories/{category.id}", json={"name": "Men Classics"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["slug"] == "men-classics"


async def test_cannot_be_own_parent(client: AsyncClient, admin_headers, category):
    response = await client.put(
        f"/api/v1/categories/{category.id}", json={"parent_id": category.id}, headers=admin_headers
    )
    assert response.status_code == 400


async def test_delete_guards(client: AsyncClient, admin_headers, category, product):
    response = await client.delete(f"/api/v1/categories/{category.id}", headers=admin_headers)
    assert response.status_code == 400
    assert "products" in response.json()["detail"]

    empty = await _create(client, admin_headers, name="Empty")
    response = await client.delete(f"/api/v1/categories/{empty['id']}", headers=admin_headers)
    assert response.status_code == 200

    response = await client.get(f"/api/v1/categories/{empty['id']}")
    assert response.status_code == 404
