import pytest
import pytest_asyncio
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def design(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/v1/designs",
        json={
            "name": "Sunset Wave",
            "image_url": "https://cdn.example.com/sunset.png",
            "tags": ["Retro", " beach "],
            "width": 300,
            "height": 200,
            "is_featured": True,
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_derives_slug_and_ratio(design):
    assert design["slug"] == "sunset-wave"
    assert design["aspect_ratio"] == 1.5
    assert design["tags"] == ["retro", "beach"]
    assert design["placements"] == ["front"]


async def test_duplicate_names_get_unique_slugs(client: AsyncClient, admin_headers, design):
    response = await client.post(
        "/api/v1/designs", json={"name": "Sunset Wave", "image_url": "x.png"}, headers=admin_headers
    )
    assert response.json()["slug"] == "sunset-wave-2"


async def test_create_requires_admin(client: AsyncClient, auth_headers):
    response = await client.post("/api/v1/designs", json={"name": "X", "image_url": "x.png"}, headers=auth_headers)
    assert response.status_code == 403


async def test_listings(client: AsyncClient, design):
    response = await client.get("/api/v1/designs", params={"tag": "retro"})
    assert [d["id"] for d in response.json()["designs"]] == [design["id"]]

    response = await client.get("/api/v1/designs/tag/unknown")
    assert response.json()["designs"] == []

    response = await client.get("/api/v1/designs/featured")
    assert [d["id"] for d in response.json()] == [design["id"]]

    response = await client.get("/api/v1/designs/popular")
    assert len(response.json()) == 1

    response = await client.get("/api/v1/designs/tags")
    assert response.json() == ["beach", "retro"]

    response = await client.get("/api/v1/designs/random")
    assert response.json()["id"] == design["id"]


async def test_random_without_designs(client: AsyncClient):
    response = await client.get("/api/v1/designs/random")
    assert response.status_code == 404


async def test_view_counts(client: AsyncClient, design):
    await client.get(f"/api/v1/designs/{design['id']}")
    response = await client.get(f"/api/v1/designs/{design['id']}")
    assert response.json()["views"] == 2


async def test_likes_never_negative(client: AsyncClient, design):
    response = await client.post(f"/api/v1/designs/{design['id']}/like", json={"like": True})
    assert response.json()["likes"] == 1

    await client.post(f"/api/v1/designs/{design['id']}/like", json={"like": False})
    response = await client.post(f"/api/v1/designs/{design['id']}/like", json={"like": False})
    assert response.json()["likes"] == 0


async def test_update_and_delete(client: AsyncClient, admin_headers, design):
    response = await client.put(
        f"/api/v1/designs/{design['id']}", json={"name": "Night Wave"}, headers=admin_headers
    )
    assert response.json()["slug"] == "night-wave"

    response = await client.delete(f"/api/v1/designs/{design['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert (await client.get(f"/api/v1/designs/{design['id']}")).status_code == 404
