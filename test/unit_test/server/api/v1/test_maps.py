from uuid import uuid4

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_create_map(created_map: dict):
    assert created_map["name"] == "Ashen Peaks"
    assert created_map["width"] == 2000
    assert created_map["height"] == 1000
    assert created_map["scale_factor"] == 0.5
    assert created_map["scale_unit"] == "miles"
    assert created_map["is_active"] is True
    assert created_map["extra_metadata"] == {}


async def test_create_map_rejects_non_positive_dimensions(client: AsyncClient):
    response = await client.post(
        "/api/v1/maps",
        json={"name": "Broken", "image_url": "http://mock-storage/x.png", "image_path": "x.png", "width": 0, "height": 10},
    )
    assert response.status_code == 422


async def test_get_map(client: AsyncClient, created_map: dict):
    response = await client.get(f"/api/v1/maps/{created_map['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == created_map["id"]


async def test_get_map_not_found(client: AsyncClient):
    response = await client.get(f"/api/v1/maps/{uuid4()}")
    assert response.status_code == 404


async def test_list_maps_hides_inactive(client: AsyncClient, created_map: dict):
    response = await client.patch(f"/api/v1/maps/{created_map['id']}", json={"is_active": False})
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    response = await client.get("/api/v1/maps")
    assert response.status_code == 200
    assert response.json() == []

    response = await client.get("/api/v1/maps", params={"active_only": False})
    assert [m["id"] for m in response.json()] == [created_map["id"]]


async def test_update_map_keeps_unset_fields(client: AsyncClient, created_map: dict):
    response = await client.patch(f"/api/v1/maps/{created_map['id']}", json={"description": "Volcanic range"})
    assert response.status_code == 200
    data = response.json()
    assert data["description"] == "Volcanic range"
    assert data["name"] == "Ashen Peaks"
    assert data["scale_factor"] == 0.5


async def test_update_map_not_found(client: AsyncClient):
    response = await client.patch(f"/api/v1/maps/{uuid4()}", json={"name": "Nowhere"})
    assert response.status_code == 404


async def test_delete_map(client: AsyncClient, created_map: dict):
    response = await client.delete(f"/api/v1/maps/{created_map['id']}")
    assert response.status_code == 204

    response = await client.get(f"/api/v1/maps/{created_map['id']}")
    assert response.status_code == 404

    response = await client.delete(f"/api/v1/maps/{created_map['id']}")
    assert response.status_code == 404


@pytest.mark.parametrize("field", ["name", "image_url", "width"])
async def test_update_map_rejects_null_for_required_field(client: AsyncClient, created_map: dict, field: str):
    response = await client.patch(f"/api/v1/maps/{created_map['id']}", json={field: None})
    assert response.status_code == 422

    response = await client.get(f"/api/v1/maps/{created_map['id']}")
    assert response.json()["name"] == "Ashen Peaks"


async def test_update_map_allows_clearing_optional_field(client: AsyncClient, created_map: dict):
    response = await client.patch(f"/api/v1/maps/{created_map['id']}", json={"scale_factor": None})
    assert response.status_code == 200
    assert response.json()["scale_factor"] is None
