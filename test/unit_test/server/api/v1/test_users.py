from uuid import uuid4

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _create_user(client: AsyncClient, **fields) -> dict:
    response = await client.post("/api/v1/users", json=fields)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_user_defaults_to_player(client: AsyncClient):
    user = await _create_user(client, email="mira@example.com", first_name="Mira")
    assert user["role"] == "player"
    assert user["is_active"] is True


async def test_create_user_with_given_id(client: AsyncClient):
    user_id = str(uuid4())
    user = await _create_user(client, id=user_id, email="dm@example.com", role="dm")
    assert user["id"] == user_id
    assert user["role"] == "dm"

    response = await client.post("/api/v1/users", json={"id": user_id})
    assert response.status_code == 409


async def test_list_and_get_users(client: AsyncClient):
    dm = await _create_user(client, email="dm@example.com", role="dm")
    player = await _create_user(client, email="player@example.com")

    response = await client.get("/api/v1/users")
    roles = {u["id"]: u["role"] for u in response.json()}
    assert roles == {dm["id"]: "dm", player["id"]: "player"}

    response = await client.get(f"/api/v1/users/{dm['id']}")
    assert response.json()["email"] == "dm@example.com"

    assert (await client.get(f"/api/v1/users/{uuid4()}")).status_code == 404


async def test_change_role(client: AsyncClient):
    user = await _create_user(client, email="player@example.com")
    response = await client.put(f"/api/v1/users/{user['id']}/role", json={"role": "dm"})
    assert response.status_code == 200
    assert response.json()["role"] == "dm"

    response = await client.get(f"/api/v1/users/{user['id']}")
    assert response.json()["role"] == "dm"

    response = await client.put(f"/api/v1/users/{user['id']}/role", json={"role": "overlord"})
    assert response.status_code == 422


async def test_deactivate_and_reactivate(client: AsyncClient):
    dm = await _create_user(client, role="dm")
    player = await _create_user(client)

    response = await client.post(f"/api/v1/users/{player['id']}/deactivate", json={"acting_user_id": dm["id"]})
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    response = await client.post(f"/api/v1/users/{player['id']}/reactivate")
    assert response.status_code == 200
    assert response.json()["is_active"] is True


async def test_cannot_deactivate_self(client: AsyncClient):
    dm = await _create_user(client, role="dm")
    response = await client.post(f"/api/v1/users/{dm['id']}/deactivate", json={"acting_user_id": dm["id"]})
    assert response.status_code == 400
    assert response.json()["detail"] == "You cannot deactivate your own account"


async def test_deactivate_unknown_user(client: AsyncClient):
    response = await client.post(f"/api/v1/users/{uuid4()}/deactivate", json={})
    assert response.status_code == 404


async def test_invitations(client: AsyncClient):
    response = await client.post("/api/v1/invitations", json={"email": "New.Player@Example.com"})
    assert response.status_code == 201
    invitation = response.json()
    assert invitation["email"] == "new.player@example.com"
    assert invitation["role"] == "player"
    assert invitation["accepted_at"] is None

    response = await client.post("/api/v1/invitations", json={"email": "new.player@example.com", "role": "player"})
    assert response.status_code == 409

    response = await client.post("/api/v1/invitations", json={"email": "new.player@example.com", "role": "dm"})
    assert response.status_code == 201

    response = await client.get("/api/v1/invitations")
    assert len(response.json()) == 2

    assert (await client.delete(f"/api/v1/invitations/{invitation['id']}")).status_code == 204
    assert (await client.delete(f"/api/v1/invitations/{invitation['id']}")).status_code == 404
    assert len((await client.get("/api/v1/invitations")).json()) == 1


async def test_invitation_rejects_bad_email(client: AsyncClient):
    response = await client.post("/api/v1/invitations", json={"email": "not-an-email"})
    assert response.status_code == 422
