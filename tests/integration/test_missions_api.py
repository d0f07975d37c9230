"""Integration tests: trait and mission endpoints."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import AsyncClient


@pytest_asyncio.fixture
async def guest_id(client: AsyncClient) -> str:
    response = await client.post("/api/v1/users", json={"name": "Gina"})
    return response.json()["id"]


class TestTraitsAPI:
    @pytest.mark.asyncio
    async def test_list_traits(self, client: AsyncClient):
        response = await client.get("/api/v1/traits")
        assert response.status_code == 200
        assert len(response.json()) == 8

    @pytest.mark.asyncio
    async def test_trait_missions(self, client: AsyncClient):
        response = await client.get("/api/v1/traits/party_starter/missions")
        assert response.status_code == 200
        assert [m["verification"] for m in response.json()] == ["witness", "witness", "honor"]

    @pytest.mark.asyncio
    async def test_unknown_trait_missions(self, client: AsyncClient):
        response = await client.get("/api/v1/traits/pirate/missions")
        assert response.status_code == 404


class TestMissionsAPI:
    @pytest.mark.asyncio
    async def test_choose_trait(self, client: AsyncClient, guest_id: str):
        response = await client.post(f"/api/v1/users/{guest_id}/trait", json={"trait_id": "social_butterfly"})
        assert response.status_code == 200
        assert len(response.json()) == 3

    @pytest.mark.asyncio
    async def test_choose_unknown_trait(self, client: AsyncClient, guest_id: str):
        response = await client.post(f"/api/v1/users/{guest_id}/trait", json={"trait_id": "pirate"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_honor_mission_flow(self, client: AsyncClient, guest_id: str):
        missions = (await client.post(f"/api/v1/users/{guest_id}/trait", json={"trait_id": "adventurer"})).json()
        honor = next(m for m in missions if m["verification"] == "honor")

        response = await client.post(f"/api/v1/users/{guest_id}/missions/{honor['id']}/complete")
        assert response.status_code == 200
        data = response.json()
        assert data["paid"] is True
        assert data["balance"] == 10 + honor["reward"]
        assert data["mission"]["status"] == "completed"

        response = await client.post(f"/api/v1/users/{guest_id}/missions/{honor['id']}/complete")
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_confirmation_flow(self, client: AsyncClient, guest_id: str):
        missions = (await client.post(f"/api/v1/users/{guest_id}/trait", json={"trait_id": "adventurer"})).json()
        witness = next(m for m in missions if m["verification"] == "witness")

        response = await client.post(f"/api/v1/users/{guest_id}/missions/{witness['id']}/complete")
        assert response.json()["paid"] is False
        assert response.json()["mission"]["status"] == "pending_confirmation"

        response = await client.post(f"/api/v1/missions/{witness['id']}/confirm")
        assert response.status_code == 200
        assert response.json()["balance"] == 10 + witness["reward"]

        response = await client.post(f"/api/v1/missions/{witness['id']}/confirm")
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_unknown_mission(self, client: AsyncClient, guest_id: str):
        response = await client.post(f"/api/v1/users/{guest_id}/missions/missing/complete")
        assert response.status_code == 404
        response = await client.post("/api/v1/missions/missing/confirm")
        assert response.status_code == 404
