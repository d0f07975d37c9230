"""Integration tests: risk station, scans and chains endpoints."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import AsyncClient


@pytest_asyncio.fixture
async def guest_id(client: AsyncClient) -> str:
    response = await client.post("/api/v1/users", json={"name": "Frank"})
    return response.json()["id"]


class TestRiskAPI:
    @pytest.mark.asyncio
    async def test_list_cards(self, client: AsyncClient):
        response = await client.get("/api/v1/risk/cards")
        assert response.status_code == 200
        assert len(response.json()) == 24

    @pytest.mark.asyncio
    async def test_play_round(self, client: AsyncClient, guest_id: str):
        response = await client.post(f"/api/v1/users/{guest_id}/risk", json={"level": 2})
        assert response.status_code == 200
        data = response.json()
        assert data["entry_cost"] == 2
        assert data["balance"] >= 0
        assert data["card"]["id"]

    @pytest.mark.asyncio
    async def test_bad_level(self, client: AsyncClient, guest_id: str):
        response = await client.post(f"/api/v1/users/{guest_id}/risk", json={"level": 9})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_insufficient_balance(self, client: AsyncClient, guest_id: str):
        await client.post(f"/api/v1/users/{guest_id}/coins", json={"amount": -9})
        response = await client.post(f"/api/v1/users/{guest_id}/risk", json={"level": 3})
        assert response.status_code == 400
        assert response.json()["detail"] == "Not enough coins!"


class TestScanAPI:
    @pytest.mark.asyncio
    async def test_hidden_claim_then_conflict(self, client: AsyncClient, guest_id: str):
        response = await client.post(f"/api/v1/users/{guest_id}/scan", json={"qr_id": "hidden_6"})
        assert response.status_code == 200
        assert response.json()["balance"] == 14

        response = await client.post(f"/api/v1/users/{guest_id}/scan", json={"qr_id": "hidden_6"})
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_unknown_code(self, client: AsyncClient, guest_id: str):
        response = await client.post(f"/api/v1/users/{guest_id}/scan", json={"qr_id": "bogus"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_guest(self, client: AsyncClient):
        response = await client.post("/api/v1/users/missing/scan", json={"qr_id": "hidden_1"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_chain_out_of_order(self, client: AsyncClient, guest_id: str):
        response = await client.post(f"/api/v1/users/{guest_id}/scan", json={"qr_id": "chain_social_3"})
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_hidden_summary(self, client: AsyncClient):
        response = await client.get("/api/v1/qr/hidden/summary")
        assert response.json() == {"total_codes": 10, "total_coins": 28, "total_traps": -3, "total_cards": 2}


class TestChainsAPI:
    @pytest.mark.asyncio
    async def test_chain_clues_hide_scan_codes(self, client: AsyncClient):
        response = await client.get("/api/v1/chains")
        assert response.status_code == 200
        chains = response.json()
        assert len(chains) == 5
        assert "qr_id" not in chains[0]["steps"][0]

    @pytest.mark.asyncio
    async def test_progress(self, client: AsyncClient, guest_id: str):
        await client.post(f"/api/v1/users/{guest_id}/scan", json={"qr_id": "chain_owl_1"})
        response = await client.get(f"/api/v1/users/{guest_id}/chains")
        assert response.status_code == 200
        owl = next(c for c in response.json() if c["chain_id"] == "night_owl")
        assert owl["current_step"] == 2
