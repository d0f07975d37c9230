"""Integration tests: notification endpoints."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import AsyncClient

from partybank.database import get_session
from partybank.social.notification_service import create_notification


@pytest_asyncio.fixture
async def guest_id(client: AsyncClient) -> str:
    response = await client.post("/api/v1/users", json={"name": "Hana"})
    return response.json()["id"]


async def _create_test_notification(user_id: str, title: str) -> str:
    """Create a notification directly in the database."""
    async for db in get_session():
        note = await create_notification(db, user_id, "system", title)
        await db.commit()
        break
    return note.id


class TestNotificationsAPI:
    @pytest.mark.asyncio
    async def test_list_empty(self, client: AsyncClient, guest_id: str):
        response = await client.get(f"/api/v1/users/{guest_id}/notifications")
        assert response.status_code == 200
        assert response.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_unknown_guest(self, client: AsyncClient):
        response = await client.get("/api/v1/users/missing/notifications")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_read_flow(self, client: AsyncClient, guest_id: str):
        first = await _create_test_notification(guest_id, "First")
        await _create_test_notification(guest_id, "Second")

        response = await client.get(f"/api/v1/users/{guest_id}/notifications/unread-count")
        assert response.json()["unread_count"] == 2

        response = await client.post(f"/api/v1/users/{guest_id}/notifications/{first}/read")
        assert response.status_code == 200
        response = await client.get(f"/api/v1/users/{guest_id}/notifications/unread-count")
        assert response.json()["unread_count"] == 1

        response = await client.post(f"/api/v1/users/{guest_id}/notifications/read-all")
        assert response.status_code == 200
        response = await client.get(f"/api/v1/users/{guest_id}/notifications")
        assert all(n["read"] for n in response.json()["notifications"])

    @pytest.mark.asyncio
    async def test_mark_missing_notification(self, client: AsyncClient, guest_id: str):
        response = await client.post(f"/api/v1/users/{guest_id}/notifications/missing/read")
        assert response.status_code == 404
