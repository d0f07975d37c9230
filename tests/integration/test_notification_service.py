"""Integration tests: notification persistence and push."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from partybank.social.notification_service import (
    create_notification,
    get_notifications,
    get_unread_count,
    mark_all_as_read,
    mark_as_read,
)


class TestNotificationService:
    @pytest.mark.asyncio
    async def test_create_persists_and_pushes(self, db_session, guest, mock_redis):
        note = await create_notification(
            db_session, guest.id, "system", "Welcome!", "Have fun", data={"x": 1}, redis=mock_redis,
        )
        await db_session.commit()

        channel, payload = mock_redis.publish.await_args.args
        assert channel == f"ws:user:{guest.id}"
        body = json.loads(payload)
        assert body["event"] == "notification"
        assert body["data"]["id"] == note.id
        assert body["data"]["data"] == {"x": 1}

    @pytest.mark.asyncio
    async def test_push_failure_is_swallowed(self, db_session, guest):
        redis = AsyncMock()
        redis.publish.side_effect = ConnectionError("redis down")

        await create_notification(db_session, guest.id, "system", "Still saved", redis=redis)
        await db_session.commit()

        assert await get_unread_count(db_session, guest.id) == 1

    @pytest.mark.asyncio
    async def test_invalid_type(self, db_session, guest):
        with pytest.raises(ValueError, match="Invalid notification type"):
            await create_notification(db_session, guest.id, "spam", "Nope")

    @pytest.mark.asyncio
    async def test_pagination(self, db_session, guest):
        for i in range(5):
            await create_notification(db_session, guest.id, "system", f"Note {i}")
        await db_session.commit()

        page, total = await get_notifications(db_session, guest.id, page=2, per_page=2)
        assert total == 5
        assert len(page) == 2

    @pytest.mark.asyncio
    async def test_mark_read(self, db_session, guest):
        first = await create_notification(db_session, guest.id, "system", "One")
        await create_notification(db_session, guest.id, "system", "Two")
        await db_session.commit()

        assert await mark_as_read(db_session, guest.id, first.id) is True
        assert await mark_as_read(db_session, guest.id, "missing") is False
        assert await get_unread_count(db_session, guest.id) == 1
        assert await mark_all_as_read(db_session, guest.id) == 1
        assert await get_unread_count(db_session, guest.id) == 0
