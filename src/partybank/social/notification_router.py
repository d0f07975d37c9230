"""Notification API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from partybank.bank.wallet_service import get_user
from partybank.database import get_session
from partybank.errors import PartyBankError
from partybank.social.notification_service import (
    get_notifications,
    get_unread_count,
    mark_all_as_read,
    mark_as_read,
)
from partybank.social.schemas import (
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)

router = APIRouter(prefix="/api/v1/users/{user_id}", tags=["Notifications"])


async def _require_guest(user_id: str, db: AsyncSession = Depends(get_session)) -> str:
    try:
        await get_user(db, user_id)
    except PartyBankError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return user_id


@router.get("/notifications", response_model=NotificationListResponse)
async def list_notifications(
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    user_id: str = Depends(_require_guest),
    db: AsyncSession = Depends(get_session),
):
    """List a guest's notifications (paginated)."""
    notifications, total = await get_notifications(db, user_id, page, per_page)
    return NotificationListResponse(
        notifications=[
            NotificationResponse(
                id=n.id,
                type=n.type,
                title=n.title,
                message=n.message,
                data=n.data or {},
                timestamp=n.created_at,
                read=n.is_read,
            )
            for n in notifications
        ],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.post("/notifications/read-all", status_code=200)
async def mark_all_read(
    user_id: str = Depends(_require_guest),
    db: AsyncSession = Depends(get_session),
):
    count = await mark_all_as_read(db, user_id)
    await db.commit()
    return {"detail": f"Marked {count} notifications as read"}


@router.get("/notifications/unread-count", response_model=UnreadCountResponse)
async def get_unread_notification_count(
    user_id: str = Depends(_require_guest),
    db: AsyncSession = Depends(get_session),
):
    count = await get_unread_count(db, user_id)
    return UnreadCountResponse(unread_count=count)


@router.post("/notifications/{notification_id}/read", status_code=200)
async def mark_notification_read(
    notification_id: str,
    user_id: str = Depends(_require_guest),
    db: AsyncSession = Depends(get_session),
):
    found = await mark_as_read(db, user_id, notification_id)
    if not found:
        raise HTTPException(status_code=404, detail="Notification not found")
    await db.commit()
    return {"detail": "Notification marked as read"}
