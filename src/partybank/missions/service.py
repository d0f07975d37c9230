"""Trait mission lifecycle: assign, complete, confirm.

Status flow::

    assigned --complete--> completed                      (honor)
    assigned --complete--> pending_confirmation --confirm--> completed
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from partybank.bank.wallet_service import CoinChangeResult, apply_coin_change, get_user
from partybank.db.models import UserMission
from partybank.errors import MissionNotFoundError, MissionStateError, UnknownTraitError
from partybank.missions.traits import get_missions_for_trait, get_trait_by_id
from partybank.social.notification_service import create_notification

logger = structlog.get_logger()

STATUS_ASSIGNED = "assigned"
STATUS_PENDING = "pending_confirmation"
STATUS_COMPLETED = "completed"


async def assign_trait_missions(
    db: AsyncSession,
    redis: object | None,
    user_id: str,
    trait_id: str,
) -> list[UserMission]:
    """Set a guest's trait and create its missions.

    Calling again with the same trait returns the existing missions, also
    when the second call races the first.
    """
    trait = get_trait_by_id(trait_id)
    if trait is None:
        raise UnknownTraitError(f"Unknown trait: {trait_id}")
    user = await get_user(db, user_id)

    existing = await _missions_for(db, user_id, trait_id)
    if existing:
        return existing

    user.trait_id = trait_id
    now = datetime.now(timezone.utc)
    missions = [
        UserMission(
            user_id=user_id,
            trait_id=trait_id,
            title=template.title,
            description=template.description,
            reward=template.reward,
            verification=template.verification,
            requires_confirmation=template.requires_confirmation,
            status=STATUS_ASSIGNED,
            created_at=now,
        )
        for template in get_missions_for_trait(trait_id)
    ]
    db.add_all(missions)
    try:
        await db.flush()
    except IntegrityError:
        # A concurrent request assigned the same trait first
        await db.rollback()
        return await _missions_for(db, user_id, trait_id)

    await create_notification(
        db,
        user_id,
        "mission_assigned",
        f"{trait.emoji} You're a {trait.name}!",
        f"{len(missions)} new missions are waiting for you.",
        data={"trait_id": trait_id, "mission_ids": [m.id for m in missions]},
        redis=redis,
    )
    await db.commit()
    logger.info("trait_missions_assigned", user_id=user_id, trait_id=trait_id, count=len(missions))
    return missions


async def list_user_missions(db: AsyncSession, user_id: str) -> list[UserMission]:
    await get_user(db, user_id)
    result = await db.execute(
        select(UserMission)
        .where(UserMission.user_id == user_id)
        .order_by(UserMission.created_at, UserMission.title)
    )
    return list(result.scalars().all())


async def complete_mission(
    db: AsyncSession,
    redis: object | None,
    user_id: str,
    mission_id: str,
) -> tuple[UserMission, CoinChangeResult | None]:
    """Mark a mission done by its owner.

    Honor missions pay immediately. Missions verified by a witness or the
    target wait for ``confirm_mission``.
    """
    mission = await _get_mission(db, mission_id)
    if mission.user_id != user_id:
        raise MissionNotFoundError(f"Mission {mission_id} not found")
    if mission.status != STATUS_ASSIGNED:
        raise MissionStateError(f"Mission is already {mission.status}")

    if mission.requires_confirmation:
        mission.status = STATUS_PENDING
        await db.commit()
        logger.info("mission_pending_confirmation", user_id=user_id, mission_id=mission_id)
        return mission, None

    return mission, await _pay_mission(db, redis, mission)


async def confirm_mission(
    db: AsyncSession,
    redis: object | None,
    mission_id: str,
) -> tuple[UserMission, CoinChangeResult]:
    """Confirm a mission waiting on a witness or target, and pay it."""
    mission = await _get_mission(db, mission_id)
    if mission.status != STATUS_PENDING:
        raise MissionStateError(f"Mission is {mission.status}, not awaiting confirmation")

    change = await _pay_mission(db, redis, mission)
    await create_notification(
        db,
        mission.user_id,
        "mission_confirmed",
        "Mission confirmed!",
        f"{mission.title}: +{mission.reward} coins",
        data={"mission_id": mission.id, "reward": mission.reward},
        redis=redis,
    )
    await db.commit()
    return mission, change


async def _pay_mission(db: AsyncSession, redis: object | None, mission: UserMission) -> CoinChangeResult:
    mission.status = STATUS_COMPLETED
    mission.completed_at = datetime.now(timezone.utc)
    change = await apply_coin_change(
        db, redis, mission.user_id, mission.reward, "mission_reward", f"Mission: {mission.title}",
    )
    logger.info("mission_completed", user_id=mission.user_id, mission_id=mission.id, reward=mission.reward)
    return change


async def _get_mission(db: AsyncSession, mission_id: str) -> UserMission:
    result = await db.execute(
        select(UserMission).where(UserMission.id == mission_id).with_for_update()
    )
    mission = result.scalar_one_or_none()
    if mission is None:
        raise MissionNotFoundError(f"Mission {mission_id} not found")
    return mission


async def _missions_for(db: AsyncSession, user_id: str, trait_id: str) -> list[UserMission]:
    result = await db.execute(
        select(UserMission)
        .where(UserMission.user_id == user_id, UserMission.trait_id == trait_id)
        .order_by(UserMission.created_at, UserMission.title)
    )
    return list(result.scalars().all())
