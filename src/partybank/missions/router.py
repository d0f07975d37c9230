"""Trait & mission API."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from partybank.bank.wallet_service import CoinChangeResult
from partybank.database import get_session
from partybank.db.models import UserMission
from partybank.dependencies import get_optional_redis
from partybank.errors import PartyBankError
from partybank.missions.schemas import (
    AssignTraitRequest,
    MissionActionResponse,
    MissionTemplateResponse,
    TraitResponse,
    UserMissionResponse,
)
from partybank.missions.service import (
    assign_trait_missions,
    complete_mission,
    confirm_mission,
    list_user_missions,
)
from partybank.missions.traits import TRAITS, get_missions_for_trait, get_trait_by_id

router = APIRouter(prefix="/api/v1", tags=["Missions"])


def _mission_to_response(mission: UserMission) -> UserMissionResponse:
    return UserMissionResponse(
        id=mission.id,
        trait_id=mission.trait_id,
        title=mission.title,
        description=mission.description,
        reward=mission.reward,
        verification=mission.verification,
        requires_confirmation=mission.requires_confirmation,
        status=mission.status,
        completed_at=mission.completed_at,
    )


def _action_response(mission: UserMission, change: CoinChangeResult | None) -> MissionActionResponse:
    return MissionActionResponse(
        mission=_mission_to_response(mission),
        paid=change is not None,
        balance=change.balance if change is not None else None,
    )


@router.get("/traits", response_model=list[TraitResponse])
async def list_traits():
    return [TraitResponse(**asdict(trait)) for trait in TRAITS]


@router.get("/traits/{trait_id}/missions", response_model=list[MissionTemplateResponse])
async def list_trait_missions(trait_id: str):
    if get_trait_by_id(trait_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown trait: {trait_id}")
    return [MissionTemplateResponse(**asdict(t)) for t in get_missions_for_trait(trait_id)]


@router.post("/users/{user_id}/trait", response_model=list[UserMissionResponse])
async def choose_trait(
    user_id: str,
    body: AssignTraitRequest,
    db: AsyncSession = Depends(get_session),
    redis: object | None = Depends(get_optional_redis),
):
    """Set the guest's trait and return its missions."""
    try:
        missions = await assign_trait_missions(db, redis, user_id, body.trait_id)
    except PartyBankError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return [_mission_to_response(m) for m in missions]


@router.get("/users/{user_id}/missions", response_model=list[UserMissionResponse])
async def get_user_missions(user_id: str, db: AsyncSession = Depends(get_session)):
    try:
        missions = await list_user_missions(db, user_id)
    except PartyBankError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return [_mission_to_response(m) for m in missions]


@router.post("/users/{user_id}/missions/{mission_id}/complete", response_model=MissionActionResponse)
async def complete_user_mission(
    user_id: str,
    mission_id: str,
    db: AsyncSession = Depends(get_session),
    redis: object | None = Depends(get_optional_redis),
):
    """Report a mission done. Honor missions pay now; the rest wait for confirmation."""
    try:
        mission, change = await complete_mission(db, redis, user_id, mission_id)
    except PartyBankError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return _action_response(mission, change)


@router.post("/missions/{mission_id}/confirm", response_model=MissionActionResponse)
async def confirm_user_mission(
    mission_id: str,
    db: AsyncSession = Depends(get_session),
    redis: object | None = Depends(get_optional_redis),
):
    """Witness or target confirms a pending mission."""
    try:
        mission, change = await confirm_mission(db, redis, mission_id)
    except PartyBankError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return _action_response(mission, change)
