"""Risk station, QR scan and scavenger chain endpoints."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from partybank.database import get_session
from partybank.dependencies import get_optional_redis
from partybank.errors import PartyBankError
from partybank.games.chains import CHAINS
from partybank.games.hidden_qr import HIDDEN_QR_CODES, get_rewards_summary
from partybank.games.risk_cards import RISK_CARDS, RiskCard
from partybank.games.risk_service import play_risk
from partybank.games.scan_service import get_chain_progress, process_scan
from partybank.games.schemas import (
    ChainProgressResponse,
    ChainResponse,
    ChainStepResponse,
    HiddenRewardsSummaryResponse,
    RiskCardResponse,
    RiskPlayRequest,
    RiskPlayResponse,
    ScanRequest,
    ScanResponse,
)


router = APIRouter(prefix="/api/v1", tags=["Games"])


def _card_to_response(card: RiskCard) -> RiskCardResponse:
    return RiskCardResponse(**asdict(card))


# ── Risk station ──


@router.get("/risk/cards", response_model=list[RiskCardResponse])
async def list_risk_cards():
    """The full deck with draw weights."""
    return [_card_to_response(card) for card in RISK_CARDS]


@router.post("/users/{user_id}/risk", response_model=RiskPlayResponse)
async def play_risk_round(
    user_id: str,
    body: RiskPlayRequest,
    db: AsyncSession = Depends(get_session),
    redis: object | None = Depends(get_optional_redis),
):
    try:
        play = await play_risk(db, redis, user_id, body.level, drink_cancel=body.drink_cancel)
    except PartyBankError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e

    return RiskPlayResponse(
        card=_card_to_response(play.card),
        entry_cost=play.entry_cost,
        coin_change=play.coin_change,
        drink_cancelled=play.drink_cancelled,
        balance=play.result.balance,
        revived=play.result.revived,
        game_over=play.result.game_over,
    )


# ── QR scans ──


@router.post("/users/{user_id}/scan", response_model=ScanResponse)
async def scan_code(
    user_id: str,
    body: ScanRequest,
    db: AsyncSession = Depends(get_session),
    redis: object | None = Depends(get_optional_redis),
):
    """Scan a hidden code or a chain step."""
    try:
        result = await process_scan(db, redis, user_id, body.qr_id.strip())
    except PartyBankError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return ScanResponse(**asdict(result))


@router.get("/qr/hidden/summary", response_model=HiddenRewardsSummaryResponse)
async def hidden_rewards_summary():
    return HiddenRewardsSummaryResponse(total_codes=len(HIDDEN_QR_CODES), **get_rewards_summary())


# ── Chains ──


@router.get("/chains", response_model=list[ChainResponse])
async def list_chains():
    """Chains with their clues. Scan codes are not exposed."""
    return [
        ChainResponse(
            id=chain.id,
            name=chain.name,
            emoji=chain.emoji,
            description=chain.description,
            reward=chain.reward,
            steps=[ChainStepResponse(step=s.step, hint=s.hint, location=s.location) for s in chain.steps],
        )
        for chain in CHAINS
    ]


@router.get("/users/{user_id}/chains", response_model=list[ChainProgressResponse])
async def list_chain_progress(user_id: str, db: AsyncSession = Depends(get_session)):
    try:
        progress = await get_chain_progress(db, user_id)
    except PartyBankError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return [ChainProgressResponse(**row) for row in progress]
