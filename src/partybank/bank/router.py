"""Guest & wallet API: registration, balance, ledger, manual adjustments."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from partybank.bank.schemas import (
    BalanceResponse,
    CoinChangeRequest,
    CreateGuestRequest,
    GuestResponse,
    TransactionListResponse,
    TransactionResponse,
)
from partybank.bank.wallet_service import apply_coin_change, create_guest, get_transactions, get_user
from partybank.database import get_session
from partybank.db.models import User
from partybank.dependencies import get_optional_redis
from partybank.errors import PartyBankError
from partybank.missions.service import assign_trait_missions
from partybank.missions.traits import get_trait_by_id

router = APIRouter(prefix="/api/v1", tags=["Guests"])


def _guest_to_response(user: User) -> GuestResponse:
    return GuestResponse(
        id=user.id,
        name=user.name,
        balance=user.balance,
        has_revived=user.has_revived,
        trait_id=user.trait_id,
        created_at=user.created_at,
    )


@router.post("/users", response_model=GuestResponse, status_code=201)
async def register_guest(
    body: CreateGuestRequest,
    db: AsyncSession = Depends(get_session),
    redis: object | None = Depends(get_optional_redis),
):
    """Register a guest. A trait, when given, assigns its missions right away."""
    if body.trait_id is not None and get_trait_by_id(body.trait_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown trait: {body.trait_id}")

    user = await create_guest(db, body.name.strip())
    await db.commit()
    if body.trait_id is not None:
        await assign_trait_missions(db, redis, user.id, body.trait_id)
        user = await get_user(db, user.id)
    return _guest_to_response(user)


@router.get("/users/{user_id}", response_model=GuestResponse)
async def get_guest(user_id: str, db: AsyncSession = Depends(get_session)):
    try:
        user = await get_user(db, user_id)
    except PartyBankError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return _guest_to_response(user)


@router.get("/users/{user_id}/transactions", response_model=TransactionListResponse)
async def list_transactions(
    user_id: str,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_session),
):
    """Ledger entries for a guest, newest first."""
    try:
        await get_user(db, user_id)
    except PartyBankError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e

    transactions, total = await get_transactions(db, user_id, page, per_page)
    return TransactionListResponse(
        transactions=[
            TransactionResponse(
                id=t.id,
                amount=t.amount,
                type=t.type,
                description=t.description,
                created_at=t.created_at,
            )
            for t in transactions
        ],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.post("/users/{user_id}/coins", response_model=BalanceResponse)
async def adjust_coins(
    user_id: str,
    body: CoinChangeRequest,
    db: AsyncSession = Depends(get_session),
    redis: object | None = Depends(get_optional_redis),
):
    """Manual coin adjustment by the host. Deductions go through the balance floor."""
    try:
        result = await apply_coin_change(db, redis, user_id, body.amount, "adjustment", body.description)
    except PartyBankError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    return BalanceResponse(
        balance=result.balance,
        applied=result.applied,
        revived=result.revived,
        game_over=result.game_over,
    )
