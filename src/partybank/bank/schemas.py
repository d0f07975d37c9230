"""Pydantic schemas for guest and wallet API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CreateGuestRequest(BaseModel):
    name: str = Field(min_length=1, max_length=64)
    trait_id: str | None = None


class GuestResponse(BaseModel):
    id: str
    name: str
    balance: int
    has_revived: bool
    trait_id: str | None
    created_at: datetime | None


class TransactionResponse(BaseModel):
    id: str
    amount: int
    type: str
    description: str | None
    created_at: datetime | None


class TransactionListResponse(BaseModel):
    transactions: list[TransactionResponse]
    total: int
    page: int
    per_page: int


class CoinChangeRequest(BaseModel):
    amount: int = Field(ge=-1000, le=1000)
    description: str = Field(default="Manual adjustment", max_length=256)


class BalanceResponse(BaseModel):
    """Balance after a coin change, with the floor outcome."""

    balance: int
    applied: int
    revived: bool
    game_over: bool
