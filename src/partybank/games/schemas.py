"""Pydantic schemas for the risk station, QR scans and chains."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Risk station ---


class RiskCardResponse(BaseModel):
    id: str
    type: str
    effect: str
    display_text: str
    coin_change: int
    emoji: str
    probability: float
    task: str | None = None
    special: str | None = None
    can_drink_cancel: bool = False


class RiskPlayRequest(BaseModel):
    level: int  # 1, 2 or 3; validated by the service
    drink_cancel: bool = False


class RiskPlayResponse(BaseModel):
    card: RiskCardResponse
    entry_cost: int
    coin_change: int
    drink_cancelled: bool
    balance: int
    revived: bool
    game_over: bool


# --- Scans ---


class ScanRequest(BaseModel):
    qr_id: str = Field(min_length=1, max_length=64)


class ScanResponse(BaseModel):
    qr_id: str
    kind: str
    message: str
    coins: int
    reward_type: str | None = None
    card_id: str | None = None
    chain_id: str | None = None
    step: int | None = None
    chain_completed: bool = False
    next_hint: str | None = None
    balance: int | None = None
    revived: bool = False
    game_over: bool = False


class HiddenRewardsSummaryResponse(BaseModel):
    total_codes: int
    total_coins: int
    total_traps: int
    total_cards: int


# --- Chains ---


class ChainStepResponse(BaseModel):
    step: int
    hint: str
    location: str


class ChainResponse(BaseModel):
    id: str
    name: str
    emoji: str
    description: str
    reward: int
    steps: list[ChainStepResponse]


class ChainProgressResponse(BaseModel):
    chain_id: str
    name: str
    emoji: str
    current_step: int
    total_steps: int
    completed: bool
    next_hint: str | None
