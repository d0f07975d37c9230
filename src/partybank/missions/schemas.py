"""Pydantic schemas for traits and missions."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class TraitResponse(BaseModel):
    id: str
    name: str
    emoji: str
    description: str
    color: str


class MissionTemplateResponse(BaseModel):
    title: str
    description: str
    reward: int
    verification: str  # honor, witness, target
    requires_confirmation: bool


class AssignTraitRequest(BaseModel):
    trait_id: str


class UserMissionResponse(BaseModel):
    id: str
    trait_id: str
    title: str
    description: str
    reward: int
    verification: str
    requires_confirmation: bool
    status: str
    completed_at: datetime | None = None


class MissionActionResponse(BaseModel):
    mission: UserMissionResponse
    paid: bool
    balance: int | None = None
