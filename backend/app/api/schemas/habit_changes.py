"""Schemas for the AI habit-change planner endpoints."""
from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.services.habit_change_plan import HabitChangePlan


class HabitChangePreviewRequest(BaseModel):
    user_id: UUID
    intent: str = Field(..., min_length=1)


class HabitChangePreviewResponse(BaseModel):
    ok: bool
    error_kind: Optional[str] = None
    plan: HabitChangePlan
    request_id: str


class HabitChangeApplyRequest(BaseModel):
    user_id: UUID
    plan: HabitChangePlan


class HabitChangeApplyResponse(BaseModel):
    added: List[UUID]
    modified: List[UUID]
    deleted: List[UUID]
    skipped_ids: List[str]
    request_id: str
