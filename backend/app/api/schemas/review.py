"""Schemas for periodic reviews."""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.api.schemas.pomodoro import PomodoroStatsResponse


class HabitBreakdownPayload(BaseModel):
    habit_id: str
    habit_name: str
    completed: int
    total: int
    rate: float
    current_streak: int
    best_streak: int


class HabitStatsPayload(BaseModel):
    total_habits: int
    completed_count: int
    completion_rate: float
    best_streak: int
    current_streak: int
    habit_breakdown: List[HabitBreakdownPayload]


class ReviewSummaryResponse(BaseModel):
    review_type: Literal["weekly", "monthly", "yearly"]
    period_start: date
    period_end: date
    habits: HabitStatsPayload
    pomodoro: PomodoroStatsResponse


class ReviewSessionCreate(BaseModel):
    user_id: UUID
    review_type: Literal["weekly", "monthly", "yearly"]
    period_start: date
    period_end: date
    notes: Optional[str] = Field(default=None, max_length=5000)
    insights: Optional[Dict[str, Any]] = None
    action_items: Optional[List[str]] = None


class ReviewSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    review_type: str
    period_start: date
    period_end: date
    notes: Optional[str]
    insights: Optional[Dict[str, Any]] = Field(default=None, validation_alias="insights_json")
    action_items: Optional[List[str]]
    completed_at: datetime
