"""Schemas for Pomodoro sessions, stats and the focus timer."""
from __future__ import annotations

from datetime import date, datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PomodoroSessionCreate(BaseModel):
    user_id: UUID
    work_duration: int = Field(..., ge=1, le=600)
    break_duration: int = Field(..., ge=0, le=600)
    habit_id: Optional[UUID] = None
    habit_name: Optional[str] = Field(default=None, max_length=200)
    was_auto_triggered: bool = False


class PomodoroSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    habit_id: Optional[UUID]
    habit_name: Optional[str]
    work_duration: int
    break_duration: int
    was_auto_triggered: bool
    completed_at: datetime


class TodayCountResponse(BaseModel):
    date: date
    count: int


class DailyFocusPayload(BaseModel):
    date: date
    sessions: int
    focus_minutes: int


class PomodoroStatsResponse(BaseModel):
    total_sessions: int
    total_focus_minutes: int
    total_break_minutes: int
    average_session_length: float
    most_productive_day: Optional[date]
    daily_breakdown: List[DailyFocusPayload]


class TimerSnapshot(BaseModel):
    phase: Literal["idle", "work", "break", "complete"]
    time_left: int = Field(..., ge=0)
    is_running: bool
    work_duration: int = Field(default=0, ge=0)
    break_duration: int = Field(default=0, ge=0)
    habit_name: Optional[str] = None
    habit_id: Optional[str] = None


class TimerAdvanceRequest(BaseModel):
    snapshot: TimerSnapshot
    elapsed_seconds: int = Field(..., ge=0, le=86400)


class TimerAdvanceResponse(BaseModel):
    snapshot: Optional[TimerSnapshot]
    display: str
    progress: float
    is_active: bool
    work_completed: bool
