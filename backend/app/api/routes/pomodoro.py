"""Pomodoro session history, stats and focus-timer routes."""
from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime, timezone
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.schemas.pomodoro import (
    PomodoroSessionCreate,
    PomodoroSessionResponse,
    PomodoroStatsResponse,
    TimerAdvanceRequest,
    TimerAdvanceResponse,
    TimerSnapshot,
    TodayCountResponse,
)
from app.db.deps import get_db
from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services import pomodoro_sessions
from app.services.focus_timer import FocusTimer
from app.services.pomodoro import format_time
from app.services.user_service import ensure_user

router = APIRouter(prefix="/pomodoro", tags=["pomodoro"])


@router.post("/sessions", response_model=PomodoroSessionResponse, status_code=status.HTTP_201_CREATED)
def create_session(payload: PomodoroSessionCreate, db: Session = Depends(get_db)) -> PomodoroSessionResponse:
    with trace("pomodoro.session.record", metadata={"work_duration": payload.work_duration}, user_id=str(payload.user_id)):
        ensure_user(db, payload.user_id)
        session = pomodoro_sessions.record_session(
            db,
            payload.user_id,
            work_duration=payload.work_duration,
            break_duration=payload.break_duration,
            habit_id=payload.habit_id,
            habit_name=payload.habit_name,
            was_auto_triggered=payload.was_auto_triggered,
        )
    log_metric("pomodoro.session.focus_minutes", payload.work_duration, metadata={"user_id": str(payload.user_id)})
    return PomodoroSessionResponse.model_validate(session)


@router.get("/sessions", response_model=List[PomodoroSessionResponse])
def list_sessions(
    user_id: UUID = Query(...),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
) -> List[PomodoroSessionResponse]:
    sessions = pomodoro_sessions.list_sessions(db, user_id, limit=limit)
    return [PomodoroSessionResponse.model_validate(session) for session in sessions]


@router.get("/sessions/today", response_model=TodayCountResponse)
def today_count(user_id: UUID = Query(...), db: Session = Depends(get_db)) -> TodayCountResponse:
    today = datetime.now(timezone.utc).date()
    return TodayCountResponse(date=today, count=pomodoro_sessions.count_today_sessions(db, user_id, today))


@router.get("/stats", response_model=PomodoroStatsResponse)
def stats(
    user_id: UUID = Query(...),
    start: date = Query(...),
    end: date = Query(...),
    db: Session = Depends(get_db),
) -> PomodoroStatsResponse:
    if end < start:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="end must not precede start")
    result = pomodoro_sessions.get_pomodoro_stats(db, user_id, start, end)
    return PomodoroStatsResponse.model_validate(asdict(result))


@router.post("/timer/advance", response_model=TimerAdvanceResponse)
def advance_timer(payload: TimerAdvanceRequest) -> TimerAdvanceResponse:
    """Fast-forward a client-held timer snapshot by the wall time that passed."""
    timer = FocusTimer.from_snapshot(payload.snapshot.model_dump(), running_only=False)
    work_completed = timer.advance(payload.elapsed_seconds)
    snapshot = timer.to_snapshot()
    return TimerAdvanceResponse(
        snapshot=TimerSnapshot.model_validate(snapshot) if snapshot else None,
        display=format_time(timer.time_left),
        progress=round(timer.progress, 2),
        is_active=timer.is_active,
        work_completed=work_completed,
    )
