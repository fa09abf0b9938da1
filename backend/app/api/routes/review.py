"""Periodic review routes."""
from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime, timezone
from typing import List, Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.schemas.pomodoro import PomodoroStatsResponse
from app.api.schemas.review import (
    HabitStatsPayload,
    ReviewSessionCreate,
    ReviewSessionResponse,
    ReviewSummaryResponse,
)
from app.db.deps import get_db
from app.observability.tracing import trace
from app.services import pomodoro_sessions, review_service
from app.services.user_service import ensure_user

router = APIRouter(prefix="/review", tags=["review"])


@router.get("/summary", response_model=ReviewSummaryResponse)
def review_summary(
    user_id: UUID = Query(...),
    review_type: Literal["weekly", "monthly", "yearly"] = Query("weekly"),
    today: Optional[date] = Query(default=None, description="Anchor day; defaults to today (UTC)"),
    db: Session = Depends(get_db),
) -> ReviewSummaryResponse:
    anchor = today or datetime.now(timezone.utc).date()
    start, end = review_service.period_bounds(review_type, anchor)
    with trace("review.summary", metadata={"review_type": review_type}, user_id=str(user_id)):
        habits = review_service.get_habit_stats(db, user_id, start, end)
        focus = pomodoro_sessions.get_pomodoro_stats(db, user_id, start, end)
    return ReviewSummaryResponse(
        review_type=review_type,
        period_start=start,
        period_end=end,
        habits=HabitStatsPayload.model_validate(asdict(habits)),
        pomodoro=PomodoroStatsResponse.model_validate(asdict(focus)),
    )


@router.post("/sessions", response_model=ReviewSessionResponse, status_code=status.HTTP_201_CREATED)
def create_review_session(payload: ReviewSessionCreate, db: Session = Depends(get_db)) -> ReviewSessionResponse:
    if payload.period_end < payload.period_start:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="period_end must not precede period_start")
    ensure_user(db, payload.user_id)
    review = review_service.save_review_session(
        db,
        payload.user_id,
        review_type=payload.review_type,
        period_start=payload.period_start,
        period_end=payload.period_end,
        notes=payload.notes,
        insights=payload.insights,
        action_items=payload.action_items,
    )
    return ReviewSessionResponse.model_validate(review)


@router.get("/sessions", response_model=List[ReviewSessionResponse])
def list_review_sessions(
    user_id: UUID = Query(...),
    review_type: Optional[Literal["weekly", "monthly", "yearly"]] = Query(default=None),
    db: Session = Depends(get_db),
) -> List[ReviewSessionResponse]:
    reviews = review_service.list_review_sessions(db, user_id, review_type)
    return [ReviewSessionResponse.model_validate(review) for review in reviews]
