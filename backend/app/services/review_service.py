"""Weekly/monthly/yearly review aggregation and history."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Literal, Optional, Set
from uuid import UUID

from sqlalchemy.orm import Session

from app.db.models.entry import HABITS_MICROAPP_ID
from app.db.models.review_session import ReviewSession
from app.services import entry_store
from app.services.habit_change_prompt import filter_active_habits

logger = logging.getLogger(__name__)

ReviewType = Literal["weekly", "monthly", "yearly"]

PERIOD_DAYS: Dict[str, int] = {"weekly": 7, "monthly": 30, "yearly": 365}


@dataclass
class HabitBreakdown:
    habit_id: str
    habit_name: str
    completed: int
    total: int
    rate: float
    current_streak: int
    best_streak: int


@dataclass
class HabitStats:
    total_habits: int = 0
    completed_count: int = 0
    completion_rate: float = 0.0
    best_streak: int = 0
    current_streak: int = 0
    habit_breakdown: List[HabitBreakdown] = field(default_factory=list)


def period_bounds(review_type: str, today: date) -> tuple[date, date]:
    """Trailing window ending today: 7, 30 or 365 days inclusive."""
    days = PERIOD_DAYS[review_type]
    return today - timedelta(days=days - 1), today


def _completed_days(raw: Any) -> Set[date]:
    days: Set[date] = set()
    if not isinstance(raw, list):
        return days
    for value in raw:
        try:
            days.add(date.fromisoformat(str(value)[:10]))
        except ValueError:
            logger.debug("Ignoring malformed completed date %r", value)
    return days


def _streaks(done: Set[date], start: date, end: date) -> tuple[int, int]:
    best = run = 0
    cursor = start
    while cursor <= end:
        run = run + 1 if cursor in done else 0
        best = max(best, run)
        cursor += timedelta(days=1)

    # An unfinished last day does not break the current streak yet.
    cursor = end if end in done else end - timedelta(days=1)
    current = 0
    while cursor >= start and cursor in done:
        current += 1
        cursor -= timedelta(days=1)
    return current, best


def summarize_habits(entries: Iterable[Any], start: date, end: date) -> HabitStats:
    period_days = (end - start).days + 1
    if period_days <= 0:
        return HabitStats()

    breakdown: List[HabitBreakdown] = []
    for entry in filter_active_habits(entries):
        data = entry.data or {}
        done = {day for day in _completed_days(data.get("completedDates")) if start <= day <= end}
        current, best = _streaks(done, start, end)
        breakdown.append(
            HabitBreakdown(
                habit_id=str(entry.id),
                habit_name=data.get("Habit Name") or "Unknown Habit",
                completed=len(done),
                total=period_days,
                rate=len(done) / period_days * 100,
                current_streak=current,
                best_streak=best,
            )
        )

    if not breakdown:
        return HabitStats()

    completed = sum(item.completed for item in breakdown)
    possible = sum(item.total for item in breakdown)
    return HabitStats(
        total_habits=len(breakdown),
        completed_count=completed,
        completion_rate=completed / possible * 100,
        best_streak=max(item.best_streak for item in breakdown),
        current_streak=max(item.current_streak for item in breakdown),
        habit_breakdown=breakdown,
    )


def get_habit_stats(db: Session, user_id: UUID, start: date, end: date) -> HabitStats:
    habits = entry_store.list_entries(db, user_id=user_id, microapp_id=HABITS_MICROAPP_ID)
    return summarize_habits(habits, start, end)


def save_review_session(
    db: Session,
    user_id: UUID,
    *,
    review_type: ReviewType,
    period_start: date,
    period_end: date,
    notes: Optional[str] = None,
    insights: Optional[Dict[str, Any]] = None,
    action_items: Optional[List[str]] = None,
) -> ReviewSession:
    review = ReviewSession(
        user_id=user_id,
        review_type=review_type,
        period_start=period_start,
        period_end=period_end,
        notes=notes,
        insights_json=insights,
        action_items=action_items,
    )
    db.add(review)
    db.commit()
    db.refresh(review)
    return review


def list_review_sessions(db: Session, user_id: UUID, review_type: Optional[ReviewType] = None) -> List[ReviewSession]:
    query = db.query(ReviewSession).filter(ReviewSession.user_id == user_id)
    if review_type:
        query = query.filter(ReviewSession.review_type == review_type)
    return query.order_by(ReviewSession.completed_at.desc()).all()
