"""Persistence and aggregation of completed Pomodoro sessions."""
from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.db.models.pomodoro_session import PomodoroSession


@dataclass
class DailyFocus:
    date: date
    sessions: int = 0
    focus_minutes: int = 0


@dataclass
class PomodoroStats:
    total_sessions: int = 0
    total_focus_minutes: int = 0
    total_break_minutes: int = 0
    average_session_length: float = 0.0
    most_productive_day: Optional[date] = None
    daily_breakdown: List[DailyFocus] = field(default_factory=list)


def _day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    lower = datetime.combine(start, time.min, tzinfo=timezone.utc)
    upper = datetime.combine(end, time.min, tzinfo=timezone.utc) + timedelta(days=1)
    return lower, upper


def record_session(
    db: Session,
    user_id: UUID,
    *,
    work_duration: int,
    break_duration: int,
    habit_id: Optional[UUID] = None,
    habit_name: Optional[str] = None,
    was_auto_triggered: bool = False,
    completed_at: Optional[datetime] = None,
) -> PomodoroSession:
    session = PomodoroSession(
        user_id=user_id,
        habit_id=habit_id,
        habit_name=habit_name,
        work_duration=work_duration,
        break_duration=break_duration,
        was_auto_triggered=was_auto_triggered,
        completed_at=completed_at or datetime.now(timezone.utc),
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


def list_sessions(db: Session, user_id: UUID, limit: int = 100) -> List[PomodoroSession]:
    return (
        db.query(PomodoroSession)
        .filter(PomodoroSession.user_id == user_id)
        .order_by(PomodoroSession.completed_at.desc())
        .limit(limit)
        .all()
    )


def count_today_sessions(db: Session, user_id: UUID, today: Optional[date] = None) -> int:
    day = today or datetime.now(timezone.utc).date()
    lower, upper = _day_bounds(day, day)
    return (
        db.query(PomodoroSession)
        .filter(
            PomodoroSession.user_id == user_id,
            PomodoroSession.completed_at >= lower,
            PomodoroSession.completed_at < upper,
        )
        .count()
    )


def get_pomodoro_stats(db: Session, user_id: UUID, start: date, end: date) -> PomodoroStats:
    """Focus totals for sessions completed between ``start`` and ``end`` inclusive."""
    lower, upper = _day_bounds(start, end)
    sessions = (
        db.query(PomodoroSession)
        .filter(
            PomodoroSession.user_id == user_id,
            PomodoroSession.completed_at >= lower,
            PomodoroSession.completed_at < upper,
        )
        .order_by(PomodoroSession.completed_at.asc())
        .all()
    )
    if not sessions:
        return PomodoroStats()

    daily: Dict[date, DailyFocus] = OrderedDict()
    total_focus = 0
    total_break = 0
    for session in sessions:
        day = session.completed_at.date()
        bucket = daily.setdefault(day, DailyFocus(date=day))
        bucket.sessions += 1
        bucket.focus_minutes += session.work_duration
        total_focus += session.work_duration
        total_break += session.break_duration

    breakdown = list(daily.values())
    # max() keeps the first (earliest) day on ties.
    most_productive = max(breakdown, key=lambda day: day.focus_minutes)
    return PomodoroStats(
        total_sessions=len(sessions),
        total_focus_minutes=total_focus,
        total_break_minutes=total_break,
        average_session_length=total_focus / len(sessions),
        most_productive_day=most_productive.date,
        daily_breakdown=breakdown,
    )
