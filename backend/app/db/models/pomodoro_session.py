"""Completed Pomodoro session ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, Text, func, text as sa_text
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class PomodoroSession(Base):
    __tablename__ = "pomodoro_sessions"
    __table_args__ = (Index("ix_pomodoro_sessions_user_completed", "user_id", "completed_at"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # Soft reference: the habit entry may be deleted later without losing history.
    habit_id = Column(UUID(as_uuid=True), nullable=True)
    habit_name = Column(Text, nullable=True)
    work_duration = Column(Integer, nullable=False)
    break_duration = Column(Integer, nullable=False)
    was_auto_triggered = Column(Boolean, nullable=False, server_default=sa_text("false"))
    completed_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
