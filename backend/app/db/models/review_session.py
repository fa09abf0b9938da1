"""Periodic review session ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base
from app.db.types import JSONBCompat, TextArrayCompat


class ReviewSession(Base):
    __tablename__ = "review_sessions"
    __table_args__ = (Index("ix_review_sessions_user_id", "user_id"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    review_type = Column(String(length=20), nullable=False)
    period_start = Column(Date, nullable=False)
    period_end = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    insights_json = Column(JSONBCompat, nullable=True)
    action_items = Column(TextArrayCompat, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
