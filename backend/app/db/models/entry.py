"""Microapp entry ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, func
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base
from app.db.types import JSONBCompat, TextArrayCompat

HABITS_MICROAPP_ID = "atomic-habits"


class Entry(Base):
    """A free-form record owned by one microapp (habit, project, task, note...)."""

    __tablename__ = "entries"
    __table_args__ = (
        Index("ix_entries_user_id", "user_id"),
        Index("ix_entries_user_microapp", "user_id", "microapp_id"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    microapp_id = Column(String(length=100), nullable=False)
    data = Column(JSONBCompat, nullable=False, default=dict)
    tags = Column(TextArrayCompat, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
