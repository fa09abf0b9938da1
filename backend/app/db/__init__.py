"""Persistence layer: the declarative base and every mapped table."""

from app.db.base import Base
from app.db.models import AgentActionLog, Entry, PomodoroSession, ReviewSession, User

__all__ = ["AgentActionLog", "Base", "Entry", "PomodoroSession", "ReviewSession", "User"]
