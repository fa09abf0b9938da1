"""ORM models exposed for metadata discovery."""
from app.db.models.agent_action_log import AgentActionLog
from app.db.models.entry import Entry
from app.db.models.pomodoro_session import PomodoroSession
from app.db.models.review_session import ReviewSession
from app.db.models.user import User

__all__ = [
    "AgentActionLog",
    "Entry",
    "PomodoroSession",
    "ReviewSession",
    "User",
]
