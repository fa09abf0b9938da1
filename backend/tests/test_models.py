from app.db.base import Base
from app.db import models  # noqa: F401  ensure models are loaded


def test_metadata_contains_core_tables() -> None:
    table_names = set(Base.metadata.tables.keys())

    assert {
        "users",
        "entries",
        "pomodoro_sessions",
        "review_sessions",
        "agent_actions_log",
    } <= table_names


def test_entries_table_keeps_payload_in_data_column() -> None:
    entries = Base.metadata.tables["entries"]

    assert {"id", "user_id", "microapp_id", "data", "tags", "created_at", "updated_at"} <= set(entries.c.keys())
