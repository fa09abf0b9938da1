"""CRUD helpers for microapp entries."""
from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.db.models.entry import Entry

logger = logging.getLogger(__name__)


class EntryNotFoundError(LookupError):
    def __init__(self, entry_id: UUID):
        super().__init__(f"Entry {entry_id} not found")
        self.entry_id = entry_id


def list_entries(
    db: Session,
    *,
    user_id: Optional[UUID] = None,
    microapp_id: Optional[str] = None,
) -> List[Entry]:
    """Entries newest first, optionally narrowed to a user and/or microapp."""
    query = db.query(Entry)
    if user_id is not None:
        query = query.filter(Entry.user_id == user_id)
    if microapp_id:
        query = query.filter(Entry.microapp_id == microapp_id)
    return query.order_by(Entry.created_at.desc(), Entry.id).all()


def get_entry(db: Session, entry_id: UUID) -> Optional[Entry]:
    return db.get(Entry, entry_id)


def add_entry(
    db: Session,
    user_id: UUID,
    microapp_id: str,
    data: Dict[str, Any],
    tags: Optional[List[str]] = None,
) -> Entry:
    """Stage a new entry; the caller owns the commit."""
    entry = Entry(user_id=user_id, microapp_id=microapp_id, data=dict(data), tags=tags)
    db.add(entry)
    db.flush()
    logger.debug("Added %s entry %s", microapp_id, entry.id)
    return entry


def update_entry(db: Session, entry_id: UUID, data: Dict[str, Any]) -> Entry:
    """Shallow-merge ``data`` into the stored payload."""
    entry = db.get(Entry, entry_id)
    if entry is None:
        raise EntryNotFoundError(entry_id)
    # Reassign a new dict so the JSON column is flagged dirty.
    entry.data = {**(entry.data or {}), **data}
    entry.updated_at = datetime.now(timezone.utc)
    db.add(entry)
    db.flush()
    return entry


def delete_entry(db: Session, entry_id: UUID) -> bool:
    entry = db.get(Entry, entry_id)
    if entry is None:
        logger.info("Delete requested for missing entry %s", entry_id)
        return False
    db.delete(entry)
    db.flush()
    return True


def list_today_entries(db: Session, user_id: UUID, today: Optional[date] = None) -> List[Entry]:
    """Entries the user created during ``today`` (UTC)."""
    day = today or datetime.now(timezone.utc).date()
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    end = start + timedelta(days=1)
    return (
        db.query(Entry)
        .filter(Entry.user_id == user_id, Entry.created_at >= start, Entry.created_at < end)
        .order_by(Entry.created_at.desc())
        .all()
    )
