"""Lazy mirror of hosted-auth users into the local users table."""
from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db.models.user import User


def ensure_user(db: Session, user_id: UUID, *, email: Optional[str] = None) -> User:
    """Return the local user row for ``user_id``, inserting it on first sight.

    A concurrent insert of the same id is tolerated by re-reading after the
    integrity error.
    """
    user = db.get(User, user_id)
    if user is not None:
        if email and not user.email:
            user.email = email
        return user

    db.add(User(id=user_id, email=email))
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        user = db.get(User, user_id)
        if user is None:
            raise
        return user
    return db.get(User, user_id)
