"""Microapp entry CRUD routes."""
from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.api.schemas.entry import EntryCreateRequest, EntryResponse, EntryUpdateRequest
from app.db.deps import get_db
from app.db.models.entry import Entry
from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services import entry_store
from app.services.user_service import ensure_user

router = APIRouter()


@router.get("/entries", response_model=List[EntryResponse], tags=["entries"])
def list_entries(
    user_id: UUID = Query(..., description="Owner of the entries"),
    microapp_id: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
) -> List[EntryResponse]:
    with trace("entries.list", metadata={"microapp_id": microapp_id}, user_id=str(user_id)):
        entries = entry_store.list_entries(db, user_id=user_id, microapp_id=microapp_id)
    log_metric("entries.list.count", len(entries), metadata={"microapp_id": microapp_id})
    return [_serialize_entry(entry) for entry in entries]


@router.post("/entries", response_model=EntryResponse, status_code=status.HTTP_201_CREATED, tags=["entries"])
def create_entry(payload: EntryCreateRequest, db: Session = Depends(get_db)) -> EntryResponse:
    with trace("entries.create", metadata={"microapp_id": payload.microapp_id}, user_id=str(payload.user_id)):
        ensure_user(db, payload.user_id)
        entry = entry_store.add_entry(db, payload.user_id, payload.microapp_id, payload.data, payload.tags)
        db.commit()
        db.refresh(entry)
    return _serialize_entry(entry)


@router.get("/entries/{entry_id}", response_model=EntryResponse, tags=["entries"])
def read_entry(entry_id: UUID, user_id: UUID = Query(...), db: Session = Depends(get_db)) -> EntryResponse:
    return _serialize_entry(_owned_entry(db, entry_id, user_id))


@router.patch("/entries/{entry_id}", response_model=EntryResponse, tags=["entries"])
def patch_entry(entry_id: UUID, payload: EntryUpdateRequest, db: Session = Depends(get_db)) -> EntryResponse:
    _owned_entry(db, entry_id, payload.user_id)
    with trace("entries.update", metadata={"entry_id": str(entry_id)}, user_id=str(payload.user_id)):
        try:
            entry = entry_store.update_entry(db, entry_id, payload.data)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(entry)
    return _serialize_entry(entry)


@router.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["entries"])
def remove_entry(entry_id: UUID, user_id: UUID = Query(...), db: Session = Depends(get_db)) -> Response:
    _owned_entry(db, entry_id, user_id)
    with trace("entries.delete", metadata={"entry_id": str(entry_id)}, user_id=str(user_id)):
        entry_store.delete_entry(db, entry_id)
        db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _owned_entry(db: Session, entry_id: UUID, user_id: UUID) -> Entry:
    entry = entry_store.get_entry(db, entry_id)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")
    if entry.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Entry does not belong to user")
    return entry


def _serialize_entry(entry: Entry) -> EntryResponse:
    return EntryResponse(
        id=entry.id,
        user_id=entry.user_id,
        microapp_id=entry.microapp_id,
        data=entry.data or {},
        tags=entry.tags,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    )
