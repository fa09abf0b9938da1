"""Schemas for microapp entries."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class EntryCreateRequest(BaseModel):
    user_id: UUID
    microapp_id: str = Field(..., min_length=1, max_length=100)
    data: Dict[str, Any] = Field(default_factory=dict)
    tags: Optional[List[str]] = None


class EntryUpdateRequest(BaseModel):
    user_id: UUID
    data: Dict[str, Any]


class EntryResponse(BaseModel):
    id: UUID
    user_id: UUID
    microapp_id: str
    data: Dict[str, Any]
    tags: Optional[List[str]] = None
    created_at: datetime
    updated_at: datetime
