"""Schemas for resource summarization."""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator


class ResourceSummaryRequest(BaseModel):
    type: Literal["website", "image", "file"]
    content: str = Field(..., min_length=1, description="URL for websites, base64 or data URI otherwise")
    mime_type: Optional[str] = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def require_mime_type_for_uploads(self) -> "ResourceSummaryRequest":
        if self.type != "website" and not self.mime_type:
            raise ValueError("mime_type is required for files and images")
        return self


class ResourceSummaryResponse(BaseModel):
    summary: str
    request_id: str
