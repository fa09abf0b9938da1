"""Second-brain resource summarization route."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status

from app.api.schemas.resource_summary import ResourceSummaryRequest, ResourceSummaryResponse
from app.services.resource_summarizer import ResourceSummaryError, summarize_resource

router = APIRouter()


@router.post("/resources/summarize", response_model=ResourceSummaryResponse, tags=["resources"])
def summarize(payload: ResourceSummaryRequest, http_request: Request) -> ResourceSummaryResponse:
    try:
        summary = summarize_resource(payload.type, payload.content, payload.mime_type)
    except ResourceSummaryError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return ResourceSummaryResponse(summary=summary, request_id=getattr(http_request.state, "request_id", None) or "")
