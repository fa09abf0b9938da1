"""AI habit-change planner routes."""
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.api.schemas.habit_changes import (
    HabitChangeApplyRequest,
    HabitChangeApplyResponse,
    HabitChangePreviewRequest,
    HabitChangePreviewResponse,
)
from app.db.deps import get_db
from app.db.models.entry import HABITS_MICROAPP_ID
from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services import entry_store
from app.services.habit_change_apply import PlanNotApplicableError, apply_habit_change_plan
from app.services.habit_change_generator import generate_habit_changes
from app.services.habit_change_plan import PlanErr
from app.services.user_service import ensure_user

router = APIRouter(prefix="/habits/changes", tags=["habits"])


@router.post("/preview", response_model=HabitChangePreviewResponse)
def preview_habit_changes(
    payload: HabitChangePreviewRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> HabitChangePreviewResponse:
    """Draft a plan for the user's intent. Generation errors come back in the body, not as HTTP errors."""
    intent = payload.intent.strip()
    if not intent:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="intent must not be empty")

    request_id = getattr(http_request.state, "request_id", None)
    habits = entry_store.list_entries(db, user_id=payload.user_id, microapp_id=HABITS_MICROAPP_ID)
    result = generate_habit_changes(intent, habits)

    return HabitChangePreviewResponse(
        ok=result.ok,
        error_kind=result.kind if isinstance(result, PlanErr) else None,
        plan=result.to_plan(),
        request_id=request_id or "",
    )


@router.post("/apply", response_model=HabitChangeApplyResponse)
def apply_habit_changes(
    payload: HabitChangeApplyRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> HabitChangeApplyResponse:
    request_id = getattr(http_request.state, "request_id", None)
    metadata: Dict[str, Any] = {
        "route": "/habits/changes/apply",
        "add": len(payload.plan.add),
        "modify": len(payload.plan.modify),
        "delete": len(payload.plan.delete),
    }
    with trace("habit_changes.apply", metadata=metadata, user_id=str(payload.user_id), request_id=request_id):
        ensure_user(db, payload.user_id)
        try:
            result = apply_habit_change_plan(db, payload.user_id, payload.plan)
        except PlanNotApplicableError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Plan carries an error and cannot be applied: {exc}",
            ) from exc

    log_metric("habit_changes.apply.skipped", len(result.skipped_ids), metadata={"user_id": str(payload.user_id)})
    return HabitChangeApplyResponse(
        added=result.added,
        modified=result.modified,
        deleted=result.deleted,
        skipped_ids=result.skipped_ids,
        request_id=request_id or "",
    )
