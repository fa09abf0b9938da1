"""AI project plan drafting route."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status

from app.api.schemas.project_plan import ProjectPlanRequest, ProjectPlanResponse
from app.services.project_architect import ProjectPlanError, generate_project_plan

router = APIRouter()


@router.post("/projects/plan", response_model=ProjectPlanResponse, tags=["projects"])
def draft_project_plan(payload: ProjectPlanRequest, http_request: Request) -> ProjectPlanResponse:
    """Return draft tasks only; nothing is persisted until the user accepts them as entries."""
    if payload.deadline < payload.start_date:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="deadline must not precede start_date")
    try:
        tasks = generate_project_plan(
            payload.title,
            payload.goal,
            payload.habit_name,
            payload.start_date,
            payload.deadline,
        )
    except ProjectPlanError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return ProjectPlanResponse(tasks=tasks, request_id=getattr(http_request.state, "request_id", None) or "")
