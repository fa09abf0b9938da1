"""LLM-backed project plan drafting."""
from __future__ import annotations

import json
import logging
from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from app.observability.metrics import log_metric
from app.observability.tracing import trace
from app.services.ai_client import AIClientConfig, AIClientError, GenerativeClient
from app.services.response_sanitizer import strip_code_fences

logger = logging.getLogger(__name__)

PROJECT_PLAN_FAILURE = "Failed to generate project plan"


class ProjectPlanError(RuntimeError):
    """Raised for any failure while drafting a project plan."""


class GeneratedTaskData(BaseModel):
    scheduled_date: date
    duration_mins: int = Field(..., ge=1)
    phase: Literal["Setup", "Execution", "Polishing"]
    professional_tip: str
    is_essential: bool
    description: Optional[str] = None


class GeneratedTask(BaseModel):
    title: str
    data: GeneratedTaskData


_TASK_LIST = TypeAdapter(List[GeneratedTask])


def build_project_prompt(title: str, goal: str, habit_name: str, start_date: date, deadline: date) -> str:
    return (
        "System Role: You are a Senior Project Architect. Your mission is to take a high-level goal and "
        "deconstruct it into a realistic, professional execution plan that respects the user's actual "
        "time-blocks (Habits).\n\n"
        "Step 1: Context Gathering (Input Data)\n"
        f"Project Title: {title}\n"
        f"Project Goal/Outcome: {goal}\n"
        f"Timeline: Start Date: {start_date.isoformat()} | Hard Deadline: {deadline.isoformat()}\n"
        f"Linked Habit: {habit_name}\n\n"
        "Step 2: The Reverse Engineering Logic\n"
        "Sequence Planning: Break the project into 3 phases: Setup (Foundation), Execution (Bulk), "
        "and Polishing (Launch).\n"
        "Pacing: Distribute tasks across the calendar from Start Date to Deadline.\n"
        "Dependency: Ensure tasks are logically sequenced.\n\n"
        "Step 3: Output Specification (JSON Structure)\n"
        'Generate a "Draft Task List" as a JSON array. Return ONLY the JSON array, no markdown formatting.\n'
        "Each element: {\"title\": \"Actionable Title\", \"data\": {\"scheduled_date\": \"YYYY-MM-DD\", "
        "\"duration_mins\": 45, \"phase\": \"Setup\" | \"Execution\" | \"Polishing\", "
        "\"professional_tip\": \"Advice to avoid blockers\", \"is_essential\": true, "
        "\"description\": \"Brief description of the task\"}}\n"
    )


def generate_project_plan(
    title: str,
    goal: str,
    habit_name: str,
    start_date: date,
    deadline: date,
    *,
    client: Optional[GenerativeClient] = None,
) -> List[GeneratedTask]:
    """Draft phased tasks between ``start_date`` and ``deadline``.

    Raises ProjectPlanError on any failure; the underlying cause is chained.
    """
    if deadline < start_date:
        raise ProjectPlanError("Deadline must not be before the start date")

    client = client or GenerativeClient(AIClientConfig.from_settings())
    metadata = {"title_length": len(title), "span_days": (deadline - start_date).days}
    try:
        with trace("project_plan.generate", metadata=metadata):
            raw = client.generate_text(build_project_prompt(title, goal, habit_name, start_date, deadline))
            tasks = _TASK_LIST.validate_python(json.loads(strip_code_fences(raw)))
    except (AIClientError, ValueError, ValidationError) as exc:
        logger.error("Error in generate_project_plan: %s", exc)
        log_metric("project_plan.generate.success", 0)
        raise ProjectPlanError(PROJECT_PLAN_FAILURE) from exc

    log_metric("project_plan.generate.success", 1, metadata={"task_count": len(tasks)})
    return sorted(tasks, key=lambda task: task.data.scheduled_date)
