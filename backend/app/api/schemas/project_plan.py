"""Schemas for AI project plan drafting."""
from __future__ import annotations

from datetime import date
from typing import List

from pydantic import BaseModel, Field

from app.services.project_architect import GeneratedTask


class ProjectPlanRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    goal: str = Field(..., min_length=1, max_length=2000)
    habit_name: str = Field(default="", max_length=200)
    start_date: date
    deadline: date


class ProjectPlanResponse(BaseModel):
    tasks: List[GeneratedTask]
    request_id: str
