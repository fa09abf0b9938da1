"""Habit-change plan contract shared by the AI planner and its callers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

HABIT_CONTENT_FIELDS = (
    "Habit Name",
    "Category",
    "Frequency",
    "Time",
    "Duration (minutes)",
    "Cue",
    "Craving",
    "Response",
    "Reward",
)


class NewHabit(BaseModel):
    """A habit the planner wants to add. Every field is mandatory."""

    model_config = ConfigDict(populate_by_name=True)

    habit_name: str = Field(..., alias="Habit Name")
    category: str = Field(..., alias="Category")
    frequency: str = Field(..., alias="Frequency")
    time: str = Field(..., alias="Time", description="24h format HH:MM")
    duration_minutes: Union[int, float] = Field(..., alias="Duration (minutes)")
    cue: str = Field(..., alias="Cue")
    craving: str = Field(..., alias="Craving")
    response: str = Field(..., alias="Response")
    reward: str = Field(..., alias="Reward")

    def to_entry_data(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class HabitModification(BaseModel):
    """Partial update of an existing habit, keyed by entry id."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    rationale: str
    habit_name: Optional[str] = Field(default=None, alias="Habit Name")
    category: Optional[str] = Field(default=None, alias="Category")
    frequency: Optional[str] = Field(default=None, alias="Frequency")
    time: Optional[str] = Field(default=None, alias="Time")
    duration_minutes: Optional[Union[int, float]] = Field(default=None, alias="Duration (minutes)")
    cue: Optional[str] = Field(default=None, alias="Cue")
    craving: Optional[str] = Field(default=None, alias="Craving")
    response: Optional[str] = Field(default=None, alias="Response")
    reward: Optional[str] = Field(default=None, alias="Reward")

    def changed_fields(self) -> Dict[str, Any]:
        """Entry keys this modification sets; blank values count as unchanged."""
        dumped = self.model_dump(by_alias=True, exclude={"id", "rationale"})
        return {key: value for key, value in dumped.items() if value not in (None, "", 0)}


class HabitChangePlan(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    add: List[NewHabit] = Field(default_factory=list)
    modify: List[HabitModification] = Field(default_factory=list)
    delete: List[str] = Field(default_factory=list)
    summary: str = ""
    error: Optional[str] = None

    @classmethod
    def empty(cls, error: str) -> "HabitChangePlan":
        return cls(add=[], modify=[], delete=[], summary="", error=error)

    @property
    def has_changes(self) -> bool:
        return bool(self.add or self.modify or self.delete)

    def to_payload(self) -> Dict[str, Any]:
        """Wire shape using the stored entry keys, ``error`` omitted when unset."""
        return self.model_dump(by_alias=True, exclude_none=True)


# Structured-output contract handed to the AI backend. Kept as plain JSON
# Schema so any OpenAI-compatible endpoint can enforce it.
NEW_HABIT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "Habit Name": {"type": "string"},
        "Category": {"type": "string"},
        "Frequency": {"type": "string", "description": "usually 'daily'"},
        "Time": {"type": "string", "description": "24h format HH:MM"},
        "Duration (minutes)": {"type": "number"},
        "Cue": {"type": "string"},
        "Craving": {"type": "string"},
        "Response": {"type": "string"},
        "Reward": {"type": "string"},
    },
    "required": list(HABIT_CONTENT_FIELDS),
}

HABIT_MODIFICATION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        **NEW_HABIT_SCHEMA["properties"],
        "rationale": {"type": "string"},
    },
    "required": ["id", "rationale"],
}

HABIT_CHANGE_PLAN_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "add": {"type": "array", "items": NEW_HABIT_SCHEMA},
        "modify": {"type": "array", "items": HABIT_MODIFICATION_SCHEMA},
        "delete": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Array of habit IDs to delete",
        },
        "summary": {
            "type": "string",
            "description": "A short, encouraging message explaining the changes made to the routine.",
        },
    },
    "required": ["add", "modify", "delete", "summary"],
}


# "internal" marks a bug on our side, not a model or network fault.
ErrorKind = Literal["configuration", "transport", "malformed_output", "empty_output", "internal"]


@dataclass(frozen=True)
class PlanOk:
    plan: HabitChangePlan
    ok: Literal[True] = True

    def to_plan(self) -> HabitChangePlan:
        return self.plan


@dataclass(frozen=True)
class PlanErr:
    message: str
    kind: ErrorKind
    ok: Literal[False] = False

    def to_plan(self) -> HabitChangePlan:
        return HabitChangePlan.empty(self.message)


PlanResult = Union[PlanOk, PlanErr]
