"""Prompt construction for the habit-change planner."""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping

ADAPTATION_TYPE = "adaptation"


def _entry_id(entry: Any) -> str:
    raw = entry.get("id") if isinstance(entry, Mapping) else getattr(entry, "id", None)
    return "" if raw is None else str(raw)


def _entry_data(entry: Any) -> Mapping[str, Any]:
    raw = entry.get("data") if isinstance(entry, Mapping) else getattr(entry, "data", None)
    return raw if isinstance(raw, Mapping) else {}


def is_active_habit(entry: Any) -> bool:
    """Adaptation records and archived habits never feed back into the planner."""
    data = _entry_data(entry)
    return data.get("Type") != ADAPTATION_TYPE and not data.get("archived")


def filter_active_habits(entries: Iterable[Any]) -> List[Any]:
    return [entry for entry in entries if is_active_habit(entry)]


def project_habit(entry: Any) -> Dict[str, Any]:
    data = _entry_data(entry)
    return {
        "id": _entry_id(entry),
        "name": data.get("Habit Name"),
        "time": data.get("Time"),
        "duration": data.get("Duration (minutes)"),
        "cue": data.get("Cue"),
        "craving": data.get("Craving"),
        "response": data.get("Response"),
        "reward": data.get("Reward"),
    }


def build_habit_change_prompt(intent: str, entries: Iterable[Any]) -> str:
    """Render the planner instruction for ``intent`` over the user's active habits.

    ``entries`` may be ORM rows or plain ``{"id", "data"}`` mappings. Only the
    id, name, schedule and the four behavior-loop fields of each active habit
    are serialized.
    """
    habits_json = json.dumps([project_habit(entry) for entry in filter_active_habits(entries)], indent=2)
    return (
        "You are an expert productivity coach and AI routine architect based on the book Atomic Habits.\n"
        "The user wants to permanently change their routine.\n"
        f'User Intent: "{intent}"\n'
        "\n"
        "Current Active Habits:\n"
        f"{habits_json}\n"
        "\n"
        "Strict Instructions:\n"
        "1. Parse the user intent to figure out if they want to ADD, MODIFY, or DELETE habits.\n"
        "2. If adding a new habit, you MUST determine a realistic Time in 24h format (HH:MM) and provide "
        "great Atomic Habit fields (Cue, Craving, Response, Reward).\n"
        "3. If modifying an existing habit (because the user asked, or to make room for a new habit), include it "
        "in 'modify'. ALWAYS provide the 'id' of the habit you are modifying. Provide ONLY the fields that are "
        "changing. Provide a short 'rationale' for why it changed.\n"
        "4. If deleting a habit (only if the user explicitly asks to remove it), add its 'id' to the 'delete' array.\n"
        "5. Make sure the schedule makes logical sense (no overlapping habits if possible, though minor overlaps "
        "are okay if unavoidable). Time format MUST be HH:MM in 24h format.\n"
        "6. Provide a short, friendly 'summary' explaining the new setup to the user.\n"
    )
