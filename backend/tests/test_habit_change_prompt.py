from __future__ import annotations

import json
from types import SimpleNamespace

from app.services.habit_change_prompt import (
    build_habit_change_prompt,
    filter_active_habits,
    project_habit,
)


def _habit(habit_id: str, name: str, **extra):
    data = {
        "Habit Name": name,
        "Time": "07:00",
        "Duration (minutes)": 10,
        "Cue": f"{name} cue",
        "Craving": f"{name} craving",
        "Response": f"{name} response",
        "Reward": f"{name} reward",
        "Streak": 12,
        **extra,
    }
    return {"id": habit_id, "data": data}


def _embedded_habits(prompt: str) -> list:
    start = prompt.index("Current Active Habits:\n") + len("Current Active Habits:\n")
    end = prompt.index("\n\nStrict Instructions:")
    return json.loads(prompt[start:end])


def test_adaptation_and_archived_habits_are_excluded():
    habits = [
        _habit("h1", "Journal"),
        _habit("h2", "Cold Shower", Type="adaptation"),
        _habit("h3", "Old Run", archived=True),
        _habit("h4", "Stretch", archived=False),
    ]

    active = filter_active_habits(habits)
    prompt = build_habit_change_prompt("move journaling later", habits)

    assert [habit["id"] for habit in active] == ["h1", "h4"]
    assert "Cold Shower" not in prompt
    assert "Old Run" not in prompt
    assert [habit["id"] for habit in _embedded_habits(prompt)] == ["h1", "h4"]


def test_projection_only_carries_schedule_and_loop_fields():
    projected = project_habit(_habit("h1", "Journal", Category="Mind"))

    assert projected == {
        "id": "h1",
        "name": "Journal",
        "time": "07:00",
        "duration": 10,
        "cue": "Journal cue",
        "craving": "Journal craving",
        "response": "Journal response",
        "reward": "Journal reward",
    }


def test_accepts_orm_like_objects():
    row = SimpleNamespace(id="abc", data={"Habit Name": "Read", "Time": "21:00"})

    prompt = build_habit_change_prompt("read more", [row])

    assert _embedded_habits(prompt)[0]["id"] == "abc"
    assert _embedded_habits(prompt)[0]["name"] == "Read"


def test_prompt_is_deterministic_and_lists_all_rules():
    habits = [_habit("h1", "Journal")]
    intent = "add a 20 minute morning meditation"

    first = build_habit_change_prompt(intent, habits)
    second = build_habit_change_prompt(intent, habits)

    assert first == second
    assert f'User Intent: "{intent}"' in first
    for number in range(1, 7):
        assert f"\n{number}. " in first
    assert "HH:MM" in first


def test_empty_habit_list_serializes_as_empty_array():
    prompt = build_habit_change_prompt("add a 20 minute morning meditation", [])

    assert "Current Active Habits:\n[]\n" in prompt
