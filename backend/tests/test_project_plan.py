from __future__ import annotations

import json
from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services import ai_client
from app.services.ai_client import AIClientConfig, GenerativeClient
from app.services.project_architect import ProjectPlanError, generate_project_plan

TASKS = [
    {
        "title": "Ship landing page",
        "data": {
            "scheduled_date": "2026-11-20",
            "duration_mins": 90,
            "phase": "Polishing",
            "professional_tip": "Freeze scope two days before launch",
            "is_essential": True,
        },
    },
    {
        "title": "Sketch site map",
        "data": {
            "scheduled_date": "2026-11-02",
            "duration_mins": 45,
            "phase": "Setup",
            "professional_tip": "Start from the call to action",
            "is_essential": True,
            "description": "Pages and their single goal",
        },
    },
]


def _fake_openai(monkeypatch, content: str) -> None:
    class DummyClient:
        def __init__(self, *args, **kwargs):
            pass

        class chat:  # type: ignore[valid-type]
            class completions:  # type: ignore[valid-type]
                @staticmethod
                def create(*args, **kwargs):
                    assert "response_format" not in kwargs
                    message = type("obj", (), {"content": content})
                    return type("obj", (), {"choices": [type("obj", (), {"message": message})]})

    monkeypatch.setattr("openai.OpenAI", DummyClient)


def _client(api_key: str | None = "test-key") -> GenerativeClient:
    return GenerativeClient(AIClientConfig(api_key=api_key, model="gemini-test"))


def test_generates_tasks_sorted_by_date_from_fenced_output(monkeypatch):
    _fake_openai(monkeypatch, f"```json\n{json.dumps(TASKS)}\n```")

    tasks = generate_project_plan(
        "Portfolio site", "Launch a portfolio", "Deep work", date(2026, 11, 1), date(2026, 11, 30), client=_client()
    )

    assert [task.title for task in tasks] == ["Sketch site map", "Ship landing page"]
    assert tasks[0].data.phase == "Setup"
    assert tasks[1].data.description is None


def test_missing_key_raises_project_plan_error():
    with pytest.raises(ProjectPlanError, match="Failed to generate project plan"):
        generate_project_plan("p", "g", "h", date(2026, 11, 1), date(2026, 11, 2), client=_client(api_key=None))


def test_malformed_output_raises(monkeypatch):
    _fake_openai(monkeypatch, '[{"title": "No data"}]')

    with pytest.raises(ProjectPlanError):
        generate_project_plan("p", "g", "h", date(2026, 11, 1), date(2026, 11, 2), client=_client())


def test_route_maps_failure_to_bad_gateway(monkeypatch):
    monkeypatch.setattr(ai_client.settings, "gemini_api_key", None)
    payload = {
        "title": "Portfolio site",
        "goal": "Launch",
        "habit_name": "Deep work",
        "start_date": "2026-11-01",
        "deadline": "2026-11-30",
    }

    response = TestClient(app).post("/projects/plan", json=payload)

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to generate project plan"


def test_route_returns_tasks(monkeypatch):
    monkeypatch.setattr(ai_client.settings, "gemini_api_key", "test-key")
    _fake_openai(monkeypatch, json.dumps(TASKS))
    payload = {
        "title": "Portfolio site",
        "goal": "Launch",
        "start_date": "2026-11-01",
        "deadline": "2026-11-30",
    }

    response = TestClient(app).post("/projects/plan", json=payload)

    assert response.status_code == 200
    assert [task["data"]["scheduled_date"] for task in response.json()["tasks"]] == ["2026-11-02", "2026-11-20"]


def test_route_rejects_inverted_timeline():
    payload = {"title": "p", "goal": "g", "start_date": "2026-11-30", "deadline": "2026-11-01"}

    assert TestClient(app).post("/projects/plan", json=payload).status_code == 422
