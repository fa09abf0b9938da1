from __future__ import annotations

import json

import httpx
import openai
import pytest

from app.services.ai_client import AIClientConfig, GenerativeClient, MISSING_KEY_MESSAGE
from app.services.habit_change_generator import generate_habit_changes, parse_plan_response
from app.services.habit_change_plan import HABIT_CHANGE_PLAN_SCHEMA, PlanErr, PlanOk

MEDITATION = {
    "Habit Name": "Morning Meditation",
    "Category": "Mind",
    "Frequency": "daily",
    "Time": "06:30",
    "Duration (minutes)": 20,
    "Cue": "After making coffee",
    "Craving": "A calm start",
    "Response": "Sit on the cushion and breathe",
    "Reward": "Tick it off on the wall calendar",
}

WELL_FORMED = {
    "add": [MEDITATION],
    "modify": [],
    "delete": [],
    "summary": "Added a 20 minute meditation after coffee.",
}


class _FakeOpenAI:
    """Stands in for openai.OpenAI; records every request."""

    content: str | None = ""
    error: Exception | None = None
    instances: list["_FakeOpenAI"] = []

    def __init__(self, *args, **kwargs):
        self.init_kwargs = kwargs
        self.requests: list[dict] = []
        _FakeOpenAI.instances.append(self)
        outer = self

        class _Completions:
            @staticmethod
            def create(**kwargs):
                outer.requests.append(kwargs)
                if _FakeOpenAI.error is not None:
                    raise _FakeOpenAI.error
                message = type("obj", (), {"content": _FakeOpenAI.content})
                choice = type("obj", (), {"message": message})
                return type("obj", (), {"choices": [choice]})

        self.chat = type("obj", (), {"completions": _Completions})


@pytest.fixture()
def fake_openai(monkeypatch):
    _FakeOpenAI.content = ""
    _FakeOpenAI.error = None
    _FakeOpenAI.instances = []
    monkeypatch.setattr("openai.OpenAI", _FakeOpenAI)
    return _FakeOpenAI


def _client(api_key: str | None = "test-key") -> GenerativeClient:
    return GenerativeClient(AIClientConfig(api_key=api_key, model="gemini-test", base_url="http://ai.local/"))


def test_missing_credential_is_an_error_value_without_network(fake_openai):
    habits = [{"id": "h1", "data": {"Habit Name": "Journal"}}]

    result = generate_habit_changes("delete everything", habits, client=_client(api_key=None))

    assert isinstance(result, PlanErr)
    assert result.kind == "configuration"
    plan = result.to_plan()
    assert plan.error == MISSING_KEY_MESSAGE
    assert (plan.add, plan.modify, plan.delete, plan.summary) == ([], [], [], "")
    assert fake_openai.instances == []


def test_end_to_end_add_meditation(fake_openai):
    fake_openai.content = json.dumps(WELL_FORMED)
    intent = "add a 20 minute morning meditation"

    result = generate_habit_changes(intent, [], client=_client())

    assert isinstance(result, PlanOk)
    assert len(result.plan.add) == 1
    assert result.plan.modify == []
    assert result.plan.delete == []
    assert result.plan.error is None
    assert result.plan.add[0].duration_minutes == 20

    request = fake_openai.instances[0].requests[0]
    prompt = request["messages"][0]["content"]
    assert intent in prompt
    assert "Current Active Habits:\n[]" in prompt
    assert request["model"] == "gemini-test"
    assert request["response_format"]["json_schema"]["schema"] == HABIT_CHANGE_PLAN_SCHEMA
    assert fake_openai.instances[0].init_kwargs["max_retries"] == 0


def test_fenced_response_matches_unfenced(fake_openai):
    raw = json.dumps(WELL_FORMED)

    fake_openai.content = f"```json\n{raw}\n```"
    fenced = generate_habit_changes("meditate", [], client=_client())
    fake_openai.content = raw
    plain = generate_habit_changes("meditate", [], client=_client())

    assert fenced.to_plan() == plain.to_plan()


def test_transport_failure_becomes_error_value(fake_openai):
    fake_openai.error = openai.APIConnectionError(request=httpx.Request("POST", "http://ai.local/chat/completions"))

    result = generate_habit_changes("meditate", [], client=_client())

    assert isinstance(result, PlanErr)
    assert result.kind == "transport"
    assert result.to_plan().error == "Connection error."


def test_unexpected_failure_never_escapes(monkeypatch):
    client = _client()

    def explode(*args, **kwargs):
        raise KeyError()

    monkeypatch.setattr(client, "generate_json", explode)

    result = generate_habit_changes("meditate", [], client=client)

    assert isinstance(result, PlanErr)
    assert result.kind == "internal"
    assert result.to_plan().error == "KeyError()"


def test_non_iterable_habits_become_error_value(fake_openai):
    result = generate_habit_changes("meditate", None, client=_client())

    assert isinstance(result, PlanErr)
    assert result.kind == "internal"
    assert "not iterable" in result.message
    assert fake_openai.instances == []


def test_summary_is_returned_verbatim():
    result = parse_plan_response(json.dumps(WELL_FORMED))

    assert isinstance(result, PlanOk)
    assert result.plan.summary == WELL_FORMED["summary"]
    assert result.to_plan().error is None


def test_error_field_from_model_is_not_trusted_on_success():
    result = parse_plan_response(json.dumps({**WELL_FORMED, "error": "hallucinated"}))

    assert isinstance(result, PlanOk)
    assert result.plan.error is None


def test_empty_response_shape_is_exact():
    plan = parse_plan_response("").to_plan()

    assert plan.model_dump(by_alias=True) == {
        "add": [],
        "modify": [],
        "delete": [],
        "summary": "",
        "error": "Empty response from AI",
    }


def test_invalid_json_reports_parse_failure():
    result = parse_plan_response("{not json")

    assert isinstance(result, PlanErr)
    assert result.kind == "malformed_output"
    plan = result.to_plan()
    assert "JSON Parse failed" in plan.error
    assert (plan.add, plan.modify, plan.delete, plan.summary) == ([], [], [], "")


@pytest.mark.parametrize(
    "payload",
    [
        {"add": [], "modify": [], "delete": []},
        {**WELL_FORMED, "add": [{"Habit Name": "Half a habit"}]},
        {**WELL_FORMED, "modify": [{"id": "h1", "Time": "07:00"}]},
        [WELL_FORMED],
    ],
)
def test_structurally_incomplete_json_is_rejected(payload):
    result = parse_plan_response(json.dumps(payload))

    assert isinstance(result, PlanErr)
    assert result.kind == "malformed_output"
    assert result.message.startswith("JSON Parse failed")


def test_modify_only_reports_changed_fields():
    payload = {
        **WELL_FORMED,
        "add": [],
        "modify": [{"id": "h1", "Time": "07:15", "Cue": "", "rationale": "Make room for meditation"}],
    }

    result = parse_plan_response(json.dumps(payload))

    assert isinstance(result, PlanOk)
    assert result.plan.modify[0].changed_fields() == {"Time": "07:15"}
