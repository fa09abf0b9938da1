"""AI habit-change planner: prompt -> model -> sanitize -> parse.

``generate_habit_changes`` is total. Every failure (missing credential,
transport error, empty or malformed output, or a bug of ours reported as
``internal``) comes back as a ``PlanErr`` value instead of an exception,
so callers only need to branch on ``ok``.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from app.observability.metrics import log_metric, timed
from app.observability.tracing import annotate, trace
from app.services.ai_client import (
    AIClientConfig,
    AIConfigurationError,
    AITransportError,
    GenerativeClient,
)
from app.services.habit_change_plan import (
    HABIT_CHANGE_PLAN_SCHEMA,
    HabitChangePlan,
    PlanErr,
    PlanOk,
    PlanResult,
)
from app.services.habit_change_prompt import build_habit_change_prompt, filter_active_habits
from app.services.response_sanitizer import strip_code_fences

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_MESSAGE = "Empty response from AI"
PARSE_FAILURE_PREFIX = "JSON Parse failed"


def parse_plan_response(text: Optional[str]) -> PlanResult:
    """Turn raw model text into a plan, or a tagged error describing why not."""
    if not text or not text.strip():
        return PlanErr(EMPTY_RESPONSE_MESSAGE, "empty_output")

    cleaned = strip_code_fences(text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("Habit plan JSON parse error: %s. Raw text: %r", exc, cleaned)
        return PlanErr(f"{PARSE_FAILURE_PREFIX}: {exc}", "malformed_output")

    if not isinstance(payload, dict):
        logger.error("Habit plan is not a JSON object. Raw text: %r", cleaned)
        return PlanErr(f"{PARSE_FAILURE_PREFIX}: expected a JSON object, got {type(payload).__name__}", "malformed_output")

    # Schema-constrained output is still checked locally: a syntactically valid
    # but incomplete plan is rejected as a whole.
    for required in HABIT_CHANGE_PLAN_SCHEMA["required"]:
        if required not in payload:
            logger.error("Habit plan missing %r. Raw text: %r", required, cleaned)
            return PlanErr(f"{PARSE_FAILURE_PREFIX}: missing required field '{required}'", "malformed_output")

    try:
        plan = HabitChangePlan.model_validate({**payload, "error": None})
    except ValidationError as exc:
        logger.error("Habit plan failed schema validation: %s. Raw text: %r", exc, cleaned)
        return PlanErr(
            f"{PARSE_FAILURE_PREFIX}: response does not match the plan schema ({exc.error_count()} errors)",
            "malformed_output",
        )
    return PlanOk(plan)


def generate_habit_changes(
    intent: str,
    current_habits: Iterable[Any],
    *,
    client: Optional[GenerativeClient] = None,
    config: Optional[AIClientConfig] = None,
) -> PlanResult:
    """Ask the model how to change the routine described by ``current_habits``."""
    if client is None:
        client = GenerativeClient(config or AIClientConfig.from_settings())

    metadata = {
        "intent_length": len(intent) if isinstance(intent, str) else 0,
        "model": client.config.model,
    }
    with trace("habit_changes.generate", metadata=metadata) as span, timed("habit_changes.generate"):
        result = _run_pipeline(client, intent, current_habits, span)
        if isinstance(result, PlanOk):
            annotate(
                span,
                outcome="ok",
                added=len(result.plan.add),
                modified=len(result.plan.modify),
                deleted=len(result.plan.delete),
            )
        else:
            annotate(span, outcome="error", error_kind=result.kind)

    log_metric("habit_changes.generate.success", 1 if result.ok else 0, metadata={"model": client.config.model})
    if isinstance(result, PlanErr):
        log_metric("habit_changes.generate.error", 1, metadata={"kind": result.kind})
    return result


def _run_pipeline(client: GenerativeClient, intent: str, current_habits: Iterable[Any], span: Any) -> PlanResult:
    try:
        habits = list(current_habits)
        annotate(span, habit_count=len(habits), active_habit_count=len(filter_active_habits(habits)))
        client.ensure_configured()
        prompt = build_habit_change_prompt(intent, habits)
        raw = client.generate_json(prompt, HABIT_CHANGE_PLAN_SCHEMA, schema_name="habit_change_plan")
        return parse_plan_response(raw)
    except AIConfigurationError as exc:
        logger.error("Habit planner misconfigured: %s", exc)
        return PlanErr(str(exc), "configuration")
    except AITransportError as exc:
        logger.error("Error generating habit changes: %s", exc)
        return PlanErr(str(exc), "transport")
    except Exception as exc:
        logger.exception("Unexpected error generating habit changes")
        return PlanErr(str(exc) or repr(exc), "internal")
