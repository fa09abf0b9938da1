"""Apply an accepted habit-change plan to the user's habit entries."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List
from uuid import UUID

from sqlalchemy.orm import Session

from app.db.models.agent_action_log import AgentActionLog
from app.db.models.entry import HABITS_MICROAPP_ID, Entry
from app.services import entry_store
from app.services.habit_change_plan import HabitChangePlan
from app.services.habit_change_prompt import filter_active_habits

logger = logging.getLogger(__name__)


class PlanNotApplicableError(ValueError):
    """Raised when asked to apply a plan that carries an error."""


@dataclass
class ApplyResult:
    added: List[UUID] = field(default_factory=list)
    modified: List[UUID] = field(default_factory=list)
    deleted: List[UUID] = field(default_factory=list)
    skipped_ids: List[str] = field(default_factory=list)


def apply_habit_change_plan(db: Session, user_id: UUID, plan: HabitChangePlan) -> ApplyResult:
    """Add, merge and delete habit entries as the plan describes, then commit.

    Modify and delete targets must be among the user's current active habits;
    anything else (hallucinated ids, other users' entries, adaptation records)
    is skipped and reported instead of touched.
    """
    if plan.error:
        raise PlanNotApplicableError(plan.error)

    habits = entry_store.list_entries(db, user_id=user_id, microapp_id=HABITS_MICROAPP_ID)
    known: Dict[str, Entry] = {str(entry.id): entry for entry in filter_active_habits(habits)}
    result = ApplyResult()

    for new_habit in plan.add:
        entry = entry_store.add_entry(db, user_id, HABITS_MICROAPP_ID, new_habit.to_entry_data())
        result.added.append(entry.id)

    for modification in plan.modify:
        target = known.get(modification.id)
        if target is None:
            result.skipped_ids.append(modification.id)
            continue
        changes = modification.changed_fields()
        if changes:
            entry_store.update_entry(db, target.id, changes)
            result.modified.append(target.id)

    for habit_id in plan.delete:
        target = known.pop(habit_id, None)
        if target is None:
            result.skipped_ids.append(habit_id)
            continue
        entry_store.delete_entry(db, target.id)
        result.deleted.append(target.id)

    if result.skipped_ids:
        logger.warning("Skipped %d unknown habit ids while applying plan: %s", len(result.skipped_ids), result.skipped_ids)

    db.add(
        AgentActionLog(
            user_id=user_id,
            action_type="habit_plan_applied",
            action_payload={
                "added": [str(item) for item in result.added],
                "modified": [str(item) for item in result.modified],
                "deleted": [str(item) for item in result.deleted],
                "skipped_ids": result.skipped_ids,
                "rationales": {mod.id: mod.rationale for mod in plan.modify},
            },
            summary=plan.summary or None,
        )
    )
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    return result
