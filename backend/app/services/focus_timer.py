"""Habit-linked work/break focus timer.

The timer is a small four-phase machine (idle, work, break, complete) that
can be frozen into a JSON snapshot and thawed later, so clients can persist it
between page loads and the API can fast-forward it by elapsed wall time.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class TimerPhase(str, Enum):
    IDLE = "idle"
    WORK = "work"
    BREAK = "break"
    COMPLETE = "complete"


@dataclass
class FocusTimer:
    phase: TimerPhase = TimerPhase.IDLE
    time_left: int = 0
    is_running: bool = False
    work_duration: int = 0
    break_duration: int = 0
    habit_name: Optional[str] = None
    habit_id: Optional[str] = None

    def start(self, work: int, break_duration: int, habit_name: Optional[str] = None, habit_id: Optional[str] = None) -> None:
        if work < 1 or break_duration < 0:
            raise ValueError("work must be at least 1 minute and break_duration non-negative")
        self.phase = TimerPhase.WORK
        self.time_left = work * 60
        self.is_running = True
        self.work_duration = work
        self.break_duration = break_duration
        self.habit_name = habit_name
        self.habit_id = habit_id

    def stop(self) -> None:
        self.phase = TimerPhase.IDLE
        self.time_left = 0
        self.is_running = False
        self.work_duration = 0
        self.break_duration = 0
        self.habit_name = None
        self.habit_id = None

    def pause(self) -> None:
        self.is_running = False

    def resume(self) -> None:
        if self.is_active:
            self.is_running = True

    def advance(self, seconds: int) -> bool:
        """Run the clock forward; returns True if a work phase finished."""
        work_finished = False
        remaining = max(0, int(seconds))
        while remaining > 0 and self.is_running and self.time_left > 0:
            step = min(remaining, self.time_left)
            self.time_left -= step
            remaining -= step
            if self.time_left > 0:
                break
            if self.phase == TimerPhase.WORK:
                work_finished = True
                self.phase = TimerPhase.BREAK
                self.time_left = self.break_duration * 60
                if self.time_left == 0:
                    self._finish()
            elif self.phase == TimerPhase.BREAK:
                self._finish()
        return work_finished

    def _finish(self) -> None:
        self.phase = TimerPhase.COMPLETE
        self.time_left = 0
        self.is_running = False

    @property
    def total_seconds(self) -> int:
        if self.phase == TimerPhase.WORK:
            return self.work_duration * 60
        if self.phase == TimerPhase.BREAK:
            return self.break_duration * 60
        return 0

    @property
    def progress(self) -> float:
        total = self.total_seconds
        if total <= 0:
            return 0.0
        return (total - self.time_left) / total * 100

    @property
    def is_active(self) -> bool:
        return self.phase not in (TimerPhase.IDLE, TimerPhase.COMPLETE)

    def to_snapshot(self) -> Optional[Dict[str, Any]]:
        """Persistable form; ``None`` means "clear any stored timer"."""
        if self.phase == TimerPhase.IDLE:
            return None
        snapshot = asdict(self)
        snapshot["phase"] = self.phase.value
        return snapshot

    @classmethod
    def from_snapshot(cls, snapshot: Optional[Dict[str, Any]], *, running_only: bool = True) -> "FocusTimer":
        """Restore a stored timer.

        On reload (``running_only``) only a running timer with time left
        survives; anything else comes back idle. With ``running_only=False``
        the snapshot is taken as-is, paused or complete.
        """
        if not snapshot:
            return cls()
        time_left = int(snapshot.get("time_left") or 0)
        is_running = bool(snapshot.get("is_running"))
        if running_only and (not is_running or time_left <= 0):
            return cls()
        return cls(
            phase=TimerPhase(snapshot.get("phase", TimerPhase.IDLE.value)),
            time_left=time_left,
            is_running=is_running,
            work_duration=int(snapshot.get("work_duration") or 0),
            break_duration=int(snapshot.get("break_duration") or 0),
            habit_name=snapshot.get("habit_name"),
            habit_id=snapshot.get("habit_id"),
        )
