"""Pomodoro sprint/break cycle and small formatting helpers."""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


def format_time(seconds: int) -> str:
    """Render seconds as MM:SS (minutes are not wrapped at 60)."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


def calculate_efficiency(worked_minutes: float, goal_minutes: float) -> int:
    """Percent of the goal reached, rounded half up and capped at 100."""
    if goal_minutes == 0:
        return 0
    return min(100, math.floor(worked_minutes / goal_minutes * 100 + 0.5))


class SessionType(str, Enum):
    IDLE = "IDLE"
    WORK = "WORK"
    SHORT_BREAK = "SHORT_BREAK"
    LONG_BREAK = "LONG_BREAK"


@dataclass(frozen=True)
class PomodoroConfig:
    sprint_duration: int = 50
    short_break_duration: int = 7
    long_break_duration: int = 25
    auto_start_breaks: bool = True
    auto_start_sprints: bool = False
    sessions_before_long_break: int = 4

    def __post_init__(self) -> None:
        durations = (self.sprint_duration, self.short_break_duration, self.long_break_duration)
        if min(durations) < 1 or self.sessions_before_long_break < 1:
            raise ValueError("Pomodoro durations and sessions_before_long_break must be at least 1")

    def duration_for(self, session_type: SessionType) -> int:
        if session_type == SessionType.SHORT_BREAK:
            return self.short_break_duration
        if session_type == SessionType.LONG_BREAK:
            return self.long_break_duration
        return self.sprint_duration


DEFAULT_CONFIG = PomodoroConfig()


class PomodoroCycle:
    """Sprint -> break -> sprint loop with a long break every N sprints.

    ``current_session`` is the 1-based sprint number for the day and
    ``total_sessions`` counts completed sprints.
    """

    def __init__(self, config: PomodoroConfig = DEFAULT_CONFIG):
        self.config = config
        self.session_type = SessionType.IDLE
        self.time_left = config.sprint_duration * 60
        self.is_active = False
        self.current_session = 1
        self.total_sessions = 0

    def start(self, duration_minutes: Optional[int] = None, session_type: SessionType = SessionType.WORK) -> None:
        duration = duration_minutes or self.config.duration_for(session_type)
        self.session_type = session_type
        self.time_left = duration * 60
        self.is_active = True

    def pause(self) -> None:
        self.is_active = False

    def stop(self) -> None:
        """Halt and rewind to the full length of the current session type."""
        self.is_active = False
        self.time_left = self.config.duration_for(self.session_type) * 60

    def skip(self) -> None:
        self._complete()

    def update_config(self, **changes) -> None:
        self.config = replace(self.config, **changes)

    def tick(self, seconds: int = 1) -> int:
        """Advance the clock; returns how many sessions finished along the way."""
        finished = 0
        remaining = seconds
        while remaining > 0 and self.is_active:
            step = min(remaining, self.time_left)
            self.time_left -= step
            remaining -= step
            if self.time_left <= 0:
                self._complete()
                finished += 1
        return finished

    def _complete(self) -> None:
        self.is_active = False
        if self.session_type == SessionType.WORK:
            self.total_sessions += 1
            if self.current_session % self.config.sessions_before_long_break == 0:
                next_type = SessionType.LONG_BREAK
            else:
                next_type = SessionType.SHORT_BREAK
            if self.config.auto_start_breaks:
                self.start(session_type=next_type)
            else:
                self.session_type = next_type
                self.time_left = self.config.duration_for(next_type) * 60
        else:
            self.current_session += 1
            if self.config.auto_start_sprints:
                self.start(session_type=SessionType.WORK)
            else:
                self.session_type = SessionType.WORK
                self.time_left = self.config.sprint_duration * 60
