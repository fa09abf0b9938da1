import pytest

from app.services.pomodoro import (
    PomodoroConfig,
    PomodoroCycle,
    SessionType,
    calculate_efficiency,
    format_time,
)


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "00:00"), (59, "00:59"), (3000, "50:00"), (3725, "62:05"), (-5, "00:00")],
)
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


def test_calculate_efficiency_caps_and_handles_zero_goal():
    assert calculate_efficiency(30, 60) == 50
    assert calculate_efficiency(90, 60) == 100
    assert calculate_efficiency(10, 0) == 0
    assert calculate_efficiency(1, 3) == 33


def test_calculate_efficiency_rounds_halves_up():
    assert calculate_efficiency(1, 8) == 13
    assert calculate_efficiency(5, 8) == 63


def test_config_rejects_non_positive_values():
    with pytest.raises(ValueError):
        PomodoroConfig(sprint_duration=0)
    with pytest.raises(ValueError):
        PomodoroConfig(sessions_before_long_break=0)


def test_sprint_rolls_into_auto_started_short_break():
    cycle = PomodoroCycle()
    cycle.start()

    finished = cycle.tick(50 * 60)

    assert finished == 1
    assert cycle.total_sessions == 1
    assert cycle.session_type == SessionType.SHORT_BREAK
    assert cycle.is_active is True
    assert cycle.time_left == 7 * 60


def test_break_end_waits_for_manual_sprint_start():
    cycle = PomodoroCycle()
    cycle.start()
    cycle.tick(50 * 60)

    cycle.tick(7 * 60)

    assert cycle.session_type == SessionType.WORK
    assert cycle.is_active is False
    assert cycle.current_session == 2
    assert cycle.time_left == 50 * 60


def test_long_break_every_fourth_sprint():
    config = PomodoroConfig(
        sprint_duration=1,
        short_break_duration=1,
        long_break_duration=2,
        auto_start_sprints=True,
    )
    cycle = PomodoroCycle(config)
    cycle.start()

    finished = cycle.tick(7 * 60)

    assert finished == 7
    assert cycle.total_sessions == 4
    assert cycle.session_type == SessionType.LONG_BREAK
    assert cycle.time_left == 2 * 60


def test_breaks_wait_when_auto_start_disabled():
    cycle = PomodoroCycle(PomodoroConfig(auto_start_breaks=False))
    cycle.start()
    cycle.tick(50 * 60)

    assert cycle.session_type == SessionType.SHORT_BREAK
    assert cycle.is_active is False
    assert cycle.tick(60) == 0


def test_stop_rewinds_and_skip_completes():
    cycle = PomodoroCycle()
    cycle.start()
    cycle.tick(600)

    cycle.stop()
    assert cycle.is_active is False
    assert cycle.time_left == 50 * 60

    cycle.skip()
    assert cycle.total_sessions == 1
    assert cycle.session_type == SessionType.SHORT_BREAK


def test_pause_freezes_clock_and_update_config_replaces_values():
    cycle = PomodoroCycle()
    cycle.start(duration_minutes=10)
    cycle.tick(30)
    cycle.pause()

    assert cycle.tick(120) == 0
    assert cycle.time_left == 10 * 60 - 30

    cycle.update_config(short_break_duration=3)
    assert cycle.config.short_break_duration == 3
    assert cycle.config.sprint_duration == 50
