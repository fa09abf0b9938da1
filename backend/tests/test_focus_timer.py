import pytest

from app.services.focus_timer import FocusTimer, TimerPhase


def test_work_rolls_into_break_then_completes():
    timer = FocusTimer()
    timer.start(25, 5, habit_name="Write", habit_id="h-1")

    assert timer.advance(25 * 60) is True
    assert timer.phase == TimerPhase.BREAK
    assert timer.time_left == 5 * 60
    assert timer.is_running is True

    assert timer.advance(5 * 60) is False
    assert timer.phase == TimerPhase.COMPLETE
    assert timer.is_running is False
    assert timer.is_active is False


def test_single_large_advance_crosses_both_phases():
    timer = FocusTimer()
    timer.start(1, 1)

    assert timer.advance(10_000) is True
    assert timer.phase == TimerPhase.COMPLETE
    assert timer.time_left == 0


def test_zero_break_completes_directly():
    timer = FocusTimer()
    timer.start(1, 0)

    timer.advance(60)

    assert timer.phase == TimerPhase.COMPLETE


def test_progress_and_pause():
    timer = FocusTimer()
    timer.start(10, 2)
    timer.advance(300)

    assert timer.progress == pytest.approx(50.0)

    timer.pause()
    assert timer.advance(120) is False
    assert timer.time_left == 300

    timer.resume()
    timer.advance(60)
    assert timer.time_left == 240


def test_start_rejects_invalid_durations():
    with pytest.raises(ValueError):
        FocusTimer().start(0, 5)


def test_stop_resets_everything():
    timer = FocusTimer()
    timer.start(10, 2, habit_name="Read")

    timer.stop()

    assert timer == FocusTimer()
    assert timer.to_snapshot() is None


def test_snapshot_round_trip_for_running_timer():
    timer = FocusTimer()
    timer.start(25, 5, habit_name="Write", habit_id="h-1")
    timer.advance(60)

    snapshot = timer.to_snapshot()
    restored = FocusTimer.from_snapshot(snapshot)

    assert snapshot["phase"] == "work"
    assert restored == timer


def test_reload_discards_paused_or_finished_timers():
    timer = FocusTimer()
    timer.start(25, 5)
    timer.pause()
    paused = timer.to_snapshot()

    assert FocusTimer.from_snapshot(paused).phase == TimerPhase.IDLE
    assert FocusTimer.from_snapshot(paused, running_only=False).phase == TimerPhase.WORK
    assert FocusTimer.from_snapshot(None).phase == TimerPhase.IDLE
    assert FocusTimer.from_snapshot({"phase": "work", "time_left": 0, "is_running": True}).phase == TimerPhase.IDLE
