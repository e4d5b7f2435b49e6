"""Unit tests for focusforge.models.focus.state.

Coverage strategy
-----------------
* ``TimerStateMachine`` runs against a real ``SessionLog`` in *tmp_path* and
  a fake clock, so logged durations are exact.
* Every transition guard (already active, nothing to stop/skip) is covered,
  as is the shared skip/expiry path.
"""

from __future__ import annotations

import pytest

from focusforge.models.exceptions import SessionError
from focusforge.models.focus.state import (
    BREAK_DURATION,
    DEFAULT_FOCUS_TASK,
    FOCUS_DURATION,
    TimerSession,
)


def _rows(session_log):
    return list(session_log.iter_records())


class TestTimerSession:
    def test_defaults(self):
        session = TimerSession()
        assert session.phase == "inactive"
        assert session.remaining_seconds == FOCUS_DURATION
        assert not session.is_active

    def test_is_active_for_focus_and_break(self):
        assert TimerSession(phase="focus").is_active
        assert TimerSession(phase="break").is_active


class TestStart:
    def test_start_focus(self, timer, clock):
        message = timer.start_focus()
        assert message == "Focus session started"
        assert timer.phase == "focus"
        assert timer.remaining_seconds == 1500
        assert timer.session.phase_start == clock.now

    def test_start_break(self, timer):
        assert timer.start_break() == "Break session started"
        assert timer.phase == "break"
        assert timer.remaining_seconds == 300

    @pytest.mark.parametrize("first", ["start_focus", "start_break"])
    @pytest.mark.parametrize("second", ["start_focus", "start_break"])
    def test_start_while_active_is_rejected(self, timer, first, second):
        getattr(timer, first)()
        phase = timer.phase
        remaining = timer.remaining_seconds

        with pytest.raises(SessionError, match="Session already active"):
            getattr(timer, second)()

        assert timer.phase == phase
        assert timer.remaining_seconds == remaining


class TestStop:
    def test_stop_inactive_is_rejected(self, timer, session_log):
        with pytest.raises(SessionError, match="No active session"):
            timer.stop()
        assert _rows(session_log) == []

    def test_stop_focus_logs_elapsed_time(self, timer, clock, session_log):
        timer.start_focus()
        clock.advance(600)

        assert timer.stop() == "Session stopped"

        assert timer.phase == "inactive"
        assert timer.remaining_seconds == FOCUS_DURATION
        rows = _rows(session_log)
        assert len(rows) == 1
        assert rows[0].duration_seconds == 600
        assert rows[0].date == "2024-03-15"
        assert rows[0].time == "10:00"
        assert rows[0].description == DEFAULT_FOCUS_TASK

    def test_stop_break_logs_nothing(self, timer, clock, session_log):
        timer.start_break()
        clock.advance(60)
        timer.stop()

        assert timer.phase == "inactive"
        assert timer.remaining_seconds == FOCUS_DURATION
        assert _rows(session_log) == []


class TestSkip:
    def test_skip_inactive_is_rejected(self, timer):
        with pytest.raises(SessionError, match="No active session"):
            timer.skip()

    def test_skip_focus_logs_and_starts_break(self, timer, clock, session_log):
        timer.set_focus_task("Write report")
        timer.start_focus()
        clock.advance(90)

        message = timer.skip()

        assert message == "Focus session completed. Break started."
        assert timer.phase == "break"
        assert timer.remaining_seconds == BREAK_DURATION
        rows = _rows(session_log)
        assert [(r.duration_seconds, r.description) for r in rows] == [(90, "Write report")]

    def test_skip_break_returns_to_inactive(self, timer, session_log):
        timer.start_break()
        message = timer.skip()

        assert message == "Break completed. Ready for next focus session."
        assert timer.phase == "inactive"
        assert timer.remaining_seconds == FOCUS_DURATION
        assert _rows(session_log) == []


class TestTick:
    def test_tick_inactive_does_nothing(self, timer):
        assert timer.tick() is None
        assert timer.remaining_seconds == FOCUS_DURATION

    def test_tick_decrements(self, timer):
        timer.start_focus()
        assert timer.tick() is None
        assert timer.remaining_seconds == 1499

    def test_focus_expiry_moves_to_break_and_logs_once(self, timer, clock, session_log):
        timer.start_focus()
        clock.advance(1500)
        timer.session.remaining_seconds = 1

        message = timer.tick()

        assert message == "Focus session completed! Break started."
        assert timer.phase == "break"
        assert timer.remaining_seconds == 300
        rows = _rows(session_log)
        assert len(rows) == 1
        assert rows[0].duration_seconds >= 1500

    def test_logged_duration_is_wall_clock_not_nominal(self, timer, clock, session_log):
        timer.start_focus()
        # Keys pressed during the session do not tick the countdown
        clock.advance(1700)
        timer.session.remaining_seconds = 1
        timer.tick()

        assert _rows(session_log)[0].duration_seconds == 1700

    def test_break_expiry_returns_to_inactive(self, timer, session_log):
        timer.start_break()
        timer.session.remaining_seconds = 1

        message = timer.tick()

        assert message == "Break completed! Ready for next focus session."
        assert timer.phase == "inactive"
        assert timer.remaining_seconds == FOCUS_DURATION
        assert _rows(session_log) == []

    def test_full_cycle_by_ticking(self, timer, clock, session_log):
        timer.start_focus()
        for _ in range(FOCUS_DURATION):
            clock.advance(1)
            timer.tick()
        assert timer.phase == "break"

        for _ in range(BREAK_DURATION):
            clock.advance(1)
            timer.tick()
        assert timer.phase == "inactive"
        assert len(_rows(session_log)) == 1


class TestFocusTask:
    def test_default_focus_task(self, timer):
        assert timer.focus_task == "???"

    def test_set_focus_task_truncates(self, timer):
        assert timer.set_focus_task("x" * 300) == "Focus task updated"
        assert len(timer.focus_task) == 255

    def test_snapshot(self, timer):
        timer.set_focus_task("Read paper")
        timer.start_break()
        snap = timer.snapshot()
        assert snap.phase == "break"
        assert snap.remaining_seconds == 300
        assert snap.focus_task == "Read paper"


class TestStreakIntegration:
    def test_focus_commit_updates_streak(self, timer, clock, streaks):
        timer.start_focus()
        clock.advance(120)
        timer.stop()

        assert streaks.current == 1
        assert streaks.maximum == 1

    def test_last_record_is_exposed(self, timer, clock):
        timer.start_focus()
        clock.advance(30)
        timer.stop()
        assert timer.last_record is not None
        assert timer.last_record.duration_seconds == 30
