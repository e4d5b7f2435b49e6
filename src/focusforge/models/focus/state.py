"""Focus/break timer state machine.

The cycle is ``inactive -> focus -> break -> inactive``. A focus phase is
logged whenever it ends (stop, skip or expiry) with the wall-clock time that
actually passed, not the nominal 25 minutes.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from focusforge.models.exceptions import SessionError
from focusforge.models.task import MAX_TASK_LEN
from focusforge.utils.logger import get_logger

from .history import SessionLog, SessionRecord
from .streak import StreakTracker

Phase = Literal["inactive", "focus", "break"]

FOCUS_DURATION = 1500  # 25 minutes in seconds
BREAK_DURATION = 300  # 5 minutes in seconds
DEFAULT_FOCUS_TASK = "???"


@dataclass
class TimerSession:
    """The one timer owned by a running session."""

    phase: Phase = "inactive"
    remaining_seconds: int = FOCUS_DURATION
    phase_start: float = 0.0

    @property
    def is_active(self) -> bool:
        return self.phase != "inactive"


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view of the timer for display."""

    phase: Phase
    remaining_seconds: int
    focus_task: str


class TimerStateMachine:
    """Owns the timer session and its transitions."""

    def __init__(
        self,
        log: SessionLog,
        streaks: StreakTracker | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.log = log
        self.streaks = streaks
        self.clock = clock
        self.session = TimerSession()
        self.focus_task = DEFAULT_FOCUS_TASK
        self.last_record: SessionRecord | None = None
        self.logger = get_logger()

    @property
    def phase(self) -> Phase:
        return self.session.phase

    @property
    def remaining_seconds(self) -> int:
        return self.session.remaining_seconds

    def set_focus_task(self, text: str) -> str:
        """Set the description logged with the next focus session."""
        self.focus_task = text[:MAX_TASK_LEN]
        return "Focus task updated"

    def start_focus(self) -> str:
        self._begin("focus", FOCUS_DURATION)
        return "Focus session started"

    def start_break(self) -> str:
        self._begin("break", BREAK_DURATION)
        return "Break session started"

    def stop(self) -> str:
        """End the current phase early. A focus phase is still logged."""
        self._require_active()
        if self.session.phase == "focus":
            self._commit_focus()
        self._enter("inactive", FOCUS_DURATION)
        return "Session stopped"

    def skip(self) -> str:
        """Jump to the next phase of the cycle."""
        self._require_active()
        return self._advance(expired=False)

    def tick(self) -> str | None:
        """
        Account for one elapsed second.

        Returns:
            A message when the phase expired on this tick, otherwise None
        """
        if not self.session.is_active:
            return None

        self.session.remaining_seconds -= 1
        if self.session.remaining_seconds <= 0:
            return self._advance(expired=True)
        return None

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            phase=self.session.phase,
            remaining_seconds=self.session.remaining_seconds,
            focus_task=self.focus_task,
        )

    def _advance(self, expired: bool) -> str:
        """Shared transition for skip and expiry."""
        suffix = "!" if expired else "."
        if self.session.phase == "focus":
            self._commit_focus()
            self._enter("break", BREAK_DURATION)
            return f"Focus session completed{suffix} Break started."

        self._enter("inactive", FOCUS_DURATION)
        return f"Break completed{suffix} Ready for next focus session."

    def _begin(self, phase: Phase, duration: int) -> None:
        if self.session.is_active:
            raise SessionError("Session already active")
        self._enter(phase, duration)

    def _enter(self, phase: Phase, duration: int) -> None:
        self.logger.info("Timer %s -> %s", self.session.phase, phase)
        self.session.phase = phase
        self.session.remaining_seconds = duration
        self.session.phase_start = self.clock()

    def _require_active(self) -> None:
        if not self.session.is_active:
            raise SessionError("No active session")

    def _commit_focus(self) -> None:
        self.last_record = self.log.commit_session(
            self.focus_task,
            self.session.phase_start,
            self.clock(),
            streaks=self.streaks,
        )
