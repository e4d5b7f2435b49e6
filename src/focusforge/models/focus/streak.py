"""Consecutive-day focus streaks, cached in a small key=value file.

The cache is recomputed only when a focus session is committed. Readers such
as the display use the cached numbers and never rescan the log.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from focusforge.utils.datetime_utils import today_str, yesterday_str
from focusforge.utils.logger import get_logger

from .history import SessionLog, SessionRecord

MAX_KEY = "streak_max="
CURRENT_KEY = "streak_current="


def _falls_on(record: SessionRecord, date: str) -> bool:
    """True when *record* started or ended on *date*.

    A session that runs past midnight is dated by its start but belongs to
    both days.
    """
    return date in (record.date, record.end_date)


@dataclass
class StreakState:
    """Cached streak counters."""

    max: int = 0
    current: int = 0

    def to_text(self) -> str:
        return f"{MAX_KEY}{self.max}\n{CURRENT_KEY}{self.current}\n"

    @classmethod
    def from_lines(cls, lines) -> "StreakState":
        """Parse cache lines; unknown or unreadable lines are ignored."""
        state = cls()
        for line in lines:
            line = line.strip()
            try:
                if line.startswith(MAX_KEY):
                    state.max = max(0, int(line[len(MAX_KEY):]))
                elif line.startswith(CURRENT_KEY):
                    state.current = max(0, int(line[len(CURRENT_KEY):]))
            except ValueError:
                continue
        return state


class StreakTracker:
    """Derives the current and longest streak from the session log."""

    def __init__(
        self,
        meta_file: Path,
        log: SessionLog,
        clock: Callable[[], float] = time.time,
    ):
        self.meta_file = meta_file
        self.log = log
        self.clock = clock
        self.logger = get_logger()
        self.state = self.load()

        # A session that ended today in an earlier run has already been credited
        today = today_str(self.clock())
        self._credited_on: str | None = None
        if any(_falls_on(record, today) for record in self.log.iter_records()):
            self._credited_on = today

    @property
    def current(self) -> int:
        return self.state.current

    @property
    def maximum(self) -> int:
        return self.state.max

    def load(self) -> StreakState:
        """Read the cache file. A missing or unreadable file counts as zero."""
        try:
            with open(self.meta_file, encoding="utf-8") as f:
                return StreakState.from_lines(f)
        except FileNotFoundError:
            return StreakState()
        except OSError as e:
            self.logger.warning("Failed to read streak cache %s: %s", self.meta_file, e)
            return StreakState()

    def save(self) -> bool:
        try:
            with open(self.meta_file, "w", encoding="utf-8") as f:
                f.write(self.state.to_text())
        except OSError as e:
            self.logger.error("Failed to write streak cache %s: %s", self.meta_file, e)
            return False
        return True

    def recompute_streak(self) -> StreakState:
        """
        Credit today's focus work to the streak, at most once per day.

        Rules, evaluated after the newest session has been appended:

        - today already credited: nothing changes
        - a session exists for yesterday: the streak grows by one
        - otherwise: a new streak of one day starts

        Returns:
            The (possibly updated) streak state
        """
        now = self.clock()
        today = today_str(now)
        yesterday = yesterday_str(now)

        if self._credited_on == today:
            return self.state

        # The newest row is the session being credited; any earlier row that
        # started or ended today means the day was counted before.
        earlier = list(self.log.iter_records())[:-1]
        if any(_falls_on(record, today) for record in earlier):
            self._credited_on = today
            return self.state

        if any(_falls_on(record, yesterday) for record in earlier):
            self.state.current += 1
        else:
            self.state.current = 1
        self.state.max = max(self.state.max, self.state.current)
        self._credited_on = today

        self.logger.info(
            "Streak updated: current=%d max=%d", self.state.current, self.state.max
        )
        self.save()
        return self.state
