"""Focus session history stored as an append-only CSV-like log.

Row format::

    YYYY-MM-DD,HH:MM,<duration_seconds>,"<description>"

The description is quoted but never escaped, so double quotes are replaced
before a row is written. Rows that fail to parse are skipped on read, which
lets the log survive a partial write.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from focusforge.models.task import MAX_TASK_LEN
from focusforge.utils.datetime_utils import (
    format_clock,
    format_date,
    session_end_clock,
    session_end_date,
)
from focusforge.utils.logger import get_logger

if TYPE_CHECKING:
    from .streak import StreakTracker


@dataclass(frozen=True)
class SessionRecord:
    """One completed focus session."""

    date: str  # YYYY-MM-DD, local
    time: str  # HH:MM, local start time
    duration_seconds: int
    description: str

    def to_row(self) -> str:
        """Serialize as a log row, without the trailing newline."""
        return f'{self.date},{self.time},{self.duration_seconds},"{self.description}"'

    @classmethod
    def from_row(cls, line: str) -> "SessionRecord | None":
        """Parse a log row. Returns None for anything malformed."""
        line = line.rstrip("\r\n")
        parts = line.split(",", 3)
        if len(parts) != 4:
            return None

        date, clock, duration, rest = parts
        try:
            duration_seconds = int(duration)
        except ValueError:
            return None

        if not rest.startswith('"'):
            return None
        closing = rest.find('"', 1)
        if closing == -1:
            return None

        return cls(
            date=date,
            time=clock,
            duration_seconds=duration_seconds,
            description=rest[1:closing],
        )

    @property
    def end_time(self) -> str | None:
        """Wall-clock HH:MM at which the session ended."""
        return session_end_clock(self.date, self.time, self.duration_seconds)

    @property
    def end_date(self) -> str | None:
        """Local date on which the session ended."""
        return session_end_date(self.date, self.time, self.duration_seconds)


def sanitize_description(text: str) -> str:
    """Make *text* safe for the unescaped quoted description field."""
    return text.replace('"', "'").replace("\r", " ").replace("\n", " ")[:MAX_TASK_LEN]


class SessionLog:
    """Append-only log of completed focus sessions."""

    def __init__(self, log_file: Path):
        self.log_file = log_file
        self.logger = get_logger()

    def append(self, record: SessionRecord) -> bool:
        """Append one row. I/O failures are logged and reported as False."""
        try:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(record.to_row() + "\n")
        except OSError as e:
            self.logger.error("Failed to append to session log %s: %s", self.log_file, e)
            return False
        return True

    def commit_session(
        self,
        description: str,
        start: float,
        end: float,
        streaks: StreakTracker | None = None,
    ) -> SessionRecord | None:
        """
        Record a finished focus phase and update the streak.

        Args:
            description: Focus task the session was spent on
            start: Epoch seconds when the focus phase began
            end: Epoch seconds when it ended
            streaks: Tracker to recompute after the row is written

        Returns:
            The appended record, or None if the write failed
        """
        # Sub-second sessions still count as one logged second
        duration = max(1, int(end - start))
        record = SessionRecord(
            date=format_date(start),
            time=format_clock(start),
            duration_seconds=duration,
            description=sanitize_description(description),
        )

        if not self.append(record):
            return None

        self.logger.info(
            "Logged focus session %s %s (%ss) %r",
            record.date,
            record.time,
            record.duration_seconds,
            record.description,
        )

        if streaks is not None:
            streaks.recompute_streak()
        return record

    def iter_records(self) -> Iterator[SessionRecord]:
        """Yield every parseable record in file order."""
        try:
            with open(self.log_file, encoding="utf-8", errors="replace") as f:
                for line in f:
                    if not line.strip():
                        continue
                    record = SessionRecord.from_row(line)
                    if record is None:
                        self.logger.warning("Skipping malformed session row: %r", line)
                        continue
                    yield record
        except FileNotFoundError:
            return
        except OSError as e:
            self.logger.error("Failed to read session log %s: %s", self.log_file, e)

    def records_on(self, date: str) -> list[SessionRecord]:
        """All records for a calendar date, in one pass."""
        return [record for record in self.iter_records() if record.date == date]

    def count_on(self, date: str) -> int:
        """Number of sessions logged for a calendar date."""
        return sum(1 for record in self.iter_records() if record.date == date)
