"""Date and time helpers shared by the timer, the session log and the CLI.

All calendar values are computed in local time, matching what the user sees
on their wall clock.
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta

DATE_FORMAT = "%Y-%m-%d"
CLOCK_FORMAT = "%H:%M"
SECONDS_PER_DAY = 86400

MIN_YEAR = 2000
MAX_YEAR = 2100


def format_time(total_seconds: int) -> str:
    """Format a countdown as ``MM:SS``.

    Minutes wrap at 100 so the value always fits in five characters; negative
    values render as ``00:00``.
    """
    total_seconds = max(0, int(total_seconds))
    minutes = (total_seconds // 60) % 100
    seconds = total_seconds % 60
    return f"{minutes:02d}:{seconds:02d}"


def format_date(timestamp: float) -> str:
    """Local calendar date of *timestamp* as ``YYYY-MM-DD``."""
    return datetime.fromtimestamp(timestamp).strftime(DATE_FORMAT)


def format_clock(timestamp: float) -> str:
    """Local wall-clock time of *timestamp* as ``HH:MM``."""
    return datetime.fromtimestamp(timestamp).strftime(CLOCK_FORMAT)


def today_str(now: float | None = None) -> str:
    """Today's local date string."""
    if now is None:
        now = time.time()
    return format_date(now)


def yesterday_str(now: float | None = None) -> str:
    """Local date string for exactly 24 hours before *now*."""
    if now is None:
        now = time.time()
    return format_date(now - SECONDS_PER_DAY)


def is_date_valid(date_str: str | None) -> bool:
    """Check that *date_str* looks like ``YYYY-MM-DD`` within loose ranges.

    Year must be 2000-2100, month 1-12 and day 1-31. Days per month are not
    checked, so ``2024-02-30`` is accepted.
    """
    if not date_str or len(date_str) != 10:
        return False
    if date_str[4] != "-" or date_str[7] != "-":
        return False

    digits = date_str[:4] + date_str[5:7] + date_str[8:]
    if not all("0" <= ch <= "9" for ch in digits):
        return False

    year = int(date_str[:4])
    month = int(date_str[5:7])
    day = int(date_str[8:])

    if year < MIN_YEAR or year > MAX_YEAR:
        return False
    if month < 1 or month > 12:
        return False
    if day < 1 or day > 31:
        return False
    return True


def _session_end(date_str: str, clock_str: str, duration_seconds: int) -> datetime | None:
    try:
        start = datetime.strptime(f"{date_str} {clock_str}", f"{DATE_FORMAT} {CLOCK_FORMAT}")
    except ValueError:
        return None
    return start + timedelta(seconds=duration_seconds)


def session_end_clock(date_str: str, clock_str: str, duration_seconds: int) -> str | None:
    """Wall-clock ``HH:MM`` at which a logged session ended.

    Returns None when the stored date or time cannot be interpreted.
    """
    end = _session_end(date_str, clock_str, duration_seconds)
    return None if end is None else end.strftime(CLOCK_FORMAT)


def session_end_date(date_str: str, clock_str: str, duration_seconds: int) -> str | None:
    """Local date on which a logged session ended.

    Differs from *date_str* for a session that ran past midnight. Returns None
    when the stored date or time cannot be interpreted.
    """
    end = _session_end(date_str, clock_str, duration_seconds)
    return None if end is None else end.strftime(DATE_FORMAT)
