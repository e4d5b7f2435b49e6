"""Focus mode - Pomodoro timer, session log and streaks."""

from .commands import Command, CommandType, parse_command, parse_task_number
from .history import SessionLog, SessionRecord
from .state import (
    BREAK_DURATION,
    FOCUS_DURATION,
    TimerSession,
    TimerStateMachine,
)
from .streak import StreakState, StreakTracker

__all__ = [
    "BREAK_DURATION",
    "FOCUS_DURATION",
    "Command",
    "CommandType",
    "SessionLog",
    "SessionRecord",
    "StreakState",
    "StreakTracker",
    "TimerSession",
    "TimerStateMachine",
    "parse_command",
    "parse_task_number",
]
