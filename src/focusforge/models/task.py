"""Task data models and the plain-text task file row format.

Each task is stored as one line: ``[ ] text`` when open or ``[X] text`` when
done.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

MAX_TASKS = 100
MAX_TASK_LEN = 255

DONE_MARK = "X"
OPEN_MARK = " "


class Task(BaseModel):
    """A single entry in the task list."""

    text: str
    done: bool = False

    @field_validator("text")
    @classmethod
    def clean_text(cls, value: str) -> str:
        """Keep text on one line and silently cut it to the storable maximum."""
        return value.replace("\r", " ").replace("\n", " ")[:MAX_TASK_LEN]

    def to_line(self) -> str:
        """Serialize as a task file line, without the trailing newline."""
        mark = DONE_MARK if self.done else OPEN_MARK
        return f"[{mark}] {self.text}"

    @classmethod
    def from_line(cls, line: str) -> "Task | None":
        """Parse a task file line. Returns None when the prefix doesn't match."""
        line = line.rstrip("\r\n")
        if len(line) < 4 or line[0] != "[" or line[2] != "]" or line[3] != " ":
            return None
        return cls(text=line[4:], done=line[1] == DONE_MARK)
