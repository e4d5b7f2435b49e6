"""Task list store backed by a plain-text file.

Every mutation rewrites the whole file. The list is capped at 100 entries,
so a full rewrite is always small.
"""

from __future__ import annotations

from pathlib import Path

from focusforge.models.exceptions import InvalidTaskNumber, TaskListError
from focusforge.models.task import MAX_TASKS, Task
from focusforge.utils.logger import get_logger


class TaskListStore:
    """Ordered, bounded task list with a selection cursor."""

    def __init__(self, tasks_file: Path, capacity: int = MAX_TASKS):
        self.tasks_file = tasks_file
        self.capacity = capacity
        self._tasks: list[Task] = []
        self._selected = 0
        self.logger = get_logger()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Snapshot of the tasks in display order."""
        return tuple(self._tasks)

    @property
    def selected_index(self) -> int | None:
        """Index of the selected task, or None when the list is empty."""
        if not self._tasks:
            return None
        return self._selected

    @property
    def selected_task(self) -> Task | None:
        index = self.selected_index
        return None if index is None else self._tasks[index]

    def is_full(self) -> bool:
        return len(self._tasks) >= self.capacity

    def __len__(self) -> int:
        return len(self._tasks)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, text: str | None) -> str:
        """Append a new open task and persist the list."""
        if not text:
            raise TaskListError("Task text is empty")
        if self.is_full():
            raise TaskListError("Maximum number of tasks reached")

        self._tasks.append(Task(text=text))
        self.save()
        return "Task added"

    def mark_done(self, index: int) -> str:
        self._check_index(index)
        self._tasks[index].done = True
        self.save()
        return "Task marked as done"

    def unmark(self, index: int) -> str:
        self._check_index(index)
        self._tasks[index].done = False
        self.save()
        return "Task unmarked"

    def remove(self, index: int) -> str:
        """Delete a task; later tasks shift up and the selection is clamped."""
        self._check_index(index)
        del self._tasks[index]
        if self._selected >= len(self._tasks):
            self._selected = max(0, len(self._tasks) - 1)
        self.save()
        return "Task removed"

    def select_prev(self) -> None:
        if self._selected > 0:
            self._selected -= 1

    def select_next(self) -> None:
        if self._selected < len(self._tasks) - 1:
            self._selected += 1

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._tasks):
            raise InvalidTaskNumber()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> bool:
        """Rewrite the task file. Failures are logged and reported as False."""
        try:
            with open(self.tasks_file, "w", encoding="utf-8") as f:
                for task in self._tasks:
                    f.write(task.to_line() + "\n")
        except OSError as e:
            self.logger.error("Failed to write tasks file %s: %s", self.tasks_file, e)
            return False
        return True

    def load(self) -> None:
        """Replace the in-memory list with the contents of the task file.

        A missing file yields an empty list. Lines without a ``[?] `` prefix
        are skipped, and loading stops once the list is full.
        """
        tasks: list[Task] = []
        try:
            with open(self.tasks_file, encoding="utf-8", errors="replace") as f:
                for line in f:
                    if len(tasks) >= self.capacity:
                        break
                    task = Task.from_line(line)
                    if task is None:
                        self.logger.debug("Skipping task line: %r", line)
                        continue
                    tasks.append(task)
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.error("Failed to read tasks file %s: %s", self.tasks_file, e)

        self._tasks = tasks
        self._selected = 0
