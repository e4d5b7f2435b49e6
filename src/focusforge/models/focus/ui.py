"""Full-screen display for the interactive session.

The display only renders ``DisplaySnapshot`` values; it never changes state.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from focusforge.models.exceptions import DisplayError
from focusforge.models.task import Task
from focusforge.utils import exit_codes
from focusforge.utils.datetime_utils import format_time

MIN_TERMINAL_HEIGHT = 10
MIN_TERMINAL_WIDTH = 80
HELP_WIDTH = 35

PHASE_LABELS = {
    "focus": ("[FOCUS", "bold red"),
    "break": ("[BREAK", "bold green"),
    "inactive": ("[READY", "bold cyan"),
}

HELP_LINES = [
    ("SESSION", ""),
    ("a", "Start focus session"),
    ("f", "Start break session"),
    ("s", "Stop session"),
    ("d", "Skip current session"),
    ("", ""),
    ("TASKS", ""),
    ("Enter", "Type a command / add task"),
    ("Space", "Set focus task"),
    ("j", "Mark task done"),
    ("k", "Unmark task"),
    ("l", "Remove task"),
    ("w/x", "Navigate tasks"),
    ("", ""),
    ("OTHER", ""),
    ("q", "Quit"),
    ("?", "Toggle help"),
]


@dataclass(frozen=True)
class DisplaySnapshot:
    """Everything one frame needs, copied out of the session state."""

    version: str
    phase: str
    remaining_seconds: int
    focus_task: str
    tasks: tuple[Task, ...]
    selected_index: int | None
    streak_current: int
    streak_max: int
    today_sessions: int
    input_mode: bool
    input_buffer: str
    show_help: bool
    notification: str | None = None


def check_terminal_size(console: Console) -> None:
    """Raise DisplayError when the terminal cannot fit the layout."""
    width, height = console.size
    if height < MIN_TERMINAL_HEIGHT or width < MIN_TERMINAL_WIDTH:
        raise DisplayError(
            f"Terminal too small. Minimum size: {MIN_TERMINAL_HEIGHT}x{MIN_TERMINAL_WIDTH}",
            exit_codes.ERROR_TERMINAL_TOO_SMALL,
        )


class TimerDisplay:
    """Builds the full-screen layout from snapshots."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def create_layout(self, snapshot: DisplaySnapshot) -> Layout:
        """Create the layout for one frame."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=1),
            Layout(name="timer", size=5),
            Layout(name="main"),
            Layout(name="footer", size=3),
        )

        title = Text(f"FOCUSFORGE v{snapshot.version}", style="bold", justify="center")
        layout["header"].update(title)
        layout["timer"].update(self._timer_panel(snapshot))

        if snapshot.show_help:
            layout["main"].split_row(
                Layout(self._tasks_panel(snapshot), name="tasks"),
                Layout(self._help_panel(), name="help", size=HELP_WIDTH),
            )
        else:
            layout["main"].update(self._tasks_panel(snapshot))

        layout["footer"].update(self._footer_panel(snapshot))
        return layout

    def _timer_panel(self, snapshot: DisplaySnapshot) -> Panel:
        label, style = PHASE_LABELS.get(snapshot.phase, PHASE_LABELS["inactive"])
        clock = Text(f"{label} {format_time(snapshot.remaining_seconds)}]", style=style)

        info = Text(justify="center")
        info.append(f"Focus: {snapshot.focus_task}", style="white")
        info.append(f"   Today: {snapshot.today_sessions}", style="dim")
        info.append(
            f"   Streak: {snapshot.streak_current} (max {snapshot.streak_max})",
            style="dim",
        )

        return Panel(Group(Align.center(clock), Align.center(info)))

    def _tasks_panel(self, snapshot: DisplaySnapshot) -> Panel:
        if not snapshot.tasks:
            body = Text("No tasks yet. Press Enter to add one.", style="dim")
            return Panel(body, title="TASKS", title_align="left")

        table = Table.grid(padding=(0, 1))
        table.add_column(width=1)
        table.add_column(justify="right")
        table.add_column()
        for i, task in enumerate(snapshot.tasks):
            selected = i == snapshot.selected_index
            marker = ">" if selected else " "
            status = "[X]" if task.done else "[ ]"
            style = "reverse" if selected else ("dim" if task.done else "")
            table.add_row(marker, f"{i + 1}.", Text(f"{status} {task.text}"), style=style)

        return Panel(table, title="TASKS", title_align="left")

    def _help_panel(self) -> Panel:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        for key, description in HELP_LINES:
            table.add_row(key, description)
        return Panel(table, title="HELP")

    def _footer_panel(self, snapshot: DisplaySnapshot) -> Panel:
        if snapshot.notification:
            return Panel(Text(snapshot.notification, style="bold yellow"))
        if snapshot.input_mode:
            return Panel(Text(f"Command: {snapshot.input_buffer}", style="bold"))
        return Panel(
            Text("Enter: add task | Space: set focus | ?: help", style="dim")
        )
