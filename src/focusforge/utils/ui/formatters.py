"""Output formatters for FocusForge CLI commands."""

from rich.table import Table

from focusforge.models.focus.history import SessionRecord
from focusforge.models.task import Task

from .console import get_console

console = get_console()
error_console = get_console(stderr=True)


def format_error(message: str) -> None:
    """Format and display an error message on stderr."""
    error_console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def tasks_table(tasks: list[Task] | tuple[Task, ...]) -> Table:
    """Table of tasks numbered the way the input line addresses them."""
    table = Table(title="Tasks", show_lines=False)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Done", justify="center")
    table.add_column("Task")

    for i, task in enumerate(tasks, start=1):
        table.add_row(
            str(i),
            "[green]X[/green]" if task.done else "",
            task.text,
            style="dim" if task.done else None,
        )
    return table


def sessions_table(date: str, records: list[SessionRecord]) -> Table:
    """Table of one day's focus sessions with start and end times."""
    table = Table(title=f"Session log ({date})")
    table.add_column("Start", style="cyan")
    table.add_column("End", style="cyan")
    table.add_column("Minutes", justify="right")
    table.add_column("Task")

    for record in records:
        table.add_row(
            record.time,
            record.end_time or "--:--",
            str(record.duration_seconds // 60),
            record.description or "???",
        )
    return table
