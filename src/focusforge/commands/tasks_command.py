"""Task management commands that work without the interactive session."""

import typer

from focusforge.config import get_config_manager
from focusforge.models.exceptions import UserInputError
from focusforge.models.focus.commands import parse_task_number
from focusforge.services.task_service import TaskListStore
from focusforge.utils import exit_codes
from focusforge.utils.ui.console import get_console
from focusforge.utils.ui.formatters import format_info, format_success, tasks_table

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Task list commands")
console = get_console()


def _load_store() -> TaskListStore:
    manager = get_config_manager()
    manager.ensure_directories()
    store = TaskListStore(manager.paths.tasks_file)
    store.load()
    return store


def _resolve(store: TaskListStore, number: str) -> int:
    try:
        return parse_task_number(number, len(store))
    except UserInputError as e:
        raise AppError(str(e), exit_codes.ERROR_INVALID_ARGS) from e


@app.callback(invoke_without_command=True)
def default(ctx: typer.Context) -> None:
    """List tasks when no subcommand is given."""
    if ctx.invoked_subcommand is None:
        list_tasks()


@app.command("list")
@command_wrapper
def list_tasks() -> None:
    """List tasks with the numbers the input line uses."""
    store = _load_store()
    if not store.tasks:
        format_info("No tasks yet")
        return
    console.print(tasks_table(store.tasks))


@app.command("add")
@command_wrapper
def add_task(text: str = typer.Argument(..., help="Task text")) -> None:
    """Add a task to the end of the list."""
    store = _load_store()
    try:
        format_success(store.add(text))
    except UserInputError as e:
        raise AppError(str(e), exit_codes.ERROR_INVALID_ARGS) from e


@app.command("done")
@command_wrapper
def mark_done(number: str = typer.Argument(..., help="Task number (1-based)")) -> None:
    """Mark a task as done."""
    store = _load_store()
    format_success(store.mark_done(_resolve(store, number)))


@app.command("undo")
@command_wrapper
def unmark(number: str = typer.Argument(..., help="Task number (1-based)")) -> None:
    """Mark a done task as open again."""
    store = _load_store()
    format_success(store.unmark(_resolve(store, number)))


@app.command("remove")
@command_wrapper
def remove(number: str = typer.Argument(..., help="Task number (1-based)")) -> None:
    """Remove a task; later tasks move up one place."""
    store = _load_store()
    format_success(store.remove(_resolve(store, number)))
