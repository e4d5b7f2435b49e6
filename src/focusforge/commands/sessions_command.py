"""Commands 'sessions' and 'streak' of focusforge."""

from typing import Optional

import typer

from focusforge.config import get_config_manager
from focusforge.models.focus.history import SessionLog
from focusforge.models.focus.streak import StreakTracker
from focusforge.utils import exit_codes
from focusforge.utils.datetime_utils import is_date_valid, today_str
from focusforge.utils.ui.console import get_console
from focusforge.utils.ui.formatters import format_info, sessions_table

from .decorators import AppError, command_wrapper

app = typer.Typer()
console = get_console()


def _open_log() -> tuple[SessionLog, StreakTracker]:
    manager = get_config_manager()
    manager.ensure_directories()
    log = SessionLog(manager.paths.sessions_file)
    return log, StreakTracker(manager.paths.meta_file, log)


@app.command("sessions")
@command_wrapper
def sessions(
    date: Optional[str] = typer.Option(
        None, "--date", "-d", help="Day to show as YYYY-MM-DD (default: today)"
    ),
) -> None:
    """Show the focus sessions logged on one day."""
    if date is None:
        date = today_str()
    elif not is_date_valid(date):
        raise AppError(f"Invalid date: {date}", exit_codes.ERROR_INVALID_ARGS)

    log, _ = _open_log()
    records = log.records_on(date)
    if not records:
        format_info(f"No sessions on {date}")
        return

    console.print(sessions_table(date, records))
    minutes = sum(record.duration_seconds for record in records) // 60
    console.print(f"[dim]{len(records)} session(s), {minutes} minute(s) focused[/dim]")


@app.command("streak")
@command_wrapper
def streak() -> None:
    """Show the current and longest focus streak."""
    log, tracker = _open_log()
    today = log.count_on(today_str())
    console.print(f"Current streak: [bold cyan]{tracker.current}[/bold cyan] day(s)")
    console.print(f"Longest streak: [bold]{tracker.maximum}[/bold] day(s)")
    console.print(f"Sessions today: {today}")
