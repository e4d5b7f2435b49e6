"""Main entry point for FocusForge."""

import typer

from focusforge.commands import (
    run_command,
    sessions_command,
    tasks_command,
    version_command,
)

app = typer.Typer(
    name="focusforge",
    help="Pomodoro focus timer with a lightweight task list",
)

app.command("run")(run_command.run)
app.command("version")(version_command.version)
app.command("sessions")(sessions_command.sessions)
app.command("streak")(sessions_command.streak)
app.add_typer(tasks_command.app, name="tasks", help="Task list commands")


@app.callback(invoke_without_command=True)
def default(ctx: typer.Context) -> None:
    """Start the interactive session when no command is given."""
    if ctx.invoked_subcommand is None:
        run_command.run()


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
