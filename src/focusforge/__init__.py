"""FocusForge - Pomodoro timer and task list for the terminal."""

__version__ = "0.1.0"
