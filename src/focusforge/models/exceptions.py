"""Custom exceptions for FocusForge."""


class FocusForgeError(Exception):
    """Base exception for all FocusForge errors."""


class ConfigurationError(FocusForgeError):
    """Raised when the data directory or its files cannot be set up."""

    def __init__(self, message: str, exit_code: int = 3):
        super().__init__(message)
        self.exit_code = exit_code


class DisplayError(FocusForgeError):
    """Raised when the terminal cannot host the interactive display."""

    def __init__(self, message: str, exit_code: int = 6):
        super().__init__(message)
        self.exit_code = exit_code


class UserInputError(FocusForgeError):
    """A rejected user action. Shown as a notification, never fatal."""


class InvalidTaskNumber(UserInputError):
    """Raised when a task number argument is not a valid position."""

    def __init__(self, message: str = "Invalid task number"):
        super().__init__(message)


class TaskListError(UserInputError):
    """Raised when a task list mutation is rejected."""


class SessionError(UserInputError):
    """Raised when a timer transition is not allowed from the current phase."""
