"""
Exit codes for FocusForge.

Only the fatal startup conditions terminate the process; each has its own
code so wrapper scripts can tell them apart.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Home directory missing or data directory unusable
ERROR_CONFIG = 3

# A persisted path exceeds the platform path-length limit
ERROR_PATH_TOO_LONG = 4

# Terminal smaller than the minimum layout
ERROR_TERMINAL_TOO_SMALL = 5

# Display or keyboard subsystem failed to initialise
ERROR_DISPLAY_INIT = 6


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_CONFIG: "ERROR_CONFIG",
        ERROR_PATH_TOO_LONG: "ERROR_PATH_TOO_LONG",
        ERROR_TERMINAL_TOO_SMALL: "ERROR_TERMINAL_TOO_SMALL",
        ERROR_DISPLAY_INIT: "ERROR_DISPLAY_INIT",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or validation error",
        ERROR_CONFIG: "Configuration error - check HOME and the data directory",
        ERROR_PATH_TOO_LONG: "A data file path is too long for this platform",
        ERROR_TERMINAL_TOO_SMALL: "Terminal too small - resize and retry",
        ERROR_DISPLAY_INIT: "Could not initialise the terminal display",
    }
    return descriptions.get(code, "Unknown error")
