"""Free-text command interpreter for the input line.

Every non-empty line maps to some command: text that matches no command
prefix is added as a new task ("quick add").
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from focusforge.models.exceptions import InvalidTaskNumber
from focusforge.models.task import MAX_TASKS

MAX_INPUT_LEN = 511


class CommandType(str, Enum):
    """Kinds of commands the input line can express."""

    NONE = "none"
    ADD_TASK = "add_task"
    SET_FOCUS_TASK = "set_focus_task"
    MARK_DONE = "mark_done"
    UNMARK = "unmark"
    REMOVE = "remove"
    START_FOCUS = "start_focus"
    START_BREAK = "start_break"
    STOP = "stop"
    SKIP = "skip"
    QUIT = "quit"
    HELP = "help"


@dataclass(frozen=True)
class Command:
    """A parsed command with its optional argument."""

    type: CommandType
    argument: str = ""


SINGLE_CHAR_COMMANDS = {
    "f": CommandType.START_FOCUS,
    "b": CommandType.START_BREAK,
    "s": CommandType.STOP,
    # Bare "d" is skip; "d <n>" is mark-done
    "d": CommandType.SKIP,
    "q": CommandType.QUIT,
    "h": CommandType.HELP,
    "?": CommandType.HELP,
}

PREFIX_COMMANDS = {
    "a": CommandType.ADD_TASK,
    "t": CommandType.SET_FOCUS_TASK,
    "d": CommandType.MARK_DONE,
    "u": CommandType.UNMARK,
    "r": CommandType.REMOVE,
}

ARGUMENT_SEPARATORS = (" ", "\t")


def parse_command(text: str | None) -> Command:
    """
    Parse one input line into a Command.

    Rules, first match wins:

    1. empty or whitespace-only -> NONE
    2. a single non-whitespace character -> its single-key command
    3. ``a``/``t``/``d``/``u``/``r`` followed by a space or tab -> the
       matching command, argument is everything after that one separator
    4. anything else -> ADD_TASK with the whole trimmed text

    Args:
        text: The line, already stripped of its newline

    Returns:
        The parsed command; never raises
    """
    if not text:
        return Command(CommandType.NONE)

    text = text[:MAX_INPUT_LEN].replace("\r", "").replace("\n", "")
    body = text.lstrip(" \t")
    if not body.strip():
        return Command(CommandType.NONE)

    stripped = body.strip()
    if len(stripped) == 1 and stripped in SINGLE_CHAR_COMMANDS:
        return Command(SINGLE_CHAR_COMMANDS[stripped])

    if len(body) >= 2 and body[0] in PREFIX_COMMANDS and body[1] in ARGUMENT_SEPARATORS:
        return Command(PREFIX_COMMANDS[body[0]], body[2:])

    return Command(CommandType.ADD_TASK, stripped)


def parse_task_number(argument: str, task_count: int) -> int:
    """
    Convert a 1-based task number argument into a 0-based index.

    Args:
        argument: Text after the command letter, e.g. ``"3"``
        task_count: Number of tasks currently in the list

    Returns:
        The 0-based index

    Raises:
        InvalidTaskNumber: Not a positive integer within the list
    """
    if not isinstance(argument, str):
        raise InvalidTaskNumber()
    digits = argument.strip()
    # ASCII digits only, so no "1_0", "+3" or non-ASCII digits
    if not (digits.isascii() and digits.isdigit()):
        raise InvalidTaskNumber()

    number = int(digits)
    if number <= 0 or number > MAX_TASKS or number > task_count:
        raise InvalidTaskNumber()
    return number - 1
