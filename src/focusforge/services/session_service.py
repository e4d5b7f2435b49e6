"""Session controller: routes commands and keys to the timer and task list.

All state lives in an explicit ``AppContext`` owned by the control loop.
Nothing here blocks except the file writes the models perform inline.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from focusforge import __version__
from focusforge.config import AppPaths, ConfigManager
from focusforge.models.exceptions import UserInputError
from focusforge.models.focus.commands import (
    MAX_INPUT_LEN,
    Command,
    CommandType,
    parse_command,
    parse_task_number,
)
from focusforge.models.focus.history import SessionLog, SessionRecord
from focusforge.models.focus.keyboard import BACKSPACE_KEYS, ENTER, ESCAPE
from focusforge.models.focus.state import TimerStateMachine
from focusforge.models.focus.streak import StreakTracker
from focusforge.models.focus.ui import DisplaySnapshot
from focusforge.services.task_service import TaskListStore
from focusforge.utils.datetime_utils import today_str
from focusforge.utils.logger import get_logger

NOTIFICATION_SECONDS = 2
EXPIRY_NOTIFICATION_SECONDS = 3


@dataclass
class LoopSignals:
    """Flags set from signal handlers and polled once per loop iteration."""

    stop_requested: bool = False
    resize_requested: bool = False

    def request_stop(self, *_args) -> None:
        self.stop_requested = True

    def request_resize(self, *_args) -> None:
        self.resize_requested = True

    def consume_resize(self) -> bool:
        """Return and clear the pending resize flag."""
        pending = self.resize_requested
        self.resize_requested = False
        return pending


@dataclass
class Notification:
    """A transient message shown until ``expires_at``."""

    message: str
    expires_at: float


@dataclass
class AppContext:
    """Everything the control loop owns."""

    tasks: TaskListStore
    timer: TimerStateMachine
    log: SessionLog
    streaks: StreakTracker
    config: ConfigManager | None = None
    signals: LoopSignals = field(default_factory=LoopSignals)
    notification: Notification | None = None
    input_mode: bool = False
    input_buffer: str = ""
    show_help: bool = True

    @classmethod
    def from_paths(
        cls,
        paths: AppPaths,
        config: ConfigManager | None = None,
        clock: Callable[[], float] = time.time,
    ) -> "AppContext":
        """Build a context over the files in *paths* and load the task list."""
        log = SessionLog(paths.sessions_file)
        streaks = StreakTracker(paths.meta_file, log, clock=clock)
        timer = TimerStateMachine(log, streaks, clock=clock)
        tasks = TaskListStore(paths.tasks_file)
        tasks.load()
        return cls(tasks=tasks, timer=timer, log=log, streaks=streaks, config=config)


class SessionController:
    """Dispatches parsed commands and raw keys against an AppContext."""

    def __init__(self, context: AppContext, clock: Callable[[], float] = time.time):
        self.context = context
        self.clock = clock
        self.logger = get_logger()
        self._today_count: int | None = None
        self._today_count_date: str | None = None
        self._counted_record: SessionRecord | None = None

        self._handlers: dict[CommandType, Callable[[Command], str | None]] = {
            CommandType.NONE: lambda _cmd: None,
            CommandType.ADD_TASK: self._add_task,
            CommandType.SET_FOCUS_TASK: self._set_focus_task,
            CommandType.MARK_DONE: self._numbered(self.context.tasks.mark_done),
            CommandType.UNMARK: self._numbered(self.context.tasks.unmark),
            CommandType.REMOVE: self._numbered(self.context.tasks.remove),
            CommandType.START_FOCUS: lambda _cmd: self.context.timer.start_focus(),
            CommandType.START_BREAK: lambda _cmd: self.context.timer.start_break(),
            CommandType.STOP: lambda _cmd: self.context.timer.stop(),
            CommandType.SKIP: lambda _cmd: self.context.timer.skip(),
            CommandType.QUIT: self._quit,
            CommandType.HELP: self._toggle_help,
        }

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def submit_line(self, text: str) -> str | None:
        """Parse and run one line of input."""
        return self.dispatch(parse_command(text))

    def dispatch(self, command: Command) -> str | None:
        """
        Run a parsed command.

        User errors (bad task number, session already active, full list) are
        turned into notifications and never propagate.

        Returns:
            The notification message shown, if any
        """
        self.logger.debug("dispatch %s %r", command.type.value, command.argument)
        try:
            message = self._handlers[command.type](command)
        except UserInputError as e:
            message = str(e)
            self.logger.info("Rejected %s: %s", command.type.value, message)

        if message:
            self.notify(message)
        return message

    def _add_task(self, command: Command) -> str | None:
        if not command.argument:
            return None
        return self.context.tasks.add(command.argument)

    def _set_focus_task(self, command: Command) -> str | None:
        if not command.argument:
            return None
        return self.context.timer.set_focus_task(command.argument)

    def _numbered(self, action: Callable[[int], str]) -> Callable[[Command], str]:
        def run(command: Command) -> str:
            index = parse_task_number(command.argument, len(self.context.tasks))
            return action(index)

        return run

    def _quit(self, _command: Command) -> None:
        self.context.signals.request_stop()

    def _toggle_help(self, _command: Command) -> None:
        self.context.show_help = not self.context.show_help

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def handle_key(self, key: str) -> None:
        """Handle one keypress from the interactive loop.

        Escape sequences such as arrow keys arrive as one multi-character
        string and are ignored.
        """
        if len(key) != 1:
            return

        if key == ESCAPE:
            self.context.input_mode = False
            self.context.input_buffer = ""
            return

        if self.context.input_mode:
            self._handle_input_key(key)
            return

        lowered = key.lower()
        if lowered == "q":
            self.context.signals.request_stop()
        elif lowered in ("?", "h"):
            self._toggle_help(Command(CommandType.HELP))
        elif lowered == "a":
            self.dispatch(Command(CommandType.START_FOCUS))
        elif lowered == "s":
            self.dispatch(Command(CommandType.STOP))
        elif lowered == "d":
            self.dispatch(Command(CommandType.SKIP))
        elif lowered == "f":
            self.dispatch(Command(CommandType.START_BREAK))
        elif lowered in ("j", "k", "l"):
            self._handle_selection_key(lowered)
        elif lowered == "w":
            self.context.tasks.select_prev()
        elif lowered == "x":
            self.context.tasks.select_next()
        elif key == ENTER:
            self.context.input_mode = True
            self.context.input_buffer = ""
        elif key == " ":
            selected = self.context.tasks.selected_task
            if selected is not None:
                self.notify(self.context.timer.set_focus_task(selected.text))

    def _handle_selection_key(self, key: str) -> None:
        tasks = self.context.tasks
        index = tasks.selected_index
        if index is None:
            return

        try:
            if key == "j":
                self.notify(tasks.mark_done(index))
                tasks.select_next()
            elif key == "k":
                self.notify(tasks.unmark(index))
            else:
                self.notify(tasks.remove(index))
        except UserInputError as e:
            self.notify(str(e))

    def _handle_input_key(self, key: str) -> None:
        if key == ENTER:
            line = self.context.input_buffer
            self.context.input_mode = False
            self.context.input_buffer = ""
            if line:
                self.submit_line(line)
        elif key in BACKSPACE_KEYS:
            self.context.input_buffer = self.context.input_buffer[:-1]
        elif " " <= key < "\x7f" and len(self.context.input_buffer) < MAX_INPUT_LEN:
            self.context.input_buffer += key

    # ------------------------------------------------------------------
    # Time and display
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """One second passed without input."""
        message = self.context.timer.tick()
        if message:
            self.notify(message, EXPIRY_NOTIFICATION_SECONDS)

    def notify(self, message: str, seconds: int = NOTIFICATION_SECONDS) -> None:
        self.context.notification = Notification(message, self.clock() + seconds)

    def active_notification(self, now: float | None = None) -> str | None:
        """Current notification text, clearing it once expired."""
        notification = self.context.notification
        if notification is None:
            return None
        if now is None:
            now = self.clock()
        if now >= notification.expires_at:
            self.context.notification = None
            return None
        return notification.message

    def today_session_count(self) -> int:
        """Sessions logged today, rescanned only after a commit or a new day."""
        today = today_str(self.clock())
        last = self.context.timer.last_record
        if (
            self._today_count is None
            or self._today_count_date != today
            or self._counted_record is not last
        ):
            self._today_count = self.context.log.count_on(today)
            self._today_count_date = today
            self._counted_record = last
        return self._today_count

    def snapshot(self) -> DisplaySnapshot:
        """Read-only state for one frame of the display."""
        timer = self.context.timer.snapshot()
        return DisplaySnapshot(
            version=__version__,
            phase=timer.phase,
            remaining_seconds=timer.remaining_seconds,
            focus_task=timer.focus_task,
            tasks=self.context.tasks.tasks,
            selected_index=self.context.tasks.selected_index,
            streak_current=self.context.streaks.current,
            streak_max=self.context.streaks.maximum,
            today_sessions=self.today_session_count(),
            input_mode=self.context.input_mode,
            input_buffer=self.context.input_buffer,
            show_help=self.context.show_help,
            notification=self.active_notification(),
        )

    def shutdown(self) -> None:
        """Best-effort flush of in-memory state before exit."""
        self.context.tasks.save()
        if self.context.config is not None:
            self.context.config.save_settings()
        self.logger.info("Session state flushed")
