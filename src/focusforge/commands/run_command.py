"""Command 'run' of focusforge: the interactive focus session."""

from __future__ import annotations

import signal
from collections.abc import Callable

import typer
from rich.console import Console
from rich.live import Live

from focusforge.config import get_config_manager
from focusforge.models.exceptions import DisplayError
from focusforge.models.focus.keyboard import KeyboardHandler
from focusforge.models.focus.ui import TimerDisplay, check_terminal_size
from focusforge.services.session_service import (
    AppContext,
    LoopSignals,
    SessionController,
)
from focusforge.utils import exit_codes
from focusforge.utils.logger import get_logger
from focusforge.utils.ui.console import get_console

from .decorators import command_wrapper

POLL_SECONDS = 1.0

app = typer.Typer()


def _install_signal_handlers(signals: LoopSignals) -> dict:
    """Route termination and resize signals to loop flags."""
    previous = {}
    handlers = {
        signal.SIGINT: signals.request_stop,
        signal.SIGTERM: signals.request_stop,
    }
    if hasattr(signal, "SIGWINCH"):
        handlers[signal.SIGWINCH] = signals.request_resize

    for signum, handler in handlers.items():
        previous[signum] = signal.signal(signum, handler)
    return previous


def _restore_signal_handlers(previous: dict) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)


def run_session(
    controller: SessionController,
    console: Console | None = None,
    keyboard_factory: Callable[[], KeyboardHandler] = KeyboardHandler,
) -> None:
    """
    Run the cooperative control loop until a quit key or signal.

    Each iteration renders one frame, then waits up to one second for a key.
    A timeout counts as one elapsed second of timer time.

    Raises:
        DisplayError: The terminal is missing or too small
    """
    logger = get_logger()
    console = console or get_console()
    if not console.is_terminal:
        raise DisplayError("Standard output is not a terminal", exit_codes.ERROR_DISPLAY_INIT)
    check_terminal_size(console)

    signals = controller.context.signals
    display = TimerDisplay(console)
    keyboard = keyboard_factory()
    previous = _install_signal_handlers(signals)
    logger.info("Interactive session started")

    try:
        with Live(
            display.create_layout(controller.snapshot()),
            console=console,
            screen=True,
            auto_refresh=False,
        ) as live:
            while not signals.stop_requested:
                if signals.consume_resize():
                    logger.debug("Terminal resized to %sx%s", *console.size)
                    check_terminal_size(console)
                live.update(display.create_layout(controller.snapshot()), refresh=True)

                key = keyboard.get_key(timeout=POLL_SECONDS)
                if key is None:
                    controller.tick()
                else:
                    controller.handle_key(key)
    finally:
        keyboard.stop()
        _restore_signal_handlers(previous)
        controller.shutdown()
        logger.info("Interactive session ended")


@app.command("run")
@command_wrapper
def run() -> None:
    """Start the interactive focus timer and task list."""
    manager = get_config_manager()
    manager.ensure_directories()
    context = AppContext.from_paths(manager.paths, config=manager)
    run_session(SessionController(context))
