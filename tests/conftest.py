"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real home directory: the
data directory, the log directory and the clock are all replaceable.
"""

from __future__ import annotations

import logging
from datetime import datetime

import pytest

from focusforge.config import AppPaths, ConfigManager, get_config_manager
from focusforge.models.focus.history import SessionLog
from focusforge.models.focus.state import TimerStateMachine
from focusforge.models.focus.streak import StreakTracker


class FakeClock:
    """Callable clock whose time only moves when told to."""

    def __init__(self, start: float):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path, monkeypatch):
    """Send the application log into tmp_path and reset the singleton."""
    import focusforge.utils.logger as logger_mod

    log_dir = tmp_path / "logs"
    monkeypatch.setattr(logger_mod, "user_log_dir", lambda *_a, **_k: str(log_dir))
    monkeypatch.setattr(logger_mod, "_logger", None)
    logging.getLogger("focusforge").handlers.clear()
    yield log_dir
    logging.getLogger("focusforge").handlers.clear()


# ---------------------------------------------------------------------------
# Data directory
# ---------------------------------------------------------------------------


@pytest.fixture()
def paths(tmp_path) -> AppPaths:
    """AppPaths under tmp_path with every file created."""
    app_paths = AppPaths.for_directory(tmp_path / "focusforge")
    ConfigManager(app_paths).ensure_directories()
    return app_paths


@pytest.fixture()
def focus_home(tmp_path, monkeypatch):
    """Point FOCUSFORGE_HOME at tmp_path for CLI tests."""
    home = tmp_path / "home"
    monkeypatch.setenv("FOCUSFORGE_HOME", str(home))
    get_config_manager.cache_clear()
    yield home
    get_config_manager.cache_clear()


# ---------------------------------------------------------------------------
# Clock and focus models
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    """Clock fixed at 2024-03-15 10:00 local time."""
    return FakeClock(datetime(2024, 3, 15, 10, 0, 0).timestamp())


@pytest.fixture()
def session_log(paths) -> SessionLog:
    return SessionLog(paths.sessions_file)


@pytest.fixture()
def streaks(paths, session_log, clock) -> StreakTracker:
    return StreakTracker(paths.meta_file, session_log, clock=clock)


@pytest.fixture()
def timer(session_log, streaks, clock) -> TimerStateMachine:
    return TimerStateMachine(session_log, streaks, clock=clock)
