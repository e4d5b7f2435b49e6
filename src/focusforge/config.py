"""Configuration management for FocusForge.

All data lives in one per-user directory, ``~/.focusforge`` by default.
Set ``FOCUSFORGE_HOME`` to use a different directory.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from focusforge.models.exceptions import ConfigurationError
from focusforge.models.focus.streak import StreakState
from focusforge.utils import exit_codes
from focusforge.utils.logger import get_logger

DIR_NAME = ".focusforge"
HOME_ENV = "FOCUSFORGE_HOME"
MAX_PATH_LEN = 4096

TASKS_FILE = "tasks.txt"
SESSIONS_FILE = "sessions.csv"
META_FILE = "meta"
SETTINGS_FILE = "settings"


class Settings(BaseModel):
    """User settings.

    Reserved: the settings file is written empty and nothing read from it
    changes behaviour yet. Unknown keys are kept so a newer version's file
    survives a round trip.
    """

    model_config = ConfigDict(extra="allow")


class AppPaths(BaseModel):
    """Locations of every persisted file."""

    model_config = ConfigDict(frozen=True)

    base_dir: Path
    tasks_file: Path
    sessions_file: Path
    meta_file: Path
    settings_file: Path

    @classmethod
    def for_directory(cls, base_dir: Path) -> "AppPaths":
        return cls(
            base_dir=base_dir,
            tasks_file=base_dir / TASKS_FILE,
            sessions_file=base_dir / SESSIONS_FILE,
            meta_file=base_dir / META_FILE,
            settings_file=base_dir / SETTINGS_FILE,
        )

    def all_paths(self) -> dict[str, Path]:
        return {
            "focusforge directory": self.base_dir,
            "tasks file": self.tasks_file,
            "sessions file": self.sessions_file,
            "meta file": self.meta_file,
            "settings file": self.settings_file,
        }


def resolve_paths(base_dir: Path | None = None) -> AppPaths:
    """
    Work out where FocusForge keeps its files.

    Args:
        base_dir: Explicit data directory; defaults to ``$FOCUSFORGE_HOME``
            or ``~/.focusforge``

    Raises:
        ConfigurationError: The home directory cannot be resolved, or a path
            is longer than the platform allows
    """
    if base_dir is None:
        override = os.environ.get(HOME_ENV)
        if override:
            base_dir = Path(override).expanduser()
        else:
            try:
                base_dir = Path.home() / DIR_NAME
            except (KeyError, RuntimeError) as e:
                raise ConfigurationError(
                    "HOME environment variable not set", exit_codes.ERROR_CONFIG
                ) from e

    paths = AppPaths.for_directory(base_dir)
    for label, path in paths.all_paths().items():
        if len(str(path)) >= MAX_PATH_LEN:
            raise ConfigurationError(
                f"Path too long for {label}", exit_codes.ERROR_PATH_TOO_LONG
            )
    return paths


class ConfigManager:
    """Creates the data directory and manages the settings file."""

    def __init__(self, paths: AppPaths):
        self.paths = paths
        self.logger = get_logger()
        self._settings: Settings | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = self.load_settings()
        return self._settings

    def ensure_directories(self) -> None:
        """
        Create the data directory and any missing files.

        The streak cache starts at zero. Failing to create a file is logged;
        failing to create the directory is fatal.
        """
        try:
            self.paths.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(
                f"Error creating directory {self.paths.base_dir}: {e}",
                exit_codes.ERROR_CONFIG,
            ) from e

        for path in (self.paths.tasks_file, self.paths.sessions_file):
            try:
                path.touch(exist_ok=True)
            except OSError as e:
                self.logger.warning("Failed to create %s: %s", path, e)

        if not self.paths.meta_file.exists():
            try:
                self.paths.meta_file.write_text(StreakState().to_text(), encoding="utf-8")
            except OSError as e:
                self.logger.warning("Failed to create meta file: %s", e)

    def load_settings(self) -> Settings:
        """Read ``key=value`` lines from the settings file."""
        values: dict[str, str] = {}
        try:
            with open(self.paths.settings_file, encoding="utf-8") as f:
                for line in f:
                    key, sep, value = line.strip().partition("=")
                    if sep and key:
                        values[key] = value
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.warning("Failed to read settings file: %s", e)
        return Settings(**values)

    def save_settings(self, settings: Settings | None = None) -> bool:
        """Write the settings file. Only unknown keys carried over are written."""
        if settings is None:
            settings = self.settings
        try:
            with open(self.paths.settings_file, "w", encoding="utf-8") as f:
                for key, value in settings.model_dump().items():
                    f.write(f"{key}={value}\n")
        except OSError as e:
            self.logger.error("Error creating settings file: %s", e)
            return False
        return True


@lru_cache(maxsize=1)
def get_config_manager() -> ConfigManager:
    """Return the process-wide ConfigManager for the default data directory."""
    return ConfigManager(resolve_paths())
