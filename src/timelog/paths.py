"""Helpers for locating application directories."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "timelog"
APP_AUTHOR = "timelog"
LOG_FILENAME = "timelog.txt"


def get_data_dir() -> Path:
    """Return the base directory for persistent data."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=True)
    path = Path(dirs.user_data_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_legacy_log_path() -> Path:
    return Path.home() / ".gtimelog" / LOG_FILENAME


def get_log_path() -> Path:
    """Return the log file, preferring an existing gtimelog one."""
    legacy = get_legacy_log_path()
    if legacy.exists():
        return legacy
    return get_data_dir() / LOG_FILENAME
