"""Error types raised while loading and appending to a time log."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Entry


class TimelogError(Exception):
    """Base class for time log failures."""


class MalformedEntry(TimelogError, ValueError):
    """A non-blank line of the log does not match the entry grammar."""

    def __init__(self, line_number: int, content: str, reason: str = "invalid entry") -> None:
        self.line_number = line_number
        self.content = content
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {content!r}")


class IOFailure(TimelogError):
    """The backing file could not be read or written."""

    def __init__(self, path: Optional[Path], cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")


@dataclass(frozen=True, slots=True)
class OutOfOrderTimestamp:
    """Soft issue: an entry is dated before the one preceding it."""

    line_number: Optional[int]
    entry: "Entry"
    previous: "Entry"

    def __str__(self) -> str:
        where = f"line {self.line_number}" if self.line_number is not None else "appended entry"
        return (
            f"{where}: {self.entry.timestamp:%Y-%m-%d %H:%M} "
            f"goes back in time (previous entry at {self.previous.timestamp:%Y-%m-%d %H:%M})"
        )
