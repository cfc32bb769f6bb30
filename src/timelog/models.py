"""Domain models for the time log."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Iterator, Optional


TIME_FMT = "%Y-%m-%d %H:%M"
SLACK_MARKER = "**"


class Classification(str, enum.Enum):
    WORK = "work"
    SLACK = "slack"


def classify(description: str) -> Classification:
    """Entries starting with ``**`` are slacking, everything else is work."""
    if description.startswith(SLACK_MARKER):
        return Classification.SLACK
    return Classification.WORK


def slack_label(description: str) -> str:
    """Return the slack activity name; an empty string is the unnamed bucket."""
    if not description.startswith(SLACK_MARKER):
        return description
    return description[len(SLACK_MARKER):].lstrip()


@dataclass(frozen=True, slots=True)
class Entry:
    """A single timestamped line of the log.

    The timestamp marks when the activity *ended*: the time spent since the
    previous entry of the same day belongs to this description.
    """

    timestamp: datetime
    description: str
    line_number: Optional[int] = field(default=None, compare=False)

    @property
    def classification(self) -> Classification:
        return classify(self.description)

    @property
    def is_slack(self) -> bool:
        return self.classification is Classification.SLACK

    def __str__(self) -> str:
        return f"{self.timestamp.strftime(TIME_FMT)}: {self.description}"


@dataclass(slots=True)
class DayBlock:
    """Consecutive entries of one calendar day, opened by a day-start marker."""

    entries: list[Entry] = field(default_factory=list)

    @property
    def first(self) -> Entry:
        return self.entries[0]

    @property
    def last(self) -> Entry:
        return self.entries[-1]

    @property
    def date(self) -> date:
        return self.first.timestamp.date()

    @property
    def duration(self) -> timedelta:
        if not self.entries:
            return timedelta(0)
        return self.last.timestamp - self.first.timestamp

    def spans(self) -> Iterator[tuple[Entry, timedelta]]:
        """Yield each entry after the first with the time since its predecessor."""
        for previous, current in zip(self.entries, self.entries[1:]):
            yield current, current.timestamp - previous.timestamp


@dataclass(slots=True)
class Log:
    """All day blocks of a log file, in file order."""

    blocks: list[DayBlock] = field(default_factory=list)
    path: Optional[Path] = field(default=None, compare=False)

    @property
    def is_empty(self) -> bool:
        return not any(block.entries for block in self.blocks)

    @property
    def last_entry(self) -> Optional[Entry]:
        for block in reversed(self.blocks):
            if block.entries:
                return block.last
        return None

    def entries(self) -> Iterator[Entry]:
        for block in self.blocks:
            yield from block.entries

    def entries_on(self, day: date) -> list[Entry]:
        return [entry for entry in self.entries() if entry.timestamp.date() == day]

    def to_text(self) -> str:
        """Render the log in its canonical file layout."""
        chunks = [
            "".join(f"{entry}\n" for entry in block.entries)
            for block in self.blocks
            if block.entries
        ]
        return "\n".join(chunks)


@dataclass(slots=True)
class ActivitySummary:
    """Total time attributed to one description inside a report window."""

    name: str
    classification: Classification
    total: timedelta = timedelta(0)

    @property
    def label(self) -> str:
        if self.classification is Classification.SLACK:
            return slack_label(self.name)
        return self.name
