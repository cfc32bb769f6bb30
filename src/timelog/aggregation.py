"""Work and slack totals over a window of day blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from .config import ReportWindow, WindowMode
from .models import ActivitySummary, Classification, DayBlock, Log, classify


@dataclass(slots=True)
class Report:
    """Aggregated view of a report window."""

    window: ReportWindow
    activities: list[ActivitySummary] = field(default_factory=list)
    total_work: timedelta = timedelta(0)
    total_slack: timedelta = timedelta(0)
    since_last: Optional[timedelta] = None

    @property
    def work(self) -> list[ActivitySummary]:
        return [a for a in self.activities if a.classification is Classification.WORK]

    @property
    def slack(self) -> list[ActivitySummary]:
        return [a for a in self.activities if a.classification is Classification.SLACK]


def select_blocks(log: Log, window: ReportWindow) -> list[DayBlock]:
    """Return the trailing blocks covered by the window.

    The current day or week is the one of the most recent block, so entries
    caught up after the fact still land in the expected window.
    """
    blocks = [block for block in log.blocks if block.entries]
    if not blocks:
        return []
    if window.mode is WindowMode.DAY:
        return blocks[-window.count:]

    latest = blocks[-1].date
    week_start = latest - timedelta(days=latest.weekday())
    first_day = week_start - timedelta(weeks=window.count - 1)
    return [block for block in blocks if block.date >= first_day]


def time_since_last(log: Log, now: Optional[datetime] = None) -> Optional[timedelta]:
    last = log.last_entry
    if last is None:
        return None
    return (now or datetime.now()) - last.timestamp


def aggregate(
    log: Log,
    window: Optional[ReportWindow] = None,
    now: Optional[datetime] = None,
) -> Report:
    """Sum time per description over the selected blocks."""
    window = window or ReportWindow()
    totals: dict[str, ActivitySummary] = {}
    for block in select_blocks(log, window):
        for entry, span in block.spans():
            summary = totals.get(entry.description)
            if summary is None:
                summary = ActivitySummary(
                    name=entry.description,
                    classification=classify(entry.description),
                )
                totals[entry.description] = summary
            summary.total += span

    activities = list(totals.values())
    # stable sort keeps first-occurrence order within each group
    activities.sort(key=lambda a: a.classification is Classification.SLACK)
    return Report(
        window=window,
        activities=activities,
        total_work=sum(
            (a.total for a in activities if a.classification is Classification.WORK),
            timedelta(0),
        ),
        total_slack=sum(
            (a.total for a in activities if a.classification is Classification.SLACK),
            timedelta(0),
        ),
        since_last=time_since_last(log, now),
    )
