"""Text rendering of aggregated reports."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from .aggregation import Report, aggregate
from .config import ReportWindow
from .models import Log

SEPARATOR = "-" * 40
ABSENT = "n/a"


def format_duration(value: timedelta) -> str:
    """Render as ``Hh Mmin``, dropping leftover seconds.

    Seconds are truncated toward zero before the sign is split off, so
    ``-1 min 30 s`` shows as ``-0h 1min`` just as ``1 min 30 s`` shows as
    ``0h 1min``.
    """
    seconds = int(value.total_seconds())
    sign = "-" if seconds < 0 else ""
    hours, minutes = divmod(abs(seconds) // 60, 60)
    return f"{sign}{hours}h {minutes}min"


def format_report(report: Report) -> str:
    lines = [
        f"{format_duration(activity.total)}: {activity.name}"
        for activity in report.activities
    ]
    since_last = (
        format_duration(report.since_last) if report.since_last is not None else ABSENT
    )
    lines.extend(
        [
            SEPARATOR,
            f"Total work done: {format_duration(report.total_work)}",
            f"Total slacking: {format_duration(report.total_slack)}",
            f"Time since last entry: {since_last}",
        ]
    )
    return "\n".join(lines) + "\n"


def render_report(
    log: Log,
    window: Optional[ReportWindow] = None,
    now: Optional[datetime] = None,
) -> str:
    return format_report(aggregate(log, window, now))
