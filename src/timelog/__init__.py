"""Plain-text time log with work/slack reports."""

from .aggregation import Report, aggregate, time_since_last
from .config import ReportWindow, WindowMode
from .errors import IOFailure, MalformedEntry, OutOfOrderTimestamp, TimelogError
from .models import ActivitySummary, Classification, DayBlock, Entry, Log, classify, slack_label
from .parser import check_order, load, parse_log
from .reporting import format_report, render_report as report
from .store import append

__all__ = [
    "ActivitySummary",
    "Classification",
    "DayBlock",
    "Entry",
    "IOFailure",
    "Log",
    "MalformedEntry",
    "OutOfOrderTimestamp",
    "Report",
    "ReportWindow",
    "TimelogError",
    "WindowMode",
    "aggregate",
    "append",
    "check_order",
    "classify",
    "format_report",
    "load",
    "parse_log",
    "report",
    "slack_label",
    "time_since_last",
]
