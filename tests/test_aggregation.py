"""Tests for work/slack aggregation over report windows."""

from datetime import datetime, timedelta

import pytest

from timelog.aggregation import aggregate, select_blocks, time_since_last
from timelog.config import ReportWindow, WindowMode
from timelog.models import Classification, Log
from timelog.parser import parse_log

from conftest import LEARNING_DAY, TWO_DAYS

# 2024-03-04 is a Monday
THREE_WEEKS = """
2024-02-29 09:00: arrived
2024-02-29 10:00: old work

2024-03-04 09:00: arrived
2024-03-04 10:00: planning

2024-03-08 09:00: arrived
2024-03-08 09:30: **coffee

2024-03-11 09:00: arrived
2024-03-11 11:00: planning

2024-03-12 09:00: arrived
2024-03-12 09:15: email
"""


def minutes(value: int) -> timedelta:
    return timedelta(minutes=value)


class TestLearningDay:
    def test_totals(self):
        report = aggregate(parse_log(LEARNING_DAY), ReportWindow.days(1))
        assert report.total_work == timedelta(hours=11, minutes=3)
        assert report.total_slack == timedelta(hours=3, minutes=44)

    def test_activities_work_first(self):
        report = aggregate(parse_log(LEARNING_DAY))
        assert [(a.name, a.classification, a.total) for a in report.activities] == [
            ("day of learning: time logger", Classification.WORK, timedelta(hours=10, minutes=45)),
            ("team meeting", Classification.WORK, minutes(18)),
            ("**", Classification.SLACK, timedelta(hours=3, minutes=44)),
        ]
        assert [a.name for a in report.work] == ["day of learning: time logger", "team meeting"]
        assert [a.label for a in report.slack] == [""]

    def test_marker_entry_not_counted(self):
        report = aggregate(parse_log(LEARNING_DAY))
        assert "arrived" not in [a.name for a in report.activities]


class TestTwoDays:
    def test_default_window_is_last_block(self):
        report = aggregate(parse_log(TWO_DAYS))
        assert [a.name for a in report.activities] == [
            "rtimelog: code",
            "bug triage",
            "customer joe: support",
            "**lunch",
        ]
        code = report.activities[0]
        assert code.total == timedelta(hours=5, minutes=5) + timedelta(hours=1, minutes=30)
        assert report.total_work == timedelta(hours=8, minutes=35)
        assert report.total_slack == minutes(25)

    def test_two_days(self):
        report = aggregate(parse_log(TWO_DAYS), ReportWindow.days(2))
        assert report.total_work == timedelta(hours=8, minutes=35) + minutes(25) + timedelta(
            hours=5, minutes=28
        )
        assert report.total_slack == minutes(25) + minutes(5)
        assert [a.name for a in report.activities][:2] == ["email", "work"]
        assert [a.name for a in report.slack] == ["**tea", "**lunch"]

    def test_count_larger_than_log(self):
        log = parse_log(TWO_DAYS)
        assert aggregate(log, ReportWindow.days(30)).total_work == aggregate(
            log, ReportWindow.days(2)
        ).total_work

    def test_totals_match_block_durations(self):
        log = parse_log(TWO_DAYS)
        report = aggregate(log, ReportWindow.days(2))
        assert report.total_work + report.total_slack == sum(
            (block.duration for block in log.blocks), timedelta(0)
        )


class TestWeekWindow:
    def test_current_week_from_latest_block(self):
        log = parse_log(THREE_WEEKS)
        blocks = select_blocks(log, ReportWindow.weeks(1))
        assert [str(block.date) for block in blocks] == ["2024-03-11", "2024-03-12"]

    def test_two_weeks(self):
        log = parse_log(THREE_WEEKS)
        blocks = select_blocks(log, ReportWindow.weeks(2))
        assert [str(block.date) for block in blocks] == [
            "2024-03-04",
            "2024-03-08",
            "2024-03-11",
            "2024-03-12",
        ]
        report = aggregate(log, ReportWindow.weeks(2))
        assert report.activities[0].name == "planning"
        assert report.activities[0].total == timedelta(hours=3)
        assert report.total_slack == minutes(30)

    def test_three_weeks_includes_previous_month(self):
        log = parse_log(THREE_WEEKS)
        assert len(select_blocks(log, ReportWindow.weeks(3))) == 5


class TestEdgeCases:
    def test_empty_log(self):
        report = aggregate(Log(), ReportWindow.weeks(2), now=datetime(2024, 1, 1))
        assert report.activities == []
        assert report.total_work == timedelta(0)
        assert report.total_slack == timedelta(0)
        assert report.since_last is None

    def test_single_marker_block(self):
        log = parse_log("2024-03-14 09:00: arrived\n")
        report = aggregate(log)
        assert report.activities == []
        assert report.total_work == timedelta(0)

    def test_zero_duration_span(self):
        log = parse_log("2024-03-14 09:00: arrived\n2024-03-14 09:00: email\n")
        report = aggregate(log)
        assert [(a.name, a.total) for a in report.activities] == [("email", timedelta(0))]

    def test_case_sensitive_keys(self):
        log = parse_log(
            "2024-03-14 09:00: arrived\n2024-03-14 10:00: Email\n2024-03-14 10:30: email\n"
        )
        assert [a.name for a in aggregate(log).activities] == ["Email", "email"]


class TestTimeSinceLast:
    def test_empty_log_is_none(self):
        assert time_since_last(Log(), now=datetime(2024, 1, 1)) is None

    def test_elapsed(self):
        log = parse_log(LEARNING_DAY)
        now = datetime(2024, 3, 15, 1, 2)
        assert time_since_last(log, now) == timedelta(hours=1, minutes=15)
        assert aggregate(log, now=now).since_last == timedelta(hours=1, minutes=15)


class TestReportWindow:
    def test_defaults(self):
        window = ReportWindow()
        assert window.mode is WindowMode.DAY
        assert window.count == 1

    def test_from_options(self):
        assert ReportWindow.from_options() == ReportWindow.days(1)
        assert ReportWindow.from_options(days=3) == ReportWindow.days(3)
        assert ReportWindow.from_options(weeks=2) == ReportWindow.weeks(2)

    def test_rejects_both(self):
        with pytest.raises(ValueError):
            ReportWindow.from_options(days=1, weeks=1)

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            ReportWindow.days(0)

    def test_describe(self):
        assert ReportWindow.days(1).describe() == "last day"
        assert ReportWindow.weeks(3).describe() == "last 3 weeks"
