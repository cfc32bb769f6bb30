from pathlib import Path

import pytest

TWO_DAYS = """
2022-06-09 06:02: arrived
2022-06-09 06:27: email
2022-06-09 06:32: **tea
2022-06-09 12:00: work

2022-06-10 07:00: arrived
2022-06-10 12:05: rtimelog: code
2022-06-10 12:30: **lunch
2022-06-10 14:00: rtimelog: code
2022-06-10 15:00: bug triage
2022-06-10 16:00: customer joe: support
"""

LEARNING_DAY = """2024-03-14 09:00: arrived
2024-03-14 19:45: day of learning: time logger
2024-03-14 23:29: **
2024-03-14 23:47: team meeting
"""


@pytest.fixture
def two_days_file(tmp_path) -> Path:
    path = tmp_path / "timelog.txt"
    path.write_text(TWO_DAYS, encoding="utf-8")
    return path


@pytest.fixture
def learning_day_file(tmp_path) -> Path:
    path = tmp_path / "timelog.txt"
    path.write_text(LEARNING_DAY, encoding="utf-8")
    return path
