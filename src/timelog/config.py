"""Configuration models and helpers for the time log."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class WindowMode(str, enum.Enum):
    DAY = "day"
    WEEK = "week"


@dataclass(frozen=True, slots=True)
class ReportWindow:
    """Which trailing day blocks or calendar weeks a report covers."""

    mode: WindowMode = WindowMode.DAY
    count: int = 1

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"window count must be at least 1, got {self.count}")

    @classmethod
    def days(cls, count: int = 1) -> "ReportWindow":
        return cls(mode=WindowMode.DAY, count=count)

    @classmethod
    def weeks(cls, count: int = 1) -> "ReportWindow":
        return cls(mode=WindowMode.WEEK, count=count)

    @classmethod
    def from_options(
        cls,
        days: Optional[int] = None,
        weeks: Optional[int] = None,
    ) -> "ReportWindow":
        if days is not None and weeks is not None:
            raise ValueError("choose either days or weeks, not both")
        if weeks is not None:
            return cls.weeks(weeks)
        return cls.days(days if days is not None else 1)

    def describe(self) -> str:
        if self.count == 1:
            return f"last {self.mode.value}"
        return f"last {self.count} {self.mode.value}s"
