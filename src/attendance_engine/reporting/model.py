from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..events.model import DayStatus
from ..streaks.calculator import StreakResult


@dataclass(frozen=True)
class PeriodStatistics:
    total_days: int = 0
    complete_days: int = 0
    partial_days: int = 0
    total_hours: float = 0.0
    average_hours: float = 0.0
    attendance_rate: int = 0

    def to_dict(self) -> dict:
        return {
            "total_days": self.total_days,
            "complete_days": self.complete_days,
            "partial_days": self.partial_days,
            "total_hours": self.total_hours,
            "average_hours": self.average_hours,
            "attendance_rate": self.attendance_rate,
        }


@dataclass(frozen=True)
class WorkingDayRate:
    """Present working days against working days elapsed in a period."""

    start: date
    end: date
    present: int
    total: int
    rate: float

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "present": self.present,
            "total": self.total,
            "rate": self.rate,
        }


@dataclass(frozen=True)
class AttendanceSummary:
    statistics: PeriodStatistics
    streak: StreakResult
    today: DayStatus
    week: WorkingDayRate
    month: WorkingDayRate
    last_attendance: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "statistics": self.statistics.to_dict(),
            "streak": self.streak.to_dict(),
            "today": self.today.to_dict(),
            "week": self.week.to_dict(),
            "month": self.month.to_dict(),
            "last_attendance": self.last_attendance.isoformat() if self.last_attendance else None,
        }
