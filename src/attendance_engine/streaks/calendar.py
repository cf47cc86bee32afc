"""Calendar policies deciding which days count toward streaks and rates.

The engine never hardcodes weekend skipping; callers inject one of these.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import FrozenSet, Iterable, Optional

SATURDAY = 5
SUNDAY = 6


class CalendarPolicy(ABC):
    @abstractmethod
    def is_working_day(self, day: date) -> bool:
        raise NotImplementedError

    def previous_working_day(self, day: date) -> date:
        prev = day - timedelta(days=1)
        # Bounded: a policy with no working days in two weeks is misconfigured.
        for _ in range(14):
            if self.is_working_day(prev):
                return prev
            prev -= timedelta(days=1)
        return prev

    def working_days_between(self, start: date, end: date) -> int:
        """Working days in [start, end], both inclusive."""
        count = 0
        current = start
        while current <= end:
            if self.is_working_day(current):
                count += 1
            current += timedelta(days=1)
        return count


class EveryDayCalendar(CalendarPolicy):
    """Every calendar day is a working day."""

    def is_working_day(self, day: date) -> bool:
        return True

    def previous_working_day(self, day: date) -> date:
        return day - timedelta(days=1)


class WeekdayCalendar(CalendarPolicy):
    """Monday to Friday, minus optional holidays."""

    def __init__(self, holidays: Optional[Iterable[date]] = None, weekend: Iterable[int] = (SATURDAY, SUNDAY)):
        self.holidays: FrozenSet[date] = frozenset(holidays or ())
        self.weekend: FrozenSet[int] = frozenset(weekend)

    def is_working_day(self, day: date) -> bool:
        return day.weekday() not in self.weekend and day not in self.holidays


def calendar_from_settings(settings) -> CalendarPolicy:
    if bool(getattr(settings, "SKIP_WEEKENDS", False)):
        return WeekdayCalendar()
    return EveryDayCalendar()
