from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from ..common.datetime_utils import DEFAULT_BOUNDARY, CalendarBoundary
from ..common.validators import require_list
from ..core.constants import DEFAULT_STREAK_WINDOW_DAYS
from ..core.exceptions import InvalidCallError
from .calendar import CalendarPolicy, EveryDayCalendar


@dataclass(frozen=True)
class StreakResult:
    current: int = 0
    longest: int = 0

    def to_dict(self) -> dict:
        return {"current": self.current, "longest": self.longest}


class StreakCalculator:
    """Consecutive complete-day streaks over a bounded recent window.

    Two complete days are consecutive when the later one's previous working
    day (per the calendar policy) is the earlier one. Dates the policy treats
    as non-working are ignored: they neither extend nor break a streak.
    """

    def __init__(
        self,
        calendar: Optional[CalendarPolicy] = None,
        *,
        window_days: int = DEFAULT_STREAK_WINDOW_DAYS,
        boundary: CalendarBoundary = DEFAULT_BOUNDARY,
    ):
        self._calendar = calendar or EveryDayCalendar()
        self._boundary = boundary
        self._window_days = int(window_days)

    def calculate(self, complete_dates: Iterable[date], *, today: Optional[date] = None) -> StreakResult:
        today = today or self._boundary.today()
        dates = self._in_window(require_list(complete_dates, "complete_dates"), today)
        if not dates:
            return StreakResult()

        runs = self._runs(dates)
        longest = max(runs)

        most_recent = dates[0]
        if most_recent == today or most_recent == self._calendar.previous_working_day(today):
            current = runs[0]
        else:
            current = 0
        return StreakResult(current=current, longest=longest)

    def _in_window(self, values: list, today: date) -> List[date]:
        earliest = today - timedelta(days=self._window_days)
        days = set()
        for value in values:
            if isinstance(value, datetime):
                value = self._boundary.day_of(value)
            elif not isinstance(value, date):
                raise InvalidCallError(f"complete_dates must contain dates, got {type(value).__name__}")
            if earliest <= value <= today and self._calendar.is_working_day(value):
                days.add(value)
        return sorted(days, reverse=True)

    def _runs(self, dates: List[date]) -> List[int]:
        """Length of each contiguous run, most recent run first."""
        runs = [1]
        for newer, older in zip(dates, dates[1:]):
            if older == self._calendar.previous_working_day(newer):
                runs[-1] += 1
            else:
                runs.append(1)
        return runs
