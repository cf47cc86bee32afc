from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from ..common.datetime_utils import DEFAULT_BOUNDARY, CalendarBoundary
from ..common.validators import require_list
from ..core.enums import DayState
from ..core.exceptions import InvalidCallError
from ..events.aggregator import DayAggregator
from ..events.model import AttendanceEvent, DayStatus
from ..streaks.calculator import StreakCalculator
from ..streaks.calendar import CalendarPolicy, EveryDayCalendar
from .model import AttendanceSummary, PeriodStatistics, WorkingDayRate

logger = logging.getLogger(__name__)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a person would (2.5 -> 3), not banker's rounding."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


class StatisticsReporter:
    def __init__(
        self,
        *,
        aggregator: Optional[DayAggregator] = None,
        streaks: Optional[StreakCalculator] = None,
        calendar: Optional[CalendarPolicy] = None,
        boundary: CalendarBoundary = DEFAULT_BOUNDARY,
    ):
        self._boundary = boundary
        self._aggregator = aggregator or DayAggregator(boundary)
        self._calendar = calendar or EveryDayCalendar()
        self._streaks = streaks or StreakCalculator(self._calendar, boundary=boundary)

    def summarize(self, day_statuses: Iterable[DayStatus]) -> PeriodStatistics:
        """Reduce day statuses to period totals. Zero days gives zero-valued statistics."""
        days = require_list(day_statuses, "day_statuses")

        complete = [d for d in days if d.status == DayState.COMPLETE]
        partial_days = sum(1 for d in days if d.status == DayState.PARTIAL)
        total_hours = sum(max(0.0, d.hours_worked) for d in complete)

        total_days = len(days)
        average = total_hours / len(complete) if complete else 0.0
        rate = (len(complete) + partial_days) / total_days * 100 if total_days else 0

        return PeriodStatistics(
            total_days=total_days,
            complete_days=len(complete),
            partial_days=partial_days,
            total_hours=round_half_up(total_hours, 1),
            average_hours=round_half_up(average, 1),
            attendance_rate=int(round_half_up(rate)),
        )

    def build_summary(
        self,
        events: Iterable[AttendanceEvent],
        *,
        today: date,
        actor_id: Optional[str] = None,
    ) -> AttendanceSummary:
        """Statistics, streak, today's status and week/month working-day rates for one actor."""
        items = require_list(events, "events")
        if actor_id is not None:
            items = [e for e in items if e.actor_id == actor_id]
        actors = {e.actor_id for e in items}
        if len(actors) > 1:
            raise InvalidCallError("build_summary expects the events of a single actor")

        statuses = list(self._aggregator.aggregate_all(items).values())
        by_day = {s.date: s for s in statuses}
        present = sorted(d for d, s in by_day.items() if s.status != DayState.NONE)
        complete = [d for d, s in by_day.items() if s.status == DayState.COMPLETE]

        week_start = today - timedelta(days=today.weekday())
        month_start = today.replace(day=1)

        summary = AttendanceSummary(
            statistics=self.summarize(statuses),
            streak=self._streaks.calculate(complete, today=today),
            today=by_day.get(today) or DayStatus.empty(today),
            week=self._working_day_rate(present, week_start, today),
            month=self._working_day_rate(present, month_start, today),
            last_attendance=present[-1] if present else None,
        )
        logger.debug("Summary for %s: %s", actors or "-", summary.statistics)
        return summary

    def _working_day_rate(self, present: List[date], start: date, end: date) -> WorkingDayRate:
        total = self._calendar.working_days_between(start, end)
        count = sum(1 for d in present if start <= d <= end and self._calendar.is_working_day(d))
        rate = round_half_up(count / total * 100, 1) if total else 0.0
        return WorkingDayRate(start=start, end=end, present=count, total=total, rate=rate)
