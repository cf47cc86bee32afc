from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from attendance_engine.common.datetime_utils import CalendarBoundary
from attendance_engine.core.exceptions import InvalidCallError
from attendance_engine.streaks.calculator import StreakCalculator
from attendance_engine.streaks.calendar import EveryDayCalendar, WeekdayCalendar

TODAY = date(2026, 2, 4)  # Wednesday


def _days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


def test_three_consecutive_days_ending_today():
    result = StreakCalculator().calculate([TODAY, _days_ago(1), _days_ago(2)], today=TODAY)

    assert (result.current, result.longest) == (3, 3)


def test_gap_breaks_the_run():
    result = StreakCalculator().calculate([TODAY, _days_ago(3)], today=TODAY)

    assert (result.current, result.longest) == (1, 1)


def test_current_counts_from_yesterday():
    result = StreakCalculator().calculate([_days_ago(1), _days_ago(2)], today=TODAY)

    assert result.current == 2


def test_stale_history_has_no_current_streak():
    dates = [_days_ago(n) for n in range(2, 7)]

    result = StreakCalculator().calculate(dates, today=TODAY)

    assert result.current == 0
    assert result.longest == 5


def test_longest_run_can_be_older_than_current():
    dates = [TODAY] + [_days_ago(n) for n in range(5, 9)]

    result = StreakCalculator().calculate(dates, today=TODAY)

    assert (result.current, result.longest) == (1, 4)


def test_unsorted_and_duplicate_input_is_tolerated():
    dates = [_days_ago(1), TODAY, _days_ago(1), datetime(2026, 2, 2, 17, 0)]

    result = StreakCalculator().calculate(dates, today=TODAY)

    assert (result.current, result.longest) == (3, 3)


def test_dates_outside_window_are_ignored():
    dates = [_days_ago(n) for n in range(40, 50)]

    result = StreakCalculator(window_days=30).calculate(dates, today=TODAY)

    assert (result.current, result.longest) == (0, 0)


def test_empty_input_is_zero():
    result = StreakCalculator().calculate([], today=TODAY)

    assert (result.current, result.longest) == (0, 0)


def test_none_input_is_a_programmer_error():
    with pytest.raises(InvalidCallError):
        StreakCalculator().calculate(None, today=TODAY)


def test_weekday_calendar_bridges_weekends():
    monday = date(2026, 2, 9)
    friday = date(2026, 2, 6)
    thursday = date(2026, 2, 5)

    every_day = StreakCalculator(EveryDayCalendar()).calculate([monday, friday, thursday], today=monday)
    weekdays = StreakCalculator(WeekdayCalendar()).calculate([monday, friday, thursday], today=monday)

    assert (every_day.current, every_day.longest) == (1, 2)
    assert (weekdays.current, weekdays.longest) == (3, 3)


def test_weekday_calendar_keeps_friday_streak_alive_over_weekend():
    sunday = date(2026, 2, 8)
    friday = date(2026, 2, 6)

    result = StreakCalculator(WeekdayCalendar()).calculate([friday], today=sunday)

    assert result.current == 1


def test_weekday_calendar_skips_holidays():
    calendar = WeekdayCalendar(holidays=[date(2026, 2, 5)])

    result = StreakCalculator(calendar).calculate([date(2026, 2, 6), date(2026, 2, 4)], today=date(2026, 2, 6))

    assert result.current == 2


def test_working_days_between():
    assert WeekdayCalendar().working_days_between(date(2026, 2, 2), date(2026, 2, 8)) == 5
    assert EveryDayCalendar().working_days_between(date(2026, 2, 2), date(2026, 2, 8)) == 7


def test_default_today_comes_from_the_calendar_boundary():
    class FixedBoundary(CalendarBoundary):
        def now(self):
            return datetime(2026, 2, 4, 23, 30)

    calculator = StreakCalculator(boundary=FixedBoundary())

    result = calculator.calculate([TODAY, _days_ago(1)])

    assert result.current == 2


def test_datetimes_are_bucketed_through_the_boundary():
    boundary = CalendarBoundary(timezone.utc)
    late_evening = datetime(2026, 2, 4, 23, 30, tzinfo=timezone(timedelta(hours=-5)))

    result = StreakCalculator(boundary=boundary).calculate([late_evening, TODAY], today=date(2026, 2, 5))

    assert (result.current, result.longest) == (2, 2)
