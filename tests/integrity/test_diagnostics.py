from __future__ import annotations

from datetime import date, datetime

from attendance_engine.core.enums import Action, DayState, DayStateIssue, RecommendationType
from attendance_engine.events.aggregator import DayAggregator
from attendance_engine.events.model import DayStatus
from attendance_engine.integrity.diagnostics import Diagnostics


def _names(report):
    return [t.name for t in report.tests]


def test_fresh_day_passes_and_suggests_checking_in(fixed_now):
    report = Diagnostics().run_self_test([], None, now=fixed_now)

    assert report.success
    assert report.score == 100
    assert _names(report) == [
        "data-integrity",
        "today-state",
        "checkin-action",
        "checkout-action",
        "duplicate-prevention",
        "sequential-actions",
    ]
    assert [r.type for r in report.recommendations] == [RecommendationType.NO_ATTENDANCE]


def test_partial_day_recommends_checking_out(make_event, fixed_now):
    events = [make_event(Action.CHECK_IN, fixed_now)]
    day = DayAggregator().aggregate(events)

    report = Diagnostics().run_self_test(events, day, now=datetime(2026, 2, 2, 12, 0))

    assert report.success
    assert [r.type for r in report.recommendations] == [RecommendationType.INCOMPLETE_DAY]


def test_complete_day_checks_hours_accuracy(make_event):
    events = [
        make_event(Action.CHECK_IN, datetime(2026, 2, 2, 9, 0)),
        make_event(Action.CHECK_OUT, datetime(2026, 2, 2, 17, 45)),
    ]
    day = DayAggregator().aggregate(events)

    report = Diagnostics().run_self_test(events, day, now=datetime(2026, 2, 2, 18, 0))

    assert "hours-accuracy" in _names(report)
    assert report.success
    assert report.recommendations == ()


def test_corrupt_history_fails_integrity_test(make_event, fixed_now):
    events = [make_event(Action.CHECK_OUT, datetime(2026, 1, 30, 17, 0))]

    report = Diagnostics().run_self_test(events, None, now=fixed_now)

    assert not report.success
    assert report.passed == report.total - 1
    failed = report.recommendations[0]
    assert failed.type == RecommendationType.FAILED_TESTS
    assert failed.details == ("data-integrity",)
    assert report.to_dict()["overall"]["score"] == 83


def test_check_day_state_flags_inconsistent_status():
    day = DayStatus(
        date=date(2026, 2, 2),
        check_in_time=datetime(2026, 2, 2, 9, 0),
        check_out_time=datetime(2026, 2, 2, 17, 0),
        status=DayState.PARTIAL,
        hours_worked=3.0,
    )

    check = Diagnostics().check_day_state(day)

    assert not check.valid
    assert check.issues == (DayStateIssue.STATUS_MISMATCH, DayStateIssue.HOURS_MISMATCH)


def test_check_day_state_flags_reversed_times():
    day = DayStatus(
        date=date(2026, 2, 2),
        check_in_time=datetime(2026, 2, 2, 17, 0),
        check_out_time=datetime(2026, 2, 2, 9, 0),
        status=DayState.COMPLETE,
    )

    assert Diagnostics().check_day_state(day).issues == (DayStateIssue.CHECKOUT_NOT_AFTER_CHECKIN,)


def test_validation_summary_reports_health(make_event):
    events = [
        make_event(Action.CHECK_IN, datetime(2026, 2, 2, 9, 0)),
        make_event(Action.CHECK_OUT, datetime(2026, 2, 2, 17, 0)),
    ]

    summary = Diagnostics().validation_summary(events)

    assert summary.status == "healthy"
    assert summary.data_quality == "good"
    assert summary.total_records == 2
    assert summary.to_dict()["summary"]["total_hours"] == 8.0
