"""Self-test diagnostics over one actor's history and current day.

Runs the engine against the actor's own data and checks the answers are the
ones the state machine predicts. Used by the ``/api/attendance/self-test``
endpoint and by admins investigating suspicious records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from ..common.datetime_utils import DEFAULT_BOUNDARY, CalendarBoundary
from ..common.validators import require_list
from ..core.constants import DEFAULT_RULES, HOURS_TOLERANCE, RuleTable
from ..core.enums import Action, DayState, DayStateIssue, Priority, RecommendationType
from ..events.model import AttendanceEvent, DayStatus
from ..reporting.reporter import round_half_up
from ..validation.validator import ActionValidator
from .auditor import IntegrityAuditor
from .model import IntegrityIssue, Recommendation

logger = logging.getLogger(__name__)

SELF_TEST_ORIGIN = "self-test"


@dataclass(frozen=True)
class DayStateCheck:
    valid: bool
    issues: Tuple[DayStateIssue, ...] = ()

    def to_dict(self) -> dict:
        return {"valid": self.valid, "issues": [i.value for i in self.issues]}


@dataclass(frozen=True)
class DiagnosticTest:
    name: str
    passed: bool
    description: str
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"name": self.name, "passed": self.passed, "description": self.description, "details": self.details}


@dataclass(frozen=True)
class ValidationSummary:
    healthy: bool
    total_records: int
    attendance_rate: int
    total_hours: float
    average_hours: float
    issues: Tuple[IntegrityIssue, ...] = ()
    recommendations: Tuple[Recommendation, ...] = ()

    @property
    def status(self) -> str:
        return "healthy" if self.healthy else "issues-detected"

    @property
    def data_quality(self) -> str:
        return "good" if self.healthy else "needs-attention"

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "summary": {
                "total_records": self.total_records,
                "data_quality": self.data_quality,
                "attendance_rate": self.attendance_rate,
                "total_hours": self.total_hours,
                "average_hours": self.average_hours,
            },
            "issues": [i.to_dict() for i in self.issues],
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


@dataclass(frozen=True)
class SelfTestReport:
    tests: Tuple[DiagnosticTest, ...]
    summary: ValidationSummary
    recommendations: Tuple[Recommendation, ...] = ()

    @property
    def passed(self) -> int:
        return sum(1 for t in self.tests if t.passed)

    @property
    def total(self) -> int:
        return len(self.tests)

    @property
    def success(self) -> bool:
        return self.passed == self.total

    @property
    def score(self) -> int:
        return int(round_half_up(self.passed / self.total * 100)) if self.total else 0

    def to_dict(self) -> dict:
        return {
            "overall": {"success": self.success, "score": self.score, "passed": self.passed, "total": self.total},
            "summary": self.summary.to_dict(),
            "tests": [t.to_dict() for t in self.tests],
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


class Diagnostics:
    def __init__(
        self,
        *,
        auditor: Optional[IntegrityAuditor] = None,
        validator: Optional[ActionValidator] = None,
        rules: RuleTable = DEFAULT_RULES,
        boundary: CalendarBoundary = DEFAULT_BOUNDARY,
    ):
        self._rules = rules
        self._boundary = boundary
        self._auditor = auditor or IntegrityAuditor(rules, boundary=boundary)
        self._validator = validator or ActionValidator(rules, boundary=boundary)

    def validation_summary(self, events: Iterable[AttendanceEvent]) -> ValidationSummary:
        items = require_list(events, "events")
        report = self._auditor.audit(items)
        stats = report.statistics
        return ValidationSummary(
            healthy=report.valid,
            total_records=len(items),
            attendance_rate=stats.attendance_rate,
            total_hours=stats.total_hours,
            average_hours=stats.average_hours,
            issues=report.issues,
            recommendations=report.recommendations,
        )

    def check_day_state(self, day: Optional[DayStatus]) -> DayStateCheck:
        """Verify a DayStatus against its own invariant."""
        if day is None:
            return DayStateCheck(valid=True)

        issues: List[DayStateIssue] = []
        if day.status not in self._rules.valid_statuses:
            issues.append(DayStateIssue.UNKNOWN_STATUS)

        has_in, has_out = day.has_checked_in, day.has_checked_out
        if has_in and has_out:
            if day.check_out_time <= day.check_in_time:
                issues.append(DayStateIssue.CHECKOUT_NOT_AFTER_CHECKIN)
            else:
                if day.status != DayState.COMPLETE:
                    issues.append(DayStateIssue.STATUS_MISMATCH)
                expected = (day.check_out_time - day.check_in_time).total_seconds() / 3600
                if abs(expected - day.hours_worked) >= HOURS_TOLERANCE:
                    issues.append(DayStateIssue.HOURS_MISMATCH)
        elif has_in and day.status != DayState.PARTIAL:
            issues.append(DayStateIssue.STATUS_MISMATCH)
        elif not has_in and not has_out and day.status != DayState.NONE:
            issues.append(DayStateIssue.STATUS_MISMATCH)

        return DayStateCheck(valid=not issues, issues=tuple(issues))

    def run_self_test(
        self,
        events: Iterable[AttendanceEvent],
        day: Optional[DayStatus],
        *,
        now: Optional[datetime] = None,
    ) -> SelfTestReport:
        items = require_list(events, "events")
        now = self._boundary.normalize(now) if now else self._boundary.now()
        day = (day or DayStatus.empty(now.date())).normalized(self._boundary)

        summary = self.validation_summary(items)
        tests: List[DiagnosticTest] = [
            DiagnosticTest(
                name="data-integrity",
                passed=summary.healthy,
                description="Validates overall data consistency and identifies anomalies",
                details={"issues": len(summary.issues)},
            ),
        ]

        state = self.check_day_state(day)
        tests.append(
            DiagnosticTest(
                name="today-state",
                passed=state.valid,
                description="Validates current day attendance state logic",
                details=state.to_dict(),
            )
        )

        tests.extend(self._action_tests(day, now))
        tests.append(self._duplicate_prevention_test(day, now))
        tests.append(
            DiagnosticTest(
                name="sequential-actions",
                passed=not (day.has_checked_out and not day.has_checked_in),
                description="Validates that checkout cannot happen without checkin",
            )
        )
        if day.has_checked_in and day.has_checked_out:
            tests.append(self._hours_accuracy_test(day))

        report = SelfTestReport(
            tests=tuple(tests),
            summary=summary,
            recommendations=tuple(self._recommend(tests, day)),
        )
        logger.info("Self-test: %d/%d passed", report.passed, report.total)
        return report

    def _try(self, action: Action, day: DayStatus, now: datetime):
        return self._validator.validate(
            action,
            day,
            SELF_TEST_ORIGIN,
            timestamp=now,
            authorized_origins=[SELF_TEST_ORIGIN],
        )

    def _action_tests(self, day: DayStatus, now: datetime) -> List[DiagnosticTest]:
        checkin = self._try(Action.CHECK_IN, day, now)
        checkout = self._try(Action.CHECK_OUT, day, now)

        checkin_expected = not day.has_checked_in
        checkout_expected = day.has_checked_in and not day.has_checked_out
        return [
            DiagnosticTest(
                name="checkin-action",
                passed=checkin.valid == checkin_expected,
                description="Check-in validation",
                details=checkin.to_dict(),
            ),
            DiagnosticTest(
                name="checkout-action",
                passed=checkout.valid == checkout_expected,
                description="Check-out validation",
                details=checkout.to_dict(),
            ),
        ]

    def _duplicate_prevention_test(self, day: DayStatus, now: datetime) -> DiagnosticTest:
        checks = {}
        if day.has_checked_in:
            checks["checkin_rejected"] = not self._try(Action.CHECK_IN, day, now).valid
        if day.has_checked_out:
            checks["checkout_rejected"] = not self._try(Action.CHECK_OUT, day, now).valid
        return DiagnosticTest(
            name="duplicate-prevention",
            passed=all(checks.values()),
            description="Ensures duplicate checkins/checkouts are prevented",
            details=checks,
        )

    @staticmethod
    def _hours_accuracy_test(day: DayStatus) -> DiagnosticTest:
        expected = (day.check_out_time - day.check_in_time).total_seconds() / 3600
        difference = abs(expected - day.hours_worked)
        return DiagnosticTest(
            name="hours-accuracy",
            passed=difference < HOURS_TOLERANCE,
            description="Validates working hours calculation",
            details={
                "expected": round_half_up(expected, 2),
                "actual": round_half_up(day.hours_worked, 2),
                "difference": round_half_up(difference, 2),
            },
        )

    @staticmethod
    def _recommend(tests: List[DiagnosticTest], day: DayStatus) -> List[Recommendation]:
        out: List[Recommendation] = []
        failed = [t.name for t in tests if not t.passed]
        if failed:
            out.append(
                Recommendation(
                    type=RecommendationType.FAILED_TESTS,
                    message=f"{len(failed)} validation tests failed. Review system logic.",
                    priority=Priority.HIGH,
                    details=tuple(failed),
                )
            )

        if not day.has_checked_in:
            out.append(
                Recommendation(
                    type=RecommendationType.NO_ATTENDANCE,
                    message="No attendance recorded today. Consider checking in.",
                    priority=Priority.LOW,
                )
            )
        elif day.status == DayState.PARTIAL:
            out.append(
                Recommendation(
                    type=RecommendationType.INCOMPLETE_DAY,
                    message="Day is incomplete. Remember to check out.",
                    priority=Priority.MEDIUM,
                )
            )
        return out
