from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional, Sequence

from ..common.datetime_utils import DEFAULT_BOUNDARY, CalendarBoundary
from ..common.validators import require_list
from ..core.constants import DEFAULT_RULES, RuleTable
from ..core.enums import Action, IssueType
from ..events.aggregator import DayAggregator, group_by_day
from ..events.model import AttendanceEvent
from ..reporting.reporter import StatisticsReporter
from .model import IntegrityIssue, IntegrityReport
from .recommendations import recommend

logger = logging.getLogger(__name__)


class IntegrityAuditor:
    """Replay historical events per (actor, day) and report structural problems.

    Findings are reported, never raised: corrupt history must not block
    anything.
    """

    def __init__(
        self,
        rules: RuleTable = DEFAULT_RULES,
        *,
        boundary: CalendarBoundary = DEFAULT_BOUNDARY,
        aggregator: Optional[DayAggregator] = None,
        reporter: Optional[StatisticsReporter] = None,
    ):
        self._rules = rules
        self._boundary = boundary
        self._aggregator = aggregator or DayAggregator(boundary)
        self._reporter = reporter or StatisticsReporter(aggregator=self._aggregator, boundary=boundary)

    def audit(self, all_events: Iterable[AttendanceEvent]) -> IntegrityReport:
        events = require_list(all_events, "all_events")
        grouped = group_by_day(events, self._boundary)

        issues: List[IntegrityIssue] = []
        statuses = []
        for (actor_id, day), day_events in grouped.items():
            issues.extend(self._audit_day(actor_id, day, day_events))
            statuses.append(self._aggregator.aggregate(day_events, day=day))

        statistics = self._reporter.summarize(statuses)
        report = IntegrityReport(
            issues=tuple(issues),
            statistics=statistics,
            recommendations=tuple(recommend(statistics, issues, self._rules)),
        )

        logger.info("Audited %d events over %d days: %d issues", len(events), len(grouped), len(issues))
        if not report.valid:
            for issue in issues:
                logger.warning("%s %s [%s] %s", issue.actor_id, issue.date, issue.type.value, issue.message)
        return report

    def _audit_day(self, actor_id: str, day: date, events: Sequence[AttendanceEvent]) -> List[IntegrityIssue]:
        issues: List[IntegrityIssue] = []
        expecting_checkout = False
        checkins = 0
        checkouts = 0

        for event in events:
            if event.action == Action.CHECK_IN:
                checkins += 1
                if expecting_checkout:
                    issues.append(
                        IntegrityIssue(
                            date=day,
                            type=IssueType.SEQUENCE_ERROR,
                            message="Multiple check-ins without checkout",
                            actor_id=actor_id,
                            event_ref=event.event_id,
                        )
                    )
                expecting_checkout = True
            elif event.action == Action.CHECK_OUT:
                checkouts += 1
                if not expecting_checkout:
                    issues.append(
                        IntegrityIssue(
                            date=day,
                            type=IssueType.SEQUENCE_ERROR,
                            message="Checkout without prior checkin",
                            actor_id=actor_id,
                            event_ref=event.event_id,
                        )
                    )
                expecting_checkout = False

        if checkins > checkouts + self._rules.unmatched_checkin_tolerance:
            issues.append(
                IntegrityIssue(
                    date=day,
                    type=IssueType.UNMATCHED_CHECK_IN,
                    message=f"Too many checkins ({checkins}) vs checkouts ({checkouts})",
                    actor_id=actor_id,
                )
            )
        if checkouts > checkins:
            issues.append(
                IntegrityIssue(
                    date=day,
                    type=IssueType.UNMATCHED_CHECK_OUT,
                    message=f"More checkouts ({checkouts}) than checkins ({checkins})",
                    actor_id=actor_id,
                )
            )
        return issues
