from __future__ import annotations

from typing import List, Sequence

from ..core.constants import DEFAULT_RULES, RuleTable
from ..core.enums import IssueType, Priority, RecommendationType
from ..reporting.model import PeriodStatistics
from .model import IntegrityIssue, Recommendation


def recommend(
    statistics: PeriodStatistics,
    issues: Sequence[IntegrityIssue],
    rules: RuleTable = DEFAULT_RULES,
) -> List[Recommendation]:
    """Heuristics over audited history. An empty history gets no advice."""
    if statistics.total_days == 0:
        return []

    out: List[Recommendation] = []
    if statistics.average_hours < rules.low_hours_threshold:
        out.append(
            Recommendation(
                type=RecommendationType.LOW_HOURS,
                message="Consider increasing daily work hours for better productivity",
                priority=Priority.MEDIUM,
            )
        )

    if statistics.attendance_rate < rules.low_attendance_threshold:
        out.append(
            Recommendation(
                type=RecommendationType.LOW_ATTENDANCE,
                message=f"Attendance rate is below {rules.low_attendance_threshold}%. Try to maintain consistent attendance",
                priority=Priority.HIGH,
            )
        )

    if any(i.type == IssueType.SEQUENCE_ERROR for i in issues):
        out.append(
            Recommendation(
                type=RecommendationType.SEQUENCE_ISSUES,
                message="Sequence errors detected. Ensure proper check-in/check-out flow",
                priority=Priority.HIGH,
            )
        )
    return out
