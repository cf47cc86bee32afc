from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple

from ..core.enums import IssueType, Priority, RecommendationType
from ..reporting.model import PeriodStatistics


@dataclass(frozen=True)
class IntegrityIssue:
    date: date
    type: IssueType
    message: str
    actor_id: Optional[str] = None
    event_ref: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "type": self.type.value,
            "message": self.message,
            "actor_id": self.actor_id,
            "event_ref": self.event_ref,
        }


@dataclass(frozen=True)
class Recommendation:
    """Advisory only; never blocks anything."""

    type: RecommendationType
    message: str
    priority: Priority
    details: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        data = {"type": self.type.value, "message": self.message, "priority": self.priority.value}
        if self.details:
            data["details"] = list(self.details)
        return data


@dataclass(frozen=True)
class IntegrityReport:
    issues: Tuple[IntegrityIssue, ...] = ()
    statistics: PeriodStatistics = field(default_factory=PeriodStatistics)
    recommendations: Tuple[Recommendation, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.issues

    def issues_of(self, issue_type: IssueType) -> Tuple[IntegrityIssue, ...]:
        return tuple(i for i in self.issues if i.type == issue_type)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "issues": [i.to_dict() for i in self.issues],
            "statistics": self.statistics.to_dict(),
            "recommendations": [r.to_dict() for r in self.recommendations],
        }
