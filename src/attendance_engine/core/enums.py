from __future__ import annotations

from enum import Enum
from typing import Optional


class Action(str, Enum):
    """Attendance action a user can perform."""

    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"

    @classmethod
    def parse(cls, value) -> Optional["Action"]:
        """Map a raw action value (``check-in``, ``checkin``, ``check_in``...) to an Action.

        Returns None for unknown values so callers can report a typed error.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().lower().replace("_", "-")
        return _ACTION_ALIASES.get(key)


_ACTION_ALIASES = {
    "check-in": Action.CHECK_IN,
    "checkin": Action.CHECK_IN,
    "check-out": Action.CHECK_OUT,
    "checkout": Action.CHECK_OUT,
}


class DayState(str, Enum):
    """Derived status of one actor's day."""

    NONE = "none"
    PARTIAL = "partial"
    COMPLETE = "complete"


class ErrorCode(str, Enum):
    """Hard errors: the action is rejected."""

    MISSING_ACTION = "missing-action"
    INVALID_ACTION = "invalid-action"
    MISSING_ORIGIN = "missing-origin"
    IP_DETECTION_FAILED = "ip-detection-failed"
    UNAUTHORIZED_ORIGIN = "unauthorized-origin"
    ALREADY_CHECKED_IN = "already-checked-in"
    NO_CHECKIN_FOUND = "no-checkin-found"
    ALREADY_CHECKED_OUT = "already-checked-out"
    INVALID_TIMING = "invalid-timing"


class WarningCode(str, Enum):
    """Soft findings: the action is still permitted."""

    SHORT_SESSION = "short-session"
    LONG_SESSION = "long-session"


class IssueType(str, Enum):
    """Structural problems found in historical data."""

    SEQUENCE_ERROR = "sequence-error"
    UNMATCHED_CHECK_IN = "unmatched-check-in"
    UNMATCHED_CHECK_OUT = "unmatched-check-out"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecommendationType(str, Enum):
    LOW_HOURS = "low-hours"
    LOW_ATTENDANCE = "low-attendance"
    SEQUENCE_ISSUES = "sequence-issues"
    FAILED_TESTS = "failed-tests"
    NO_ATTENDANCE = "no-attendance"
    INCOMPLETE_DAY = "incomplete-day"


class DayStateIssue(str, Enum):
    """Inconsistencies inside a single DayStatus record."""

    STATUS_MISMATCH = "status-mismatch"
    CHECKOUT_NOT_AFTER_CHECKIN = "checkout-not-after-checkin"
    HOURS_MISMATCH = "hours-mismatch"
    UNKNOWN_STATUS = "unknown-status"
