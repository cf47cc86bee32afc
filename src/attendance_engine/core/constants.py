"""Rule table: thresholds and policy constants.

Note: Keep constants here to avoid magic numbers spread across code. Every
threshold can be overridden from settings through ``RuleTable.from_settings``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import FrozenSet

from .enums import Action, DayState

MIN_WORK_SESSION = timedelta(minutes=15)
MAX_WORK_SESSION = timedelta(hours=16)

VALID_ACTIONS = frozenset(Action)
VALID_STATUSES = frozenset(DayState)

# Origin values reported by clients that could not resolve their own address.
UNDETECTED_ORIGINS = frozenset({"unable to detect", "unknown"})

DEFAULT_STREAK_WINDOW_DAYS = 30

# A day may legitimately end with one open check-in.
UNMATCHED_CHECKIN_TOLERANCE = 1

LOW_HOURS_THRESHOLD = 4.0
LOW_ATTENDANCE_THRESHOLD = 80

HOURS_TOLERANCE = 0.01


@dataclass(frozen=True)
class RuleTable:
    """Immutable bundle of the thresholds the engine evaluates against."""

    min_session: timedelta = MIN_WORK_SESSION
    max_session: timedelta = MAX_WORK_SESSION
    valid_actions: FrozenSet[Action] = field(default=VALID_ACTIONS)
    valid_statuses: FrozenSet[DayState] = field(default=VALID_STATUSES)
    undetected_origins: FrozenSet[str] = field(default=UNDETECTED_ORIGINS)
    streak_window_days: int = DEFAULT_STREAK_WINDOW_DAYS
    unmatched_checkin_tolerance: int = UNMATCHED_CHECKIN_TOLERANCE
    low_hours_threshold: float = LOW_HOURS_THRESHOLD
    low_attendance_threshold: int = LOW_ATTENDANCE_THRESHOLD

    @classmethod
    def from_settings(cls, settings) -> "RuleTable":
        """Build a rule table from a settings module, keeping defaults for missing values."""
        min_minutes = getattr(settings, "MIN_SESSION_MINUTES", None)
        max_hours = getattr(settings, "MAX_SESSION_HOURS", None)
        window = getattr(settings, "STREAK_WINDOW_DAYS", None)
        return cls(
            min_session=timedelta(minutes=float(min_minutes)) if min_minutes is not None else MIN_WORK_SESSION,
            max_session=timedelta(hours=float(max_hours)) if max_hours is not None else MAX_WORK_SESSION,
            streak_window_days=int(window) if window is not None else DEFAULT_STREAK_WINDOW_DAYS,
        )


DEFAULT_RULES = RuleTable()
