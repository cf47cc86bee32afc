from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Tuple

from ..core.constants import DEFAULT_RULES, RuleTable
from ..core.enums import WarningCode


@dataclass(frozen=True)
class TimingResult:
    duration: timedelta
    warnings: Tuple[WarningCode, ...] = ()

    @property
    def duration_ms(self) -> int:
        return int(self.duration.total_seconds() * 1000)

    @property
    def is_negative(self) -> bool:
        return self.duration < timedelta(0)

    @property
    def hours(self) -> float:
        """Session length in hours, never below 0."""
        return max(0.0, self.duration.total_seconds() / 3600)


class TimingEvaluator:
    """Classify a session length against the min/max thresholds.

    A negative duration yields no warning: escalating it to a hard error is the
    caller's decision.
    """

    def __init__(self, rules: RuleTable = DEFAULT_RULES):
        self._rules = rules

    def evaluate(self, check_in: datetime, check_out: datetime) -> TimingResult:
        duration = check_out - check_in
        if duration < timedelta(0):
            return TimingResult(duration=duration)

        warnings = []
        if duration < self._rules.min_session:
            warnings.append(WarningCode.SHORT_SESSION)
        if duration > self._rules.max_session:
            warnings.append(WarningCode.LONG_SESSION)
        return TimingResult(duration=duration, warnings=tuple(warnings))
