from __future__ import annotations

from datetime import datetime
from typing import Tuple

from ...core.enums import DayState, ErrorCode
from ...events.model import DayStatus
from ..timing import TimingEvaluator
from .base import ActionDecision, ActionStrategy


class CheckInStrategy(ActionStrategy):
    """none -> partial. Any recorded check-in closes this transition for the day."""

    def check_sequence(self, *, day: DayStatus) -> Tuple[ErrorCode, ...]:
        if day.has_checked_in:
            return (ErrorCode.ALREADY_CHECKED_IN,)
        return ()

    def check_timing(self, *, day: DayStatus, timestamp: datetime, timing: TimingEvaluator) -> ActionDecision:
        return ActionDecision()

    def expected_status(self, *, day: DayStatus) -> DayState:
        return DayState.PARTIAL
