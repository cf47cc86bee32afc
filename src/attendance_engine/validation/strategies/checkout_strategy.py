from __future__ import annotations

from datetime import datetime
from typing import Tuple

from ...core.enums import DayState, ErrorCode
from ...events.model import DayStatus
from ..timing import TimingEvaluator
from .base import ActionDecision, ActionStrategy


class CheckOutStrategy(ActionStrategy):
    """partial -> complete. Complete is terminal for the day."""

    def check_sequence(self, *, day: DayStatus) -> Tuple[ErrorCode, ...]:
        if not day.has_checked_in:
            return (ErrorCode.NO_CHECKIN_FOUND,)
        if day.has_checked_out:
            return (ErrorCode.ALREADY_CHECKED_OUT,)
        return ()

    def check_timing(self, *, day: DayStatus, timestamp: datetime, timing: TimingEvaluator) -> ActionDecision:
        result = timing.evaluate(day.check_in_time, timestamp)
        if result.is_negative:
            return ActionDecision(errors=(ErrorCode.INVALID_TIMING,))
        return ActionDecision(warnings=result.warnings, projected_hours=result.hours)

    def expected_status(self, *, day: DayStatus) -> DayState:
        return DayState.COMPLETE if day.has_checked_in else DayState.NONE
