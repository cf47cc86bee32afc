from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from ...core.enums import DayState, ErrorCode, WarningCode
from ...events.model import DayStatus
from ..timing import TimingEvaluator


@dataclass(frozen=True)
class ActionDecision:
    errors: Tuple[ErrorCode, ...] = ()
    warnings: Tuple[WarningCode, ...] = ()
    projected_hours: float = 0.0


class ActionStrategy(ABC):
    """Strategy Pattern: one transition of the day state machine."""

    @abstractmethod
    def check_sequence(self, *, day: DayStatus) -> Tuple[ErrorCode, ...]:
        raise NotImplementedError

    @abstractmethod
    def check_timing(self, *, day: DayStatus, timestamp: datetime, timing: TimingEvaluator) -> ActionDecision:
        raise NotImplementedError

    @abstractmethod
    def expected_status(self, *, day: DayStatus) -> DayState:
        raise NotImplementedError
