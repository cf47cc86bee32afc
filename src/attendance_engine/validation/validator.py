from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from ..common.datetime_utils import DEFAULT_BOUNDARY, CalendarBoundary
from ..core.constants import DEFAULT_RULES, RuleTable
from ..core.enums import Action, ErrorCode
from ..events.model import DayStatus
from .factory import ActionStrategyFactory
from .model import ValidationVerdict
from .timing import TimingEvaluator

logger = logging.getLogger(__name__)


class ActionValidator:
    """Decide whether one proposed check-in/check-out is legal.

    Checks run in order (parameters, origin, sequencing, timing) and stop at
    the first stage producing hard errors. Timing warnings never block.

    Timestamps are normalized through ``boundary`` before any comparison; a
    missing timestamp means the boundary's current time.

    ``allow_any_origin`` skips the whole origin stage. It is an explicit flag
    for local testing and is never inferred from the runtime environment.
    """

    def __init__(
        self,
        rules: RuleTable = DEFAULT_RULES,
        *,
        allow_any_origin: bool = False,
        strategy_factory: Optional[ActionStrategyFactory] = None,
        timing: Optional[TimingEvaluator] = None,
        boundary: CalendarBoundary = DEFAULT_BOUNDARY,
    ):
        self._rules = rules
        self._boundary = boundary
        self._allow_any_origin = bool(allow_any_origin)
        self._factory = strategy_factory or ActionStrategyFactory()
        self._timing = timing or TimingEvaluator(rules)

    def validate(
        self,
        action,
        day_status: Optional[DayStatus],
        origin_address: Optional[str],
        timestamp: Optional[datetime] = None,
        authorized_origins: Optional[Iterable[str]] = None,
    ) -> ValidationVerdict:
        timestamp = self._boundary.normalize(timestamp) if timestamp else self._boundary.now()
        day = (day_status or DayStatus.empty()).normalized(self._boundary)

        errors = self._check_params(action, origin_address)
        if errors:
            return self._rejected(errors, action)

        parsed = Action.parse(action)
        origin = str(origin_address).strip()

        if not self._allow_any_origin:
            errors = self._check_origin(origin, authorized_origins)
            if errors:
                return self._rejected(errors, action)

        strategy = self._factory.for_action(parsed)
        errors = list(strategy.check_sequence(day=day))
        if errors:
            return self._rejected(errors, action)

        decision = strategy.check_timing(day=day, timestamp=timestamp, timing=self._timing)
        if decision.errors:
            return self._rejected(list(decision.errors), action, warnings=decision.warnings)

        return ValidationVerdict(
            valid=True,
            warnings=decision.warnings,
            expected_status=strategy.expected_status(day=day),
            projected_hours_worked=decision.projected_hours,
        )

    def _check_params(self, action, origin_address) -> List[ErrorCode]:
        errors: List[ErrorCode] = []
        if action is None or (isinstance(action, str) and not action.strip()):
            errors.append(ErrorCode.MISSING_ACTION)
        elif Action.parse(action) not in self._rules.valid_actions:
            errors.append(ErrorCode.INVALID_ACTION)

        if origin_address is None or not str(origin_address).strip():
            errors.append(ErrorCode.MISSING_ORIGIN)
        return errors

    def _check_origin(self, origin: str, authorized_origins: Optional[Iterable[str]]) -> List[ErrorCode]:
        if origin.lower() in self._rules.undetected_origins:
            return [ErrorCode.IP_DETECTION_FAILED]

        allowlist = {o.strip() for o in (authorized_origins or ()) if o and o.strip()}
        if allowlist and origin not in allowlist:
            return [ErrorCode.UNAUTHORIZED_ORIGIN]
        return []

    @staticmethod
    def _rejected(errors, action, *, warnings=()) -> ValidationVerdict:
        logger.debug("Rejected %r: %s", action, ", ".join(e.value for e in errors))
        return ValidationVerdict.reject(*errors, warnings=tuple(warnings))
