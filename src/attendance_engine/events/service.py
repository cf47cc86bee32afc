from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import DEFAULT_BOUNDARY, CalendarBoundary
from ..common.validators import require_non_empty
from ..core.enums import Action
from ..reporting.model import AttendanceSummary
from ..reporting.reporter import StatisticsReporter
from ..validation.model import ValidationVerdict
from ..validation.validator import ActionValidator
from .aggregator import DayAggregator
from .model import AttendanceEvent, DayStatus
from .repository import EventRepository

logger = logging.getLogger(__name__)

LOCK_STRIPES = 64


@dataclass(frozen=True)
class ActionResult:
    verdict: ValidationVerdict
    day_status: DayStatus
    event: Optional[AttendanceEvent] = None

    def to_dict(self) -> dict:
        return {
            "success": self.verdict.valid,
            "validation": self.verdict.to_dict(),
            "event": self.event.to_dict() if self.event else None,
            "today_status": self.day_status.to_dict(),
        }


class AttendanceService:
    """Use case: validate-then-record one attendance action.

    The engine itself is stateless; this service is the caller-side piece
    that reads the actor's day, validates against it and appends the event.
    Actions of one actor are serialized so the sequencing check always sees
    a race-free view of the day. Locks are striped by actor id over a
    fixed pool of ``LOCK_STRIPES``.
    """

    def __init__(
        self,
        events: EventRepository,
        *,
        validator: Optional[ActionValidator] = None,
        aggregator: Optional[DayAggregator] = None,
        reporter: Optional[StatisticsReporter] = None,
        boundary: CalendarBoundary = DEFAULT_BOUNDARY,
        authorized_origins: Iterable[str] = (),
    ):
        self._events = events
        self._validator = validator or ActionValidator(boundary=boundary)
        self._boundary = boundary
        self._aggregator = aggregator or DayAggregator(boundary)
        self._reporter = reporter or StatisticsReporter(aggregator=self._aggregator, boundary=boundary)
        self._authorized_origins = tuple(authorized_origins)
        self._locks = tuple(threading.Lock() for _ in range(LOCK_STRIPES))

    def _lock_for(self, actor_id: str) -> threading.Lock:
        return self._locks[hash(actor_id) % len(self._locks)]

    def day_status(self, actor_id: str, work_date: date) -> DayStatus:
        events = self._events.get_for_actor_and_date(actor_id, work_date)
        return self._aggregator.aggregate(list(events), day=work_date)

    def today_status(self, actor_id: str, *, now: Optional[datetime] = None) -> DayStatus:
        return self.day_status(actor_id, self._boundary.today(now))

    def summary(self, actor_id: str, *, now: Optional[datetime] = None) -> AttendanceSummary:
        events = self._events.get_for_actor(actor_id)
        return self._reporter.build_summary(list(events), today=self._boundary.today(now), actor_id=actor_id)

    def record_action(
        self,
        actor_id: str,
        action,
        origin_address: Optional[str],
        *,
        now: Optional[datetime] = None,
        authorized_origins: Iterable[str] = (),
        location: Optional[Mapping[str, Any]] = None,
        device_info: Optional[Mapping[str, Any]] = None,
    ) -> ActionResult:
        actor_id = require_non_empty(actor_id, "actor_id")
        now = self._boundary.normalize(now) if now else self._boundary.now()
        work_date = self._boundary.day_of(now)
        allowlist = [*self._authorized_origins, *authorized_origins]

        with self._lock_for(actor_id):
            day = self.day_status(actor_id, work_date)
            verdict = self._validator.validate(action, day, origin_address, timestamp=now, authorized_origins=allowlist)
            if not verdict.valid:
                return ActionResult(verdict=verdict, day_status=day)

            event = AttendanceEvent(
                actor_id=actor_id,
                action=Action.parse(action),
                timestamp=now,
                origin_address=str(origin_address).strip(),
                location=location,
                device_info=device_info,
            )
            event_id = self._events.append(event)
            event = replace(event, event_id=str(event_id) if event_id is not None else None)
            new_day = self.day_status(actor_id, work_date)

        logger.info("%s %s at %s", actor_id, event.action.value, now.isoformat())
        return ActionResult(verdict=verdict, day_status=new_day, event=event)
