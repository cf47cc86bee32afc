from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..common.datetime_utils import DEFAULT_BOUNDARY, CalendarBoundary
from ..common.validators import require_list
from ..core.enums import Action, DayState
from .model import AttendanceEvent, DayStatus

logger = logging.getLogger(__name__)

DayKey = Tuple[str, date]

MS_PER_HOUR = 3_600_000


def sort_events(events: Iterable[AttendanceEvent]) -> List[AttendanceEvent]:
    """Timestamp order; the stable sort keeps input order for equal timestamps."""
    return sorted(events, key=lambda e: e.timestamp)


def group_by_day(
    events: Iterable[AttendanceEvent],
    boundary: CalendarBoundary = DEFAULT_BOUNDARY,
) -> Dict[DayKey, List[AttendanceEvent]]:
    """Bucket events per (actor, day), each bucket in timestamp order, keys sorted.

    Buckets hold the events with timestamps normalized through ``boundary``.
    """
    grouped: Dict[DayKey, List[AttendanceEvent]] = defaultdict(list)
    for event in events:
        event = event.normalized(boundary)
        grouped[(event.actor_id, boundary.day_of(event.timestamp))].append(event)
    return {key: sort_events(grouped[key]) for key in sorted(grouped)}


class DayAggregator:
    """Reduce one actor's events for one day into a DayStatus.

    Policy: the first check-in wins and the check-out is the first one after
    it. Duplicates are kept as data but ignored here; the integrity auditor
    reports them.
    """

    def __init__(self, boundary: CalendarBoundary = DEFAULT_BOUNDARY):
        self._boundary = boundary

    def aggregate(self, events: Sequence[AttendanceEvent], *, day: Optional[date] = None) -> DayStatus:
        ordered = sort_events(e.normalized(self._boundary) for e in require_list(events, "events"))
        if day is None and ordered:
            day = self._boundary.day_of(ordered[0].timestamp)

        check_in = next((e for e in ordered if e.action == Action.CHECK_IN), None)
        if check_in is None:
            return DayStatus.empty(day)

        check_out = next(
            (e for e in ordered if e.action == Action.CHECK_OUT and e.timestamp > check_in.timestamp),
            None,
        )
        if check_out is None:
            return DayStatus(date=day, check_in_time=check_in.timestamp, status=DayState.PARTIAL)

        duration = check_out.timestamp - check_in.timestamp
        hours = (duration.total_seconds() * 1000) / MS_PER_HOUR
        return DayStatus(
            date=day,
            check_in_time=check_in.timestamp,
            check_out_time=check_out.timestamp,
            status=DayState.COMPLETE,
            hours_worked=hours,
        )

    def aggregate_all(self, events: Iterable[AttendanceEvent]) -> Dict[DayKey, DayStatus]:
        """DayStatus for every (actor, day) present in ``events``."""
        grouped = group_by_day(require_list(events, "events"), self._boundary)
        statuses = {key: self.aggregate(items, day=key[1]) for key, items in grouped.items()}
        logger.debug("Aggregated %d events into %d day statuses", sum(len(v) for v in grouped.values()), len(statuses))
        return statuses
