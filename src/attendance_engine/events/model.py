from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import DEFAULT_BOUNDARY, CalendarBoundary, parse_iso_date, parse_timestamp
from ..common.validators import require_field
from ..core.enums import Action, DayState
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one check-in or check-out fact. Never mutated."""

    actor_id: str
    action: Action
    timestamp: datetime
    origin_address: str = ""
    location: Optional[Mapping[str, Any]] = None
    device_info: Optional[Mapping[str, Any]] = None
    event_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], boundary: CalendarBoundary = DEFAULT_BOUNDARY) -> "AttendanceEvent":
        """Build an event from a plain record, enforcing the required fields.

        Accepts both snake_case and the camelCase keys used by JSON callers.
        """
        if not isinstance(data, Mapping):
            raise ValidationError("Attendance event must be an object")

        actor_id = require_field(data, "actor_id", "actorId", "userId")
        raw_action = require_field(data, "action")
        action = Action.parse(raw_action)
        if action is None:
            raise ValidationError(f"Unknown action: {raw_action!r}")
        timestamp = boundary.normalize(parse_timestamp(require_field(data, "timestamp")))

        origin = data.get("origin_address") or data.get("originAddress") or data.get("ipAddress") or ""
        event_id = data.get("event_id") or data.get("eventId") or data.get("id")

        return cls(
            actor_id=str(actor_id),
            action=action,
            timestamp=timestamp,
            origin_address=str(origin).strip(),
            location=data.get("location"),
            device_info=data.get("device_info") or data.get("deviceInfo"),
            event_id=str(event_id) if event_id is not None else None,
        )

    def normalized(self, boundary: CalendarBoundary = DEFAULT_BOUNDARY) -> "AttendanceEvent":
        timestamp = boundary.normalize(self.timestamp)
        return self if timestamp is self.timestamp else replace(self, timestamp=timestamp)

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "actor_id": self.actor_id,
            "action": self.action.value,
            "timestamp": self.timestamp.isoformat(),
            "origin_address": self.origin_address,
            "location": self.location,
            "device_info": self.device_info,
        }


@dataclass(frozen=True)
class DayStatus:
    """Read-model: one actor's day derived from raw events. Not persisted."""

    date: Optional[date]
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    status: DayState = DayState.NONE
    hours_worked: float = 0.0

    @classmethod
    def empty(cls, day: Optional[date] = None) -> "DayStatus":
        return cls(date=day)

    @property
    def has_checked_in(self) -> bool:
        return self.check_in_time is not None

    @property
    def has_checked_out(self) -> bool:
        return self.check_out_time is not None

    @classmethod
    def from_dict(
        cls,
        data: Optional[Mapping[str, Any]],
        boundary: CalendarBoundary = DEFAULT_BOUNDARY,
    ) -> "DayStatus":
        """Rebuild a day status supplied by a caller (e.g. a cached preview).

        Status is re-derived from the timestamps so a stale or wrong ``status``
        field cannot bypass sequencing. A check-out that is not after the
        check-in is dropped, the same pairing rule ``DayAggregator`` applies.
        """
        if not data:
            return cls.empty()
        if not isinstance(data, Mapping):
            raise ValidationError("Day status must be an object")

        raw_in = data.get("check_in_time") or data.get("checkInTime") or data.get("checkinTime")
        raw_out = data.get("check_out_time") or data.get("checkOutTime") or data.get("checkoutTime")
        check_in = boundary.normalize(parse_timestamp(raw_in)) if raw_in else None
        check_out = boundary.normalize(parse_timestamp(raw_out)) if raw_out else None

        raw_date = data.get("date")
        if isinstance(raw_date, date):
            day = raw_date
        elif raw_date:
            try:
                day = parse_iso_date(str(raw_date)[:10])
            except ValueError:
                raise ValidationError(f"Invalid date: {raw_date!r}")
        else:
            first = check_in or check_out
            day = first.date() if first else None

        if check_in and check_out and check_out > check_in:
            hours = (check_out - check_in).total_seconds() / 3600
            return cls(date=day, check_in_time=check_in, check_out_time=check_out, status=DayState.COMPLETE, hours_worked=hours)
        if check_in:
            return cls(date=day, check_in_time=check_in, status=DayState.PARTIAL)
        return cls.empty(day)

    def normalized(self, boundary: CalendarBoundary = DEFAULT_BOUNDARY) -> "DayStatus":
        check_in = boundary.normalize(self.check_in_time)
        check_out = boundary.normalize(self.check_out_time)
        if check_in is self.check_in_time and check_out is self.check_out_time:
            return self
        return replace(self, check_in_time=check_in, check_out_time=check_out)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat() if self.date else None,
            "check_in_time": self.check_in_time.isoformat() if self.check_in_time else None,
            "check_out_time": self.check_out_time.isoformat() if self.check_out_time else None,
            "status": self.status.value,
            "hours_worked": round(self.hours_worked, 2),
        }


def events_from_payload(items: Any, boundary: CalendarBoundary = DEFAULT_BOUNDARY) -> list:
    """Parse a JSON array of event records; the whole batch fails on the first bad record.

    Ready-made ``AttendanceEvent`` instances pass through, with their
    timestamps normalized like parsed ones.
    """
    if items is None:
        return []
    if not isinstance(items, (list, tuple)):
        raise ValidationError("events must be a list")
    return [
        item.normalized(boundary) if isinstance(item, AttendanceEvent) else AttendanceEvent.from_dict(item, boundary)
        for item in items
    ]
