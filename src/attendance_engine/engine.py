"""Public operations of the engine.

Each function is pure over its inputs and uses the default rule table unless
a container is passed. Inputs may be domain objects or the plain records JSON
callers send (``{"actorId", "action", "timestamp", "originAddress"}``); records
are checked against the event schema before any rule runs.

Example (service layer, no Flask)::

    from attendance_engine.engine import aggregate_day, validate_action

    day = aggregate_day(todays_events)
    verdict = validate_action("check-out", "10.0.0.1", day, ["10.0.0.1"])
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Union

from .common.datetime_utils import parse_iso_date, parse_timestamp
from .common.validators import require_list
from .container import Container, build_container
from .core.exceptions import ValidationError
from .events.model import AttendanceEvent, DayStatus, events_from_payload
from .integrity.model import IntegrityReport
from .reporting.model import PeriodStatistics
from .streaks.calculator import StreakResult
from .validation.model import ValidationVerdict

_default: Optional[Container] = None


def _engine(container: Optional[Container]) -> Container:
    global _default
    if container is not None:
        return container
    if _default is None:
        _default = build_container()
    return _default


def _events(items, engine: Container) -> list:
    return events_from_payload(require_list(items, "events"), engine.boundary)


def _day_status(value, engine: Container) -> Optional[DayStatus]:
    if isinstance(value, Mapping):
        return DayStatus.from_dict(value, engine.boundary)
    return value


def _complete_date(value) -> date:
    if isinstance(value, str):
        try:
            return parse_iso_date(value[:10])
        except ValueError:
            raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")
    return value


def validate_action(
    action,
    origin_address: Optional[str],
    day_status: Union[DayStatus, Mapping[str, Any], None],
    authorized_origins: Optional[Iterable[str]] = None,
    now: Union[datetime, str, None] = None,
    *,
    container: Optional[Container] = None,
) -> ValidationVerdict:
    engine = _engine(container)
    return engine.validator.validate(
        action,
        _day_status(day_status, engine),
        origin_address,
        timestamp=parse_timestamp(now) if now else None,
        authorized_origins=authorized_origins,
    )


def aggregate_day(
    events: Iterable[Union[AttendanceEvent, Mapping[str, Any]]],
    *,
    container: Optional[Container] = None,
) -> DayStatus:
    engine = _engine(container)
    return engine.aggregator.aggregate(_events(events, engine))


def calculate_streak(
    complete_dates: Iterable[Union[date, str]],
    *,
    today: Union[date, str, None] = None,
    container: Optional[Container] = None,
) -> StreakResult:
    dates = [_complete_date(d) for d in require_list(complete_dates, "complete_dates")]
    return _engine(container).streaks.calculate(dates, today=_complete_date(today) if today else None)


def audit_integrity(
    all_events: Iterable[Union[AttendanceEvent, Mapping[str, Any]]],
    *,
    container: Optional[Container] = None,
) -> IntegrityReport:
    engine = _engine(container)
    return engine.auditor.audit(_events(all_events, engine))


def summarize(
    day_statuses: Iterable[Union[DayStatus, Mapping[str, Any]]],
    *,
    container: Optional[Container] = None,
) -> PeriodStatistics:
    engine = _engine(container)
    return engine.reporter.summarize([_day_status(d, engine) for d in require_list(day_statuses, "day_statuses")])
