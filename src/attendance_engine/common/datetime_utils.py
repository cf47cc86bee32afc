"""Calendar boundary helpers.

Every module that needs to know which day a timestamp belongs to goes through
``CalendarBoundary.day_of`` so "same day" means the same thing everywhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_timestamp(value) -> datetime:
    """Accept a datetime or an ISO-8601 string (``Z`` suffix allowed)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"Invalid timestamp: {value!r}")
    raise ValidationError(f"Invalid timestamp: {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


@dataclass(frozen=True)
class CalendarBoundary:
    """Single definition of day boundaries and of the timestamp form used inside the engine.

    Everything entering the engine goes through ``normalize``: timezone-aware
    timestamps become naive wall time in ``tz`` (the host's zone when ``tz``
    is unset), naive timestamps are taken as already local. Comparing or
    subtracting timestamps afterwards never mixes aware and naive values.
    """

    tz: Optional[tzinfo] = None

    @classmethod
    def from_name(cls, name: Optional[str]) -> "CalendarBoundary":
        return cls(ZoneInfo(name)) if name else cls()

    def normalize(self, ts: Optional[datetime]) -> Optional[datetime]:
        if ts is None or ts.tzinfo is None:
            return ts
        return ts.astimezone(self.tz).replace(tzinfo=None)

    def now(self) -> datetime:
        if self.tz is None:
            return now_local()
        return datetime.now(self.tz).replace(tzinfo=None)

    def day_of(self, ts: datetime) -> date:
        return self.normalize(ts).date()

    def today(self, now: Optional[datetime] = None) -> date:
        return self.day_of(now) if now is not None else self.now().date()


DEFAULT_BOUNDARY = CalendarBoundary()
