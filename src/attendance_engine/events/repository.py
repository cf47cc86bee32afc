from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceEvent


class EventRepository(Protocol):
    """Append-only event store owned by the caller."""

    def get_for_actor_and_date(self, actor_id: str, work_date: date) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def get_for_actor(self, actor_id: str) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def append(self, event: AttendanceEvent) -> str:
        """Store the event and return its id."""

        raise NotImplementedError
