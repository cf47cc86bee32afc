from __future__ import annotations

from datetime import datetime

import pytest

from attendance_engine.core.enums import Action
from attendance_engine.events.model import AttendanceEvent


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2026, 2, 2, 9, 0, 0)


@pytest.fixture
def make_event():
    counter = {"n": 0}

    def _make(action: Action, ts: datetime, actor_id: str = "u1", origin: str = "10.0.0.1") -> AttendanceEvent:
        counter["n"] += 1
        return AttendanceEvent(
            actor_id=actor_id,
            action=action,
            timestamp=ts,
            origin_address=origin,
            event_id=f"e{counter['n']}",
        )

    return _make
