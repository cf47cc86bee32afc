from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime

from attendance_engine.core.enums import Action, DayState, ErrorCode
from attendance_engine.events.model import AttendanceEvent
from attendance_engine.events.service import LOCK_STRIPES, AttendanceService


class InMemoryEvents:
    def __init__(self):
        self.items: list[AttendanceEvent] = []
        self._id = 0

    def get_for_actor_and_date(self, actor_id: str, work_date: date):
        return [e for e in self.items if e.actor_id == actor_id and e.timestamp.date() == work_date]

    def get_for_actor(self, actor_id: str):
        return [e for e in self.items if e.actor_id == actor_id]

    def append(self, event: AttendanceEvent) -> str:
        self._id += 1
        self.items.append(replace(event, event_id=str(self._id)))
        return str(self._id)


def test_checkin_then_checkout_completes_day(fixed_now):
    repo = InMemoryEvents()
    svc = AttendanceService(repo)

    first = svc.record_action("u1", "check-in", "10.0.0.1", now=fixed_now)
    second = svc.record_action("u1", "checkout", "10.0.0.1", now=datetime(2026, 2, 2, 17, 0))

    assert first.verdict.valid
    assert first.event.event_id == "1"
    assert first.day_status.status == DayState.PARTIAL
    assert second.day_status.status == DayState.COMPLETE
    assert second.day_status.hours_worked == 8.0
    assert [e.action for e in repo.items] == [Action.CHECK_IN, Action.CHECK_OUT]


def test_rejected_action_is_not_stored(fixed_now):
    repo = InMemoryEvents()
    svc = AttendanceService(repo)
    svc.record_action("u1", Action.CHECK_IN, "10.0.0.1", now=fixed_now)

    result = svc.record_action("u1", Action.CHECK_IN, "10.0.0.1", now=datetime(2026, 2, 2, 10, 0))

    assert not result.verdict.valid
    assert result.verdict.errors == (ErrorCode.ALREADY_CHECKED_IN,)
    assert result.event is None
    assert len(repo.items) == 1
    assert result.to_dict()["success"] is False


def test_service_allowlist_is_enforced(fixed_now):
    svc = AttendanceService(InMemoryEvents(), authorized_origins=["10.0.0.1"])

    result = svc.record_action("u1", Action.CHECK_IN, "192.168.1.9", now=fixed_now)

    assert result.verdict.errors == (ErrorCode.UNAUTHORIZED_ORIGIN,)


def test_new_day_starts_fresh(fixed_now):
    repo = InMemoryEvents()
    svc = AttendanceService(repo)
    svc.record_action("u1", Action.CHECK_IN, "10.0.0.1", now=fixed_now)

    result = svc.record_action("u1", Action.CHECK_IN, "10.0.0.1", now=datetime(2026, 2, 3, 9, 0))

    assert result.verdict.valid
    assert svc.today_status("u1", now=datetime(2026, 2, 3, 12, 0)).status == DayState.PARTIAL


def test_concurrent_checkins_record_only_one(fixed_now):
    repo = InMemoryEvents()
    svc = AttendanceService(repo)
    barrier = threading.Barrier(4)
    results = []

    def worker():
        barrier.wait()
        results.append(svc.record_action("u1", Action.CHECK_IN, "10.0.0.1", now=fixed_now))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sum(1 for r in results if r.verdict.valid) == 1
    assert len(repo.items) == 1


def test_summary_reads_actor_history(fixed_now):
    repo = InMemoryEvents()
    svc = AttendanceService(repo)
    svc.record_action("u1", Action.CHECK_IN, "10.0.0.1", now=fixed_now)
    svc.record_action("u1", Action.CHECK_OUT, "10.0.0.1", now=datetime(2026, 2, 2, 17, 0))
    svc.record_action("u2", Action.CHECK_IN, "10.0.0.1", now=fixed_now)

    summary = svc.summary("u1", now=datetime(2026, 2, 2, 18, 0))

    assert summary.statistics.total_days == 1
    assert summary.streak.current == 1
    assert summary.today.status == DayState.COMPLETE


def test_lock_pool_is_bounded_and_stable_per_actor():
    svc = AttendanceService(InMemoryEvents())

    locks = {id(svc._lock_for(f"actor-{i}")) for i in range(10_000)}

    assert len(locks) <= LOCK_STRIPES
    assert svc._lock_for("u1") is svc._lock_for("u1")


def test_actors_sharing_a_lock_stripe_stay_independent(fixed_now):
    repo = InMemoryEvents()
    svc = AttendanceService(repo)
    actors = [f"actor-{i}" for i in range(LOCK_STRIPES * 2)]

    results = [svc.record_action(a, Action.CHECK_IN, "10.0.0.1", now=fixed_now) for a in actors]

    assert all(r.verdict.valid for r in results)
    assert len(repo.items) == len(actors)
