from __future__ import annotations

import pytest

from attendance_engine.main import create_app

ORIGIN = "10.0.0.1"


@pytest.fixture
def client():
    app = create_app("attendance_engine.config.testing")
    return app.test_client()


def _event(action, ts, actor_id="u1"):
    return {"actor_id": actor_id, "action": action, "timestamp": ts, "origin_address": ORIGIN}


def test_health(client):
    res = client.get("/api/health")

    assert res.status_code == 200
    assert res.get_json() == {"status": "ok"}


def test_validate_checkout_from_events(client):
    res = client.post(
        "/api/attendance/validate",
        json={
            "action": "check-out",
            "origin_address": ORIGIN,
            "timestamp": "2026-02-02T17:00:00",
            "events": [_event("check-in", "2026-02-02T09:00:00"), _event("check-in", "2026-02-01T09:00:00")],
        },
    )

    body = res.get_json()
    assert res.status_code == 200
    assert body["validation"]["valid"] is True
    assert body["validation"]["expected_status"] == "complete"
    assert body["validation"]["projected_hours_worked"] == 8.0
    assert body["current_state"]["status"] == "partial"


def test_validate_uses_configured_allowlist(client):
    res = client.post(
        "/api/attendance/validate",
        json={"action": "check-in", "origin_address": "192.168.1.9", "timestamp": "2026-02-02T09:00:00"},
    )

    assert res.get_json()["validation"]["errors"] == ["unauthorized-origin"]


def test_validate_from_day_status(client):
    res = client.post(
        "/api/attendance/validate",
        json={
            "action": "checkin",
            "originAddress": ORIGIN,
            "timestamp": "2026-02-02T18:00:00",
            "dayStatus": {"checkInTime": "2026-02-02T09:00:00", "checkOutTime": "2026-02-02T17:00:00"},
        },
    )

    assert res.get_json()["validation"]["errors"] == ["already-checked-in"]


def test_validate_bad_timestamp_is_400(client):
    res = client.post("/api/attendance/validate", json={"action": "check-in", "timestamp": "soon"})

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_day_status_lists_each_actor_day(client):
    res = client.post(
        "/api/attendance/day-status",
        json={
            "events": [
                _event("check-in", "2026-02-02T09:00:00"),
                _event("check-out", "2026-02-02T17:00:00"),
                _event("check-in", "2026-02-02T09:30:00", actor_id="u2"),
            ]
        },
    )

    days = res.get_json()["days"]
    assert [(d["actor_id"], d["status"]) for d in days] == [("u1", "complete"), ("u2", "partial")]


def test_day_status_rejects_non_list(client):
    res = client.post("/api/attendance/day-status", json={"events": "nope"})

    assert res.status_code == 400


def test_audit_reports_lone_checkout(client):
    res = client.post("/api/attendance/audit", json={"events": [_event("check-out", "2026-02-03T17:00:00")]})

    report = res.get_json()["report"]
    assert report["valid"] is False
    assert [i["type"] for i in report["issues"]] == ["sequence-error", "unmatched-check-out"]


def test_self_test_derives_today(client):
    res = client.post(
        "/api/attendance/self-test",
        json={"events": [_event("check-in", "2026-02-02T09:00:00")], "now": "2026-02-02T12:00:00"},
    )

    body = res.get_json()
    assert body["today_status"]["status"] == "partial"
    assert body["validation"]["overall"]["success"] is True
    assert body["validation"]["recommendations"][0]["type"] == "incomplete-day"


def test_streak_endpoint(client):
    res = client.post(
        "/api/attendance/streak",
        json={"complete_dates": ["2026-02-04", "2026-02-03", "2026-02-01"], "today": "2026-02-04"},
    )

    assert res.get_json()["streak"] == {"current": 2, "longest": 2}


def test_streak_endpoint_rejects_bad_date(client):
    res = client.post("/api/attendance/streak", json={"complete_dates": ["Feb 4"], "today": "2026-02-04"})

    assert res.status_code == 400


def test_summary_endpoint_requires_one_actor(client):
    events = [_event("check-in", "2026-02-02T09:00:00"), _event("check-in", "2026-02-02T09:00:00", actor_id="u2")]

    mixed = client.post("/api/attendance/summary", json={"events": events, "today": "2026-02-02"})
    single = client.post("/api/attendance/summary", json={"events": events, "today": "2026-02-02", "actor_id": "u2"})

    assert mixed.status_code == 400
    assert single.get_json()["summary"]["today"]["status"] == "partial"


def test_validate_utc_day_status_without_timestamp(client):
    res = client.post(
        "/api/attendance/validate",
        json={"action": "check-out", "origin_address": ORIGIN, "dayStatus": {"checkInTime": "2020-02-02T09:00:00Z"}},
    )

    body = res.get_json()
    assert res.status_code == 200
    assert body["validation"]["valid"] is True
    assert body["validation"]["warnings"] == ["long-session"]


def test_validate_with_utc_timestamps(client):
    res = client.post(
        "/api/attendance/validate",
        json={
            "action": "check-out",
            "origin_address": ORIGIN,
            "timestamp": "2026-02-02T10:30:00Z",
            "events": [_event("check-in", "2026-02-02T10:00:00Z")],
        },
    )

    body = res.get_json()
    assert res.status_code == 200
    assert body["validation"]["valid"] is True
    assert body["validation"]["projected_hours_worked"] == 0.5


def test_audit_mixed_naive_and_utc_events(client):
    res = client.post(
        "/api/attendance/audit",
        json={"events": [_event("check-in", "2026-02-02T09:00:00"), _event("check-out", "2026-02-02T17:00:00Z")]},
    )

    assert res.status_code == 200
    assert res.get_json()["report"]["statistics"]["total_days"] >= 1


def test_validate_early_checkout_record_matches_events(client):
    day_status = {"checkInTime": "2026-02-02T09:00:00", "checkOutTime": "2026-02-02T08:00:00"}
    events = [_event("check-out", "2026-02-02T08:00:00"), _event("check-in", "2026-02-02T09:00:00")]
    base = {"action": "check-out", "origin_address": ORIGIN, "timestamp": "2026-02-02T17:00:00"}

    via_record = client.post("/api/attendance/validate", json={**base, "dayStatus": day_status}).get_json()
    via_events = client.post("/api/attendance/validate", json={**base, "events": events}).get_json()

    assert via_record["validation"] == via_events["validation"]
    assert via_record["validation"]["valid"] is True
