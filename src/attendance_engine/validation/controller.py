from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_timestamp
from ..core.exceptions import DomainError
from ..container import Container
from ..events.model import DayStatus, events_from_payload


def register(app: Flask, container: Container) -> None:
    def _bad_request(e: DomainError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.route("/api/attendance/validate", methods=["POST"], endpoint="api_validate_action")
    def api_validate_action():
        """Preview whether an action would be accepted, before the caller stores it.

        The day state comes either from ``events`` (raw events of that day) or
        from a ``day_status`` object.
        """
        data = request.get_json(silent=True) or {}
        try:
            raw_ts = data.get("timestamp")
            boundary = container.boundary
            timestamp = boundary.normalize(parse_timestamp(raw_ts)) if raw_ts else boundary.now()

            if data.get("events") is not None:
                events = events_from_payload(data.get("events"), boundary)
                day = boundary.day_of(timestamp)
                same_day = [e for e in events if boundary.day_of(e.timestamp) == day]
                day_status = container.aggregator.aggregate(same_day, day=day)
            else:
                day_status = DayStatus.from_dict(data.get("day_status") or data.get("dayStatus"), boundary)

            origins = [*container.authorized_origins, *(data.get("authorized_origins") or [])]
            verdict = container.validator.validate(
                data.get("action"),
                day_status,
                data.get("origin_address") or data.get("originAddress"),
                timestamp=timestamp,
                authorized_origins=origins,
            )
        except DomainError as e:
            return _bad_request(e)

        return jsonify({"success": True, "validation": verdict.to_dict(), "current_state": day_status.to_dict()}), 200

    @app.route("/api/attendance/day-status", methods=["POST"], endpoint="api_day_status")
    def api_day_status():
        data = request.get_json(silent=True) or {}
        try:
            events = events_from_payload(data.get("events"), container.boundary)
            statuses = container.aggregator.aggregate_all(events)
        except DomainError as e:
            return _bad_request(e)

        return jsonify(
            {
                "success": True,
                "days": [{"actor_id": actor, **status.to_dict()} for (actor, _), status in statuses.items()],
            }
        ), 200
