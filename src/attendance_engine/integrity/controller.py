from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_timestamp
from ..core.exceptions import DomainError
from ..container import Container
from ..events.model import events_from_payload


def register(app: Flask, container: Container) -> None:
    def _bad_request(e: DomainError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.route("/api/attendance/audit", methods=["POST"], endpoint="api_audit")
    def api_audit():
        data = request.get_json(silent=True) or {}
        try:
            events = events_from_payload(data.get("events"), container.boundary)
        except DomainError as e:
            return _bad_request(e)

        report = container.auditor.audit(events)
        return jsonify({"success": True, "report": report.to_dict()}), 200

    @app.route("/api/attendance/self-test", methods=["POST"], endpoint="api_self_test")
    def api_self_test():
        """Run the diagnostic suite over one actor's history.

        Today's state is derived from the supplied events, so the caller only
        sends the raw history.
        """
        data = request.get_json(silent=True) or {}
        try:
            events = events_from_payload(data.get("events"), container.boundary)
            raw_now = data.get("now")
            now = container.boundary.normalize(parse_timestamp(raw_now)) if raw_now else container.boundary.now()
        except DomainError as e:
            return _bad_request(e)

        today = container.boundary.day_of(now)
        todays = [e for e in events if container.boundary.day_of(e.timestamp) == today]
        day = container.aggregator.aggregate(todays, day=today)

        report = container.diagnostics.run_self_test(events, day, now=now)
        return jsonify({"success": True, "today_status": day.to_dict(), "validation": report.to_dict()}), 200
