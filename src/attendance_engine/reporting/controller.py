from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from ..events.model import events_from_payload


def register(app: Flask, container: Container) -> None:
    def _bad_request(e: DomainError):
        return jsonify({"success": False, "message": str(e)}), 400

    def _parse_date(value) -> date:
        try:
            return parse_iso_date(str(value))
        except ValueError:
            raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")

    def _today(data) -> date:
        raw = data.get("today")
        return _parse_date(raw) if raw else container.boundary.today()

    @app.route("/api/attendance/streak", methods=["POST"], endpoint="api_streak")
    def api_streak():
        data = request.get_json(silent=True) or {}
        try:
            raw_dates = data.get("complete_dates")
            if not isinstance(raw_dates, list):
                raise ValidationError("complete_dates must be a list")
            dates = [_parse_date(d) for d in raw_dates]
            today = _today(data)
        except DomainError as e:
            return _bad_request(e)

        streak = container.streaks.calculate(dates, today=today)
        return jsonify({"success": True, "streak": streak.to_dict()}), 200

    @app.route("/api/attendance/summary", methods=["POST"], endpoint="api_summary")
    def api_summary():
        data = request.get_json(silent=True) or {}
        try:
            events = events_from_payload(data.get("events"), container.boundary)
            today = _today(data)
            summary = container.reporter.build_summary(events, today=today, actor_id=data.get("actor_id"))
        except DomainError as e:
            return _bad_request(e)

        return jsonify({"success": True, "summary": summary.to_dict()}), 200
