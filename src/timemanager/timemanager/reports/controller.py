from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_hhmm
from ..common.request_parsing import to_datetime
from ..container import Container
from ..core.exceptions import ValidationError


def _zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown time zone: {name}")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports", methods=["GET"], endpoint="build_report")
    def build_report():
        zone = _zone(request.args.get("zone") or container.timezone)
        now = to_datetime(request.args.get("now"), "now")

        threshold = None
        if request.args.get("lateAfter"):
            try:
                threshold = parse_hhmm(request.args["lateAfter"])
            except ValueError:
                raise ValidationError("lateAfter must be HH:MM")

        report = container.report_service.build_report(zone, now=now, late_threshold=threshold)
        return jsonify(report.as_dict())
