from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.request_parsing import to_datetime
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/hours/<int:person_id>", methods=["GET"], endpoint="compute_hours")
    def compute_hours(person_id: int):
        start = to_datetime(request.args.get("from"), "from", required=True)
        end = to_datetime(request.args.get("to"), "to", required=True)
        summary = container.hours_service.compute_hours(person_id, start, end)
        return jsonify(summary.as_dict())
