from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.request_parsing import to_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _window():
        return to_date(request.args.get("from"), "from"), to_date(request.args.get("to"), "to")

    @app.route("/api/timesheets/persons/<int:person_id>", methods=["GET"], endpoint="person_timesheet")
    def person_timesheet(person_id: int):
        start, end = _window()
        return jsonify(container.timesheet_service.timesheet_for_person(person_id, start, end).as_dict())

    @app.route("/api/timesheets/teams/<int:team_id>", methods=["GET"], endpoint="team_timesheet")
    def team_timesheet(team_id: int):
        start, end = _window()
        return jsonify(container.timesheet_service.timesheet_for_team(team_id, start, end).as_dict())
