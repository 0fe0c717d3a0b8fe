from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.request_parsing import json_body, to_datetime, to_optional_int
from ..container import Container
from ..core.exceptions import ValidationError
from .model import ShiftPatch, WorkShift


def shift_to_dict(s: WorkShift) -> dict:
    return {
        "id": s.shift_id,
        "teamId": s.team_id,
        "personId": s.person_id,
        "startAt": s.start_at.isoformat(),
        "endAt": s.end_at.isoformat(),
        "note": s.note,
    }


def register(app: Flask, container: Container) -> None:
    def _window():
        start = to_datetime(request.args.get("from"), "from", required=True)
        end = to_datetime(request.args.get("to"), "to", required=True)
        return start, end

    @app.route("/api/shifts", methods=["POST"], endpoint="create_shift")
    def create_shift():
        data = json_body()
        team_id = to_optional_int(data.get("teamId"), "teamId")
        if team_id is None:
            raise ValidationError("teamId is required")
        shift = container.shift_service.create_shift(
            team_id,
            start_at=to_datetime(data.get("startAt"), "startAt", required=True),
            end_at=to_datetime(data.get("endAt"), "endAt", required=True),
            person_id=to_optional_int(data.get("personId"), "personId"),
            note=data.get("note"),
        )
        return jsonify(shift_to_dict(shift)), 201

    @app.route("/api/shifts/<int:shift_id>", methods=["PATCH"], endpoint="update_shift")
    def update_shift(shift_id: int):
        data = json_body()
        patch = ShiftPatch(
            person_id=to_optional_int(data.get("personId"), "personId"),
            start_at=to_datetime(data.get("startAt"), "startAt"),
            end_at=to_datetime(data.get("endAt"), "endAt"),
            note=data.get("note"),
        )
        return jsonify(shift_to_dict(container.shift_service.update_shift(shift_id, patch)))

    @app.route("/api/shifts/<int:shift_id>/assign/<int:person_id>", methods=["POST"], endpoint="assign_shift")
    def assign_shift(shift_id: int, person_id: int):
        return jsonify(shift_to_dict(container.shift_service.assign_shift(shift_id, person_id)))

    @app.route("/api/shifts/<int:shift_id>/unassign", methods=["POST"], endpoint="unassign_shift")
    def unassign_shift(shift_id: int):
        return jsonify(shift_to_dict(container.shift_service.unassign_shift(shift_id)))

    @app.route("/api/shifts/<int:shift_id>", methods=["DELETE"], endpoint="delete_shift")
    def delete_shift(shift_id: int):
        container.shift_service.delete_shift(shift_id)
        return "", 204

    @app.route("/api/teams/<int:team_id>/shifts", methods=["GET"], endpoint="list_team_shifts")
    def list_team_shifts(team_id: int):
        start, end = _window()
        shifts = container.shift_service.list_shifts_for_team(team_id, start, end)
        return jsonify([shift_to_dict(s) for s in shifts])

    @app.route("/api/persons/<int:person_id>/shifts", methods=["GET"], endpoint="list_person_shifts")
    def list_person_shifts(person_id: int):
        start, end = _window()
        shifts = container.shift_service.list_shifts_for_person(person_id, start, end)
        return jsonify([shift_to_dict(s) for s in shifts])
