from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.request_parsing import json_body, to_date, to_optional_int
from ..container import Container
from ..core.enums import LeaveType
from ..core.exceptions import ValidationError
from .model import LeavePatch, LeaveRequest


def leave_to_dict(l: LeaveRequest) -> dict:
    return {
        "id": l.leave_id,
        "personId": l.person_id,
        "type": l.leave_type.value,
        "startDate": l.start_date.isoformat(),
        "endDate": l.end_date.isoformat(),
        "status": l.status.value,
        "reason": l.reason,
        "createdAt": l.created_at.isoformat() if l.created_at else None,
    }


def _leave_type(value, *, required: bool):
    if value is None or value == "":
        if required:
            raise ValidationError("type is required")
        return None
    try:
        return LeaveType(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown leave type: {value}")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["POST"], endpoint="request_leave")
    def request_leave():
        data = json_body()
        person_id = to_optional_int(data.get("personId"), "personId")
        if person_id is None:
            raise ValidationError("personId is required")
        leave = container.leave_service.request_leave(
            person_id,
            leave_type=_leave_type(data.get("type"), required=True),
            start_date=to_date(data.get("startDate"), "startDate"),
            end_date=to_date(data.get("endDate"), "endDate"),
            reason=data.get("reason"),
        )
        return jsonify(leave_to_dict(leave)), 201

    @app.route("/api/leaves/pending", methods=["GET"], endpoint="list_pending_leaves")
    def list_pending_leaves():
        return jsonify([leave_to_dict(l) for l in container.leave_service.list_pending()])

    @app.route("/api/persons/<int:person_id>/leaves", methods=["GET"], endpoint="list_person_leaves")
    def list_person_leaves(person_id: int):
        start = to_date(request.args.get("from"), "from", required=False)
        end = to_date(request.args.get("to"), "to", required=False)
        if start and end:
            leaves = container.leave_service.list_for_person_in_window(person_id, start, end)
        else:
            leaves = container.leave_service.list_for_person(person_id)
        return jsonify([leave_to_dict(l) for l in leaves])

    @app.route("/api/leaves/<int:leave_id>/approve", methods=["POST"], endpoint="approve_leave")
    def approve_leave(leave_id: int):
        return jsonify(leave_to_dict(container.leave_service.approve(leave_id)))

    @app.route("/api/leaves/<int:leave_id>/reject", methods=["POST"], endpoint="reject_leave")
    def reject_leave(leave_id: int):
        note = json_body().get("note")
        return jsonify(leave_to_dict(container.leave_service.reject(leave_id, note)))

    @app.route("/api/leaves/<int:leave_id>/cancel", methods=["POST"], endpoint="cancel_leave")
    def cancel_leave(leave_id: int):
        person_id = to_optional_int(json_body().get("personId"), "personId")
        if person_id is None:
            raise ValidationError("personId is required")
        return jsonify(leave_to_dict(container.leave_service.cancel(person_id, leave_id)))

    @app.route("/api/leaves/<int:leave_id>", methods=["PATCH"], endpoint="update_leave")
    def update_leave(leave_id: int):
        data = json_body()
        patch = LeavePatch(
            leave_type=_leave_type(data.get("type"), required=False),
            start_date=to_date(data.get("startDate"), "startDate", required=False),
            end_date=to_date(data.get("endDate"), "endDate", required=False),
            reason=data.get("reason"),
        )
        person_id = to_optional_int(data.get("personId"), "personId")
        leave = container.leave_service.update_leave(leave_id, patch, person_id=person_id)
        return jsonify(leave_to_dict(leave))

    @app.route("/api/leaves/<int:leave_id>", methods=["DELETE"], endpoint="delete_leave")
    def delete_leave(leave_id: int):
        person_id = to_optional_int(request.args.get("personId"), "personId")
        container.leave_service.delete_leave(leave_id, person_id=person_id)
        return "", 204
