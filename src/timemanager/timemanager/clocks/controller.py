from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.request_parsing import json_body, to_datetime
from ..container import Container
from .model import ClockSession


def session_to_dict(s: ClockSession) -> dict:
    return {
        "id": s.session_id,
        "personId": s.person_id,
        "clockIn": s.clock_in.isoformat(),
        "clockOut": s.clock_out.isoformat() if s.clock_out else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/clocks/<int:person_id>/in", methods=["POST"], endpoint="clock_in")
    def clock_in(person_id: int):
        at = to_datetime(json_body().get("at"), "at")
        session = container.clock_service.clock_in(person_id, at=at)
        return jsonify(session_to_dict(session)), 201

    @app.route("/api/clocks/<int:person_id>/out", methods=["POST"], endpoint="clock_out")
    def clock_out(person_id: int):
        at = to_datetime(json_body().get("at"), "at")
        session = container.clock_service.clock_out(person_id, at=at)
        return jsonify(session_to_dict(session))

    @app.route("/api/clocks/<int:person_id>/open", methods=["GET"], endpoint="open_session")
    def open_session(person_id: int):
        session = container.clock_service.open_session(person_id)
        return jsonify(session_to_dict(session) if session else None)

    @app.route("/api/clocks/<int:person_id>", methods=["GET"], endpoint="list_sessions")
    def list_sessions(person_id: int):
        start = to_datetime(request.args.get("from"), "from", required=True)
        end = to_datetime(request.args.get("to"), "to", required=True)
        sessions = container.clock_service.list_sessions(person_id, start, end)
        return jsonify([session_to_dict(s) for s in sessions])
