from __future__ import annotations

from flask import Flask, jsonify

from ..common.request_parsing import json_body, to_datetime
from ..container import Container
from .model import Pause, PausePatch


def pause_to_dict(p: Pause) -> dict:
    return {
        "id": p.pause_id,
        "sessionId": p.session_id,
        "startAt": p.start_at.isoformat(),
        "endAt": p.end_at.isoformat() if p.end_at else None,
        "note": p.note,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sessions/<int:session_id>/pauses", methods=["GET"], endpoint="list_pauses")
    def list_pauses(session_id: int):
        return jsonify([pause_to_dict(p) for p in container.pause_service.list_pauses(session_id)])

    @app.route("/api/sessions/<int:session_id>/pauses", methods=["POST"], endpoint="add_pause")
    def add_pause(session_id: int):
        data = json_body()
        pause = container.pause_service.add_pause(
            session_id,
            start_at=to_datetime(data.get("startAt"), "startAt"),
            end_at=to_datetime(data.get("endAt"), "endAt"),
            note=data.get("note"),
        )
        return jsonify(pause_to_dict(pause)), 201

    @app.route("/api/pauses/<int:pause_id>", methods=["PATCH"], endpoint="update_pause")
    def update_pause(pause_id: int):
        data = json_body()
        patch = PausePatch(
            start_at=to_datetime(data.get("startAt"), "startAt"),
            end_at=to_datetime(data.get("endAt"), "endAt"),
            note=data.get("note"),
        )
        return jsonify(pause_to_dict(container.pause_service.update_pause(pause_id, patch)))

    @app.route("/api/pauses/<int:pause_id>", methods=["DELETE"], endpoint="delete_pause")
    def delete_pause(pause_id: int):
        container.pause_service.delete_pause(pause_id)
        return "", 204
