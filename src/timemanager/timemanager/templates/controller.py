from __future__ import annotations

from flask import Flask, jsonify

from ..common.request_parsing import json_body, to_date, to_optional_int
from ..container import Container
from ..core.exceptions import ValidationError
from .model import ScheduleTemplate, TemplatePatch


def template_to_dict(t: ScheduleTemplate) -> dict:
    return {
        "id": t.template_id,
        "teamId": t.team_id,
        "name": t.name,
        "active": t.active,
        "weeklyPattern": t.weekly_pattern,
    }


def _pattern(value):
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValidationError("weeklyPattern must be an object")
    return value


def register(app: Flask, container: Container) -> None:
    @app.route("/api/templates", methods=["POST"], endpoint="create_template")
    def create_template():
        data = json_body()
        team_id = to_optional_int(data.get("teamId"), "teamId")
        if team_id is None:
            raise ValidationError("teamId is required")
        template = container.template_service.create_template(
            team_id,
            name=data.get("name") or "",
            active=bool(data.get("active", False)),
            weekly_pattern=_pattern(data.get("weeklyPattern")),
        )
        return jsonify(template_to_dict(template)), 201

    @app.route("/api/teams/<int:team_id>/templates", methods=["GET"], endpoint="list_team_templates")
    def list_team_templates(team_id: int):
        return jsonify([template_to_dict(t) for t in container.template_service.list_for_team(team_id)])

    @app.route("/api/templates/<int:template_id>", methods=["PATCH"], endpoint="update_template")
    def update_template(template_id: int):
        data = json_body()
        active = data.get("active")
        patch = TemplatePatch(
            name=data.get("name"),
            active=bool(active) if active is not None else None,
            weekly_pattern=_pattern(data.get("weeklyPattern")),
        )
        return jsonify(template_to_dict(container.template_service.update_template(template_id, patch)))

    @app.route("/api/templates/<int:template_id>/activate", methods=["POST"], endpoint="activate_template")
    def activate_template(template_id: int):
        return jsonify(template_to_dict(container.template_service.activate(template_id)))

    @app.route("/api/templates/<int:template_id>/deactivate", methods=["POST"], endpoint="deactivate_template")
    def deactivate_template(template_id: int):
        return jsonify(template_to_dict(container.template_service.deactivate(template_id)))

    @app.route("/api/templates/<int:template_id>", methods=["DELETE"], endpoint="delete_template")
    def delete_template(template_id: int):
        container.template_service.delete_template(template_id)
        return "", 204

    @app.route("/api/templates/<int:template_id>/generate", methods=["POST"], endpoint="generate_shifts")
    def generate_shifts(template_id: int):
        data = json_body()
        created = container.template_service.generate_shifts(
            template_id,
            to_date(data.get("from"), "from"),
            to_date(data.get("to"), "to"),
        )
        return jsonify({"created": created}), 201
