from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .clocks.controller import register as register_clocks
from .common.datetime_utils import parse_hhmm
from .container import Container, build_container
from .core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .hours.controller import register as register_hours
from .leaves.controller import register as register_leaves
from .pauses.controller import register as register_pauses
from .reports.controller import register as register_reports
from .shifts.controller import register as register_shifts
from .templates.controller import register as register_templates
from .timesheets.controller import register as register_timesheets

logger = logging.getLogger(__name__)

_STATUS = (
    (NotFoundError, 404),
    (ConflictError, 409),
    (ValidationError, 400),
)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for kind, status in _STATUS:
            if isinstance(e, kind):
                logger.debug("%s -> %s: %s", type(e).__name__, status, e)
                return jsonify({"error": str(e)}), status
        return jsonify({"error": str(e)}), 400


def register_routes(app: Flask, container: Container) -> None:
    register_clocks(app, container)
    register_pauses(app, container)
    register_leaves(app, container)
    register_shifts(app, container)
    register_templates(app, container)
    register_hours(app, container)
    register_reports(app, container)
    register_timesheets(app, container)


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            timezone=getattr(settings, "TIMEZONE", "Europe/Paris"),
            late_threshold=parse_hhmm(getattr(settings, "LATE_THRESHOLD", "09:05")),
            lock_timeout=int(getattr(settings, "LOCK_TIMEOUT_SECONDS", 10)),
        )

    register_error_handlers(app)
    register_routes(app, container)
    return app
