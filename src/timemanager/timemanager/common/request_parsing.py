"""Input parsing for the JSON endpoints.

Malformed input becomes ValidationError (HTTP 400); services only ever see
parsed values.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from flask import request

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_iso_datetime


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def to_datetime(value: Any, field_name: str, *, required: bool = False) -> Optional[datetime]:
    try:
        parsed = parse_iso_datetime(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not a valid ISO timestamp")
    if parsed is not None and parsed.tzinfo is not None:
        # Stored timestamps are naive local wall-clock time.
        raise ValidationError(f"{field_name} must be a local timestamp without UTC offset")
    if parsed is None and required:
        raise ValidationError(f"{field_name} is required")
    return parsed


def to_date(value: Any, field_name: str, *, required: bool = True) -> Optional[date]:
    if value is None or not str(value).strip():
        if required:
            raise ValidationError(f"{field_name} is required")
        return None
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")


def to_optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
