from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be blank")
    return value.strip()


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Trim a free-text field; blank becomes ``None``."""
    if value is None:
        return None
    value = value.strip()
    return value or None
