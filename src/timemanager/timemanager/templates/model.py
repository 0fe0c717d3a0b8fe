from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import time
from typing import Optional

from ..common.datetime_utils import parse_hhmm
from ..core.constants import DEFAULT_WEEKLY_PATTERN, WEEKDAY_KEYS
from ..core.exceptions import ValidationError

WeeklyPattern = dict[str, list[list[str]]]


@dataclass(frozen=True)
class ScheduleTemplate:
    """A team's weekly plan.

    ``weekly_pattern`` maps ``mon``..``sun`` to ``[["HH:MM", "HH:MM"], ...]``
    slots. An empty pattern means the default Monday-to-Friday 09:00-17:00.
    """

    template_id: int
    team_id: int
    name: str
    active: bool = False
    weekly_pattern: WeeklyPattern = field(default_factory=dict)


@dataclass(frozen=True)
class TemplatePatch:
    name: Optional[str] = None
    active: Optional[bool] = None
    weekly_pattern: Optional[WeeklyPattern] = None


def apply_template_patch(template: ScheduleTemplate, patch: TemplatePatch) -> ScheduleTemplate:
    merged = template
    if patch.name is not None:
        merged = replace(merged, name=patch.name.strip())
    if patch.active is not None:
        merged = replace(merged, active=bool(patch.active))
    if patch.weekly_pattern is not None:
        merged = replace(merged, weekly_pattern=patch.weekly_pattern)
    return merged


def pattern_slots(pattern: Optional[WeeklyPattern]) -> dict[int, list[tuple[time, time]]]:
    """Weekday index (Monday is 0) to ordered ``(start, end)`` slots.

    Raises ValidationError for unknown weekdays or malformed slots.
    """
    source = pattern or DEFAULT_WEEKLY_PATTERN
    slots: dict[int, list[tuple[time, time]]] = {}
    for key, day_slots in source.items():
        day = str(key).strip().lower()
        if day not in WEEKDAY_KEYS:
            raise ValidationError(f"Unknown weekday in pattern: {key}")

        parsed = []
        for slot in day_slots or []:
            if len(slot) != 2:
                raise ValidationError(f"Invalid slot for {day}: {slot}")
            try:
                start, end = parse_hhmm(slot[0]), parse_hhmm(slot[1])
            except (TypeError, ValueError, AttributeError):
                raise ValidationError(f"Invalid slot for {day}: {slot}")
            if not start < end:
                raise ValidationError(f"Invalid slot for {day}: {slot}")
            parsed.append((start, end))

        slots[WEEKDAY_KEYS.index(day)] = sorted(parsed)
    return slots
