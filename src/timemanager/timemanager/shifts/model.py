from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..intervals.model import Interval


@dataclass(frozen=True)
class WorkShift:
    """Domain entity: a planned shift of a team, optionally assigned to a person."""

    shift_id: int
    team_id: int
    start_at: datetime
    end_at: datetime
    person_id: Optional[int] = None
    note: Optional[str] = None

    @property
    def interval(self) -> Interval:
        return Interval(self.start_at, self.end_at)


@dataclass(frozen=True)
class ShiftPatch:
    """Fields left as ``None`` keep their current value; use unassign to clear the person."""

    person_id: Optional[int] = None
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None
    note: Optional[str] = None


def apply_shift_patch(shift: WorkShift, patch: ShiftPatch) -> WorkShift:
    merged = shift
    if patch.person_id is not None:
        merged = replace(merged, person_id=int(patch.person_id))
    if patch.start_at is not None:
        merged = replace(merged, start_at=patch.start_at)
    if patch.end_at is not None:
        merged = replace(merged, end_at=patch.end_at)
    if patch.note is not None:
        merged = replace(merged, note=patch.note.strip() or None)
    return merged
