from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.validators import blank_to_none
from ..intervals.model import Interval


@dataclass(frozen=True)
class Pause:
    """Domain entity: a break inside a clock session, excluded from worked time."""

    pause_id: int
    session_id: int
    start_at: datetime
    end_at: Optional[datetime] = None
    note: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.end_at is None

    @property
    def interval(self) -> Interval:
        return Interval(self.start_at, self.end_at)


@dataclass(frozen=True)
class PausePatch:
    """Fields left as ``None`` keep their current value."""

    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None
    note: Optional[str] = None

    @property
    def touches_window(self) -> bool:
        return self.start_at is not None or self.end_at is not None


def apply_pause_patch(pause: Pause, patch: PausePatch) -> Pause:
    merged = pause
    if patch.start_at is not None:
        merged = replace(merged, start_at=patch.start_at)
    if patch.end_at is not None:
        merged = replace(merged, end_at=patch.end_at)
    if patch.note is not None:
        # A blank note clears it.
        merged = replace(merged, note=blank_to_none(patch.note))
    return merged
