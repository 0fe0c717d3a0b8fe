from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..intervals.model import Interval


@dataclass(frozen=True)
class ClockSession:
    """Domain entity: one clock-in/clock-out work period."""

    session_id: int
    person_id: int
    clock_in: datetime
    clock_out: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    @property
    def interval(self) -> Interval:
        return Interval(self.clock_in, self.clock_out)
