from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..clocks.model import ClockSession
from ..pauses.model import Pause


@dataclass(frozen=True)
class SessionWithPauses:
    """A session and the pauses read together with it."""

    session: ClockSession
    pauses: Sequence[Pause] = field(default_factory=tuple)


@dataclass(frozen=True)
class HoursSummary:
    gross_hours: float
    pause_hours: float
    net_hours: float

    def as_dict(self) -> dict:
        return {
            "grossHours": self.gross_hours,
            "pauseHours": self.pause_hours,
            "netHours": self.net_hours,
        }

