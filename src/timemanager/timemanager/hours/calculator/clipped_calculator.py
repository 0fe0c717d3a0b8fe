from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ...core.constants import MINUTES_PER_HOUR
from ..model import HoursSummary, SessionWithPauses
from .base import HoursCalculator


def _minutes(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60.0


class ClippedHoursCalculator(HoursCalculator):
    """Clip every session to the window and every pause to its clipped session.

    Per session: gross = clipped length, pause = clipped pauses (at most gross),
    net = max(0, gross - pause). Minutes are summed in ``clock_in`` order and
    turned into hours once, at the end.

    A session without clock-out runs to ``open_end`` when given (capped by
    ``end``), otherwise to ``end``.
    """

    def compute(
        self,
        rows: Iterable[SessionWithPauses],
        start: datetime,
        end: datetime,
        *,
        open_end: Optional[datetime] = None,
    ) -> HoursSummary:
        open_upper = min(open_end, end) if open_end is not None else end

        gross_total = 0.0
        pause_total = 0.0
        net_total = 0.0

        ordered = sorted(rows, key=lambda r: (r.session.clock_in, r.session.session_id))
        for row in ordered:
            upper = open_upper if row.session.clock_out is None else end
            clipped = row.session.interval.clip(start, upper)
            if clipped is None:
                continue
            s_start, s_end = clipped
            gross = _minutes(s_start, s_end)

            paused = 0.0
            for pause in sorted(row.pauses, key=lambda p: (p.start_at, p.pause_id)):
                window = pause.interval.clip(s_start, s_end)
                if window is not None:
                    paused += _minutes(*window)
            paused = min(paused, gross)

            gross_total += gross
            pause_total += paused
            net_total += max(0.0, gross - paused)

        return HoursSummary(
            gross_hours=gross_total / MINUTES_PER_HOUR,
            pause_hours=pause_total / MINUTES_PER_HOUR,
            net_hours=net_total / MINUTES_PER_HOUR,
        )
