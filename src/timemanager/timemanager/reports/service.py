from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfo

from ..clocks.repository import ClockRepository
from ..common.datetime_utils import month_window, now_in_zone, week_window
from ..core.constants import DEFAULT_LATE_THRESHOLD
from ..hours.calculator.base import HoursCalculator
from ..hours.calculator.clipped_calculator import ClippedHoursCalculator
from ..hours.service import attach_pauses
from ..pauses.repository import PauseRepository
from ..people.repository import TeamRepository
from .model import Report, TeamAverage

logger = logging.getLogger(__name__)


class ReportService:
    """Weekly per-team averages and the monthly lateness rate.

    Read-only; may run alongside writers and see a slightly stale snapshot.
    """

    def __init__(
        self,
        clocks: ClockRepository,
        pauses: PauseRepository,
        teams: TeamRepository,
        *,
        calculator: Optional[HoursCalculator] = None,
        late_threshold: time = DEFAULT_LATE_THRESHOLD,
    ):
        self._clocks = clocks
        self._pauses = pauses
        self._teams = teams
        self._calculator = calculator or ClippedHoursCalculator()
        self._late_threshold = late_threshold

    def weekly_team_averages(self, now: datetime) -> list[TeamAverage]:
        start, end = week_window(now)

        rows_by_person = defaultdict(list)
        for row in attach_pauses(self._clocks.list_between(start, end), self._pauses):
            rows_by_person[row.session.person_id].append(row)

        net_cache: dict[int, float] = {}

        def net_hours(person_id: int) -> float:
            if person_id not in net_cache:
                summary = self._calculator.compute(
                    rows_by_person.get(person_id, []), start, end, open_end=now
                )
                net_cache[person_id] = summary.net_hours
            return net_cache[person_id]

        averages = []
        for team in self._teams.list_with_members():
            if not team.member_ids:
                continue
            total = sum(net_hours(m) for m in team.member_ids)
            averages.append(
                TeamAverage(team_id=team.team_id, team_name=team.name, avg_hours=total / len(team.member_ids))
            )

        averages.sort(key=lambda t: (t.team_name, t.team_id))
        return averages

    def monthly_lateness_rate(self, now: datetime, threshold: Optional[time] = None) -> float:
        if threshold is None:
            threshold = self._late_threshold
        start, end = month_window(now)

        first_start: dict[tuple[int, date], datetime] = {}
        for session in self._clocks.list_between(start, end):
            if not start <= session.clock_in < end:
                continue
            key = (session.person_id, session.clock_in.date())
            if key not in first_start or session.clock_in < first_start[key]:
                first_start[key] = session.clock_in

        if not first_start:
            return 0.0
        late = sum(1 for t in first_start.values() if t.time() > threshold)
        return late / len(first_start)

    def build_report(
        self,
        zone: str | ZoneInfo,
        *,
        now: Optional[datetime] = None,
        late_threshold: Optional[time] = None,
    ) -> Report:
        current = now or now_in_zone(zone)
        report = Report(
            team_avg_hours_week=self.weekly_team_averages(current),
            lateness_rate_month=self.monthly_lateness_rate(current, late_threshold),
        )
        logger.debug("Report for %s: %s team(s)", current.date(), len(report.team_avg_hours_week))
        return report
