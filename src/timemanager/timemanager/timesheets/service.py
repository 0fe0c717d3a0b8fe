from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import iter_days, start_of_day
from ..core.enums import LeaveStatus
from ..core.exceptions import ConflictError, NotFoundError
from ..hours.service import HoursService
from ..intervals.model import Interval
from ..intervals.overlap import overlaps
from ..leaves.model import LeaveRequest
from ..leaves.repository import LeaveRepository
from ..people.repository import PersonRepository, TeamRepository
from ..shifts.repository import ShiftRepository
from .model import PersonTimesheet, PlannedInterval, TeamTimesheet, TimesheetDay


def _leave_label(leaves: list[LeaveRequest], day: date) -> Optional[str]:
    candidates = [l for l in leaves if l.blocks_calendar and l.covers(day)]
    if not candidates:
        return None
    candidates.sort(key=lambda l: (l.status != LeaveStatus.APPROVED, l.start_date, l.leave_id))
    return candidates[0].label


class TimesheetService:
    """Planned versus actual, day by day."""

    def __init__(
        self,
        hours: HoursService,
        shifts: ShiftRepository,
        leaves: LeaveRepository,
        persons: PersonRepository,
        teams: TeamRepository,
    ):
        self._hours = hours
        self._shifts = shifts
        self._leaves = leaves
        self._persons = persons
        self._teams = teams

    @staticmethod
    def _check_window(from_date: date, to_date: date) -> None:
        if from_date is None or to_date is None or from_date > to_date:
            raise ConflictError("Invalid date window")

    def timesheet_for_person(self, person_id: int, from_date: date, to_date: date) -> PersonTimesheet:
        self._check_window(from_date, to_date)
        person = self._persons.get_by_id(int(person_id))
        if not person:
            raise NotFoundError(f"User not found: {person_id}")

        win_start = start_of_day(from_date)
        win_end = start_of_day(to_date + timedelta(days=1))

        planned = self._shifts.list_for_person_between(person.person_id, win_start, win_end)
        rows = self._hours.load(person.person_id, win_start, win_end)
        leaves = list(self._leaves.list_for_person_in_window(person.person_id, from_date, to_date))

        days = []
        for day in iter_days(from_date, to_date):
            day_start = start_of_day(day)
            day_end = day_start + timedelta(days=1)
            day_window = Interval(day_start, day_end)

            worked = self._hours.calculator.compute(rows, day_start, day_end)
            days.append(
                TimesheetDay(
                    day=day,
                    planned=[
                        PlannedInterval(start_at=s.start_at, end_at=s.end_at, note=s.note)
                        for s in planned
                        if overlaps(s.interval, day_window)
                    ],
                    actual_hours=round(worked.net_hours, 2),
                    leave=_leave_label(leaves, day),
                )
            )

        return PersonTimesheet(
            person_id=person.person_id,
            person_name=person.full_name,
            from_date=from_date,
            to_date=to_date,
            days=days,
        )

    def timesheet_for_team(self, team_id: int, from_date: date, to_date: date) -> TeamTimesheet:
        """One timesheet per employee assigned to a team shift in the window."""
        self._check_window(from_date, to_date)
        team = self._teams.get_by_id(int(team_id))
        if not team:
            raise NotFoundError(f"Team not found: {team_id}")

        shifts = self._shifts.list_for_team_between(
            team.team_id, start_of_day(from_date), start_of_day(to_date + timedelta(days=1))
        )
        assigned = sorted({s.person_id for s in shifts if s.person_id is not None})

        return TeamTimesheet(
            team_id=team.team_id,
            team_name=team.name,
            from_date=from_date,
            to_date=to_date,
            people=[self.timesheet_for_person(p, from_date, to_date) for p in assigned],
        )
