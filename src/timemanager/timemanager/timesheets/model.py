from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class PlannedInterval:
    start_at: datetime
    end_at: datetime
    note: Optional[str] = None


@dataclass(frozen=True)
class TimesheetDay:
    """One day: planned shifts, net hours actually worked and the leave on that day."""

    day: date
    planned: list[PlannedInterval] = field(default_factory=list)
    actual_hours: float = 0.0
    leave: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "planned": [
                {"startAt": p.start_at.isoformat(), "endAt": p.end_at.isoformat(), "note": p.note}
                for p in self.planned
            ],
            "actualHours": self.actual_hours,
            "leave": self.leave,
        }


@dataclass(frozen=True)
class PersonTimesheet:
    person_id: int
    person_name: str
    from_date: date
    to_date: date
    days: list[TimesheetDay] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "personId": self.person_id,
            "personName": self.person_name,
            "from": self.from_date.isoformat(),
            "to": self.to_date.isoformat(),
            "days": [d.as_dict() for d in self.days],
        }


@dataclass(frozen=True)
class TeamTimesheet:
    team_id: int
    team_name: str
    from_date: date
    to_date: date
    people: list[PersonTimesheet] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "teamId": self.team_id,
            "teamName": self.team_name,
            "from": self.from_date.isoformat(),
            "to": self.to_date.isoformat(),
            "people": [p.as_dict() for p in self.people],
        }
