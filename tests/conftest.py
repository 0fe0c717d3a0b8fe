from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from src.timemanager.timemanager.clocks.model import ClockSession
from src.timemanager.timemanager.common.locks import LocalTransactionManager
from src.timemanager.timemanager.container import build_services
from src.timemanager.timemanager.core.enums import LeaveStatus
from src.timemanager.timemanager.leaves.model import LeaveRequest
from src.timemanager.timemanager.pauses.model import Pause
from src.timemanager.timemanager.people.model import Person, Team
from src.timemanager.timemanager.shifts.model import WorkShift
from src.timemanager.timemanager.templates.model import ScheduleTemplate


class FakePersons:
    def __init__(self, *persons: Person):
        self._persons = {p.person_id: p for p in persons}

    def get_by_id(self, person_id):
        return self._persons.get(int(person_id))


class FakeTeams:
    def __init__(self, *teams: Team):
        self._teams = {t.team_id: t for t in teams}

    def get_by_id(self, team_id):
        return self._teams.get(int(team_id))

    def list_with_members(self):
        return sorted(self._teams.values(), key=lambda t: t.team_id)


class FakeClocks:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, ClockSession] = {}

    def add(self, person_id, clock_in, clock_out=None) -> ClockSession:
        sid = self._next_id
        self._next_id += 1
        self.rows[sid] = ClockSession(session_id=sid, person_id=person_id, clock_in=clock_in, clock_out=clock_out)
        return self.rows[sid]

    def get_by_id(self, session_id):
        return self.rows.get(int(session_id))

    def get_latest_for_person(self, person_id):
        mine = [s for s in self.rows.values() if s.person_id == int(person_id)]
        if not mine:
            return None
        return max(mine, key=lambda s: (s.clock_in, s.session_id))

    def _between(self, sessions, start, end):
        hits = [s for s in sessions if s.clock_in < end and (s.clock_out is None or s.clock_out > start)]
        return sorted(hits, key=lambda s: (s.clock_in, s.session_id))

    def list_for_person_between(self, person_id, start, end):
        return self._between([s for s in self.rows.values() if s.person_id == int(person_id)], start, end)

    def list_between(self, start, end):
        return self._between(self.rows.values(), start, end)

    def create(self, *, person_id, clock_in):
        return self.add(person_id, clock_in).session_id

    def close(self, *, session_id, clock_out):
        s = self.rows.get(int(session_id))
        if not s or s.clock_out is not None:
            return False
        self.rows[s.session_id] = replace(s, clock_out=clock_out)
        return True


class FakePauses:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Pause] = {}

    def add(self, session_id, start_at, end_at=None, note=None) -> Pause:
        return self.get_by_id(self.create(session_id=session_id, start_at=start_at, end_at=end_at, note=note))

    def get_by_id(self, pause_id):
        return self.rows.get(int(pause_id))

    def list_for_session(self, session_id):
        return sorted(
            [p for p in self.rows.values() if p.session_id == int(session_id)],
            key=lambda p: (p.start_at, p.pause_id),
        )

    def list_for_sessions(self, session_ids):
        wanted = {int(i) for i in session_ids}
        return sorted(
            [p for p in self.rows.values() if p.session_id in wanted],
            key=lambda p: (p.session_id, p.start_at, p.pause_id),
        )

    def create(self, *, session_id, start_at, end_at, note):
        pid = self._next_id
        self._next_id += 1
        self.rows[pid] = Pause(pause_id=pid, session_id=session_id, start_at=start_at, end_at=end_at, note=note)
        return pid

    def update(self, *, pause_id, start_at, end_at, note):
        p = self.rows[int(pause_id)]
        self.rows[p.pause_id] = replace(p, start_at=start_at, end_at=end_at, note=note)

    def delete(self, pause_id):
        return self.rows.pop(int(pause_id), None) is not None


class FakeLeaves:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, LeaveRequest] = {}

    def add(self, person_id, leave_type, start_date, end_date, status=LeaveStatus.PENDING, reason=None):
        lid = self.create(
            person_id=person_id, leave_type=leave_type, start_date=start_date, end_date=end_date, reason=reason
        )
        self.rows[lid] = replace(self.rows[lid], status=status)
        return self.rows[lid]

    def get_by_id(self, leave_id):
        return self.rows.get(int(leave_id))

    def list_for_person(self, person_id, *, statuses=None, newest_first=False):
        wanted = set(statuses) if statuses is not None else None
        mine = [
            l for l in self.rows.values()
            if l.person_id == int(person_id) and (wanted is None or l.status in wanted)
        ]
        return sorted(mine, key=lambda l: (l.start_date, l.leave_id), reverse=newest_first)

    def list_by_status(self, status, *, limit=200):
        hits = sorted([l for l in self.rows.values() if l.status == status], key=lambda l: (l.start_date, l.leave_id))
        return hits[:limit]

    def list_for_person_in_window(self, person_id, start, end):
        return [
            l for l in self.list_for_person(person_id)
            if l.start_date <= end and l.end_date >= start
        ]

    def create(self, *, person_id, leave_type, start_date, end_date, reason):
        lid = self._next_id
        self._next_id += 1
        self.rows[lid] = LeaveRequest(
            leave_id=lid,
            person_id=person_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            status=LeaveStatus.PENDING,
            reason=reason,
            created_at=datetime(2025, 1, 1, 8, 0),
        )
        return lid

    def update(self, *, leave_id, leave_type, start_date, end_date, reason):
        l = self.rows[int(leave_id)]
        self.rows[l.leave_id] = replace(
            l, leave_type=leave_type, start_date=start_date, end_date=end_date, reason=reason
        )

    def set_status(self, *, leave_id, expected, status, reason=None):
        l = self.rows.get(int(leave_id))
        if not l or l.status != expected:
            return False
        self.rows[l.leave_id] = replace(l, status=status, reason=reason if reason is not None else l.reason)
        return True

    def delete(self, leave_id):
        return self.rows.pop(int(leave_id), None) is not None


class FakeShifts:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, WorkShift] = {}

    def get_by_id(self, shift_id):
        return self.rows.get(int(shift_id))

    def list_for_person(self, person_id):
        return sorted(
            [s for s in self.rows.values() if s.person_id == int(person_id)],
            key=lambda s: (s.start_at, s.shift_id),
        )

    def list_for_team_between(self, team_id, start, end):
        return sorted(
            [s for s in self.rows.values() if s.team_id == int(team_id) and start <= s.start_at < end],
            key=lambda s: (s.start_at, s.shift_id),
        )

    def list_for_person_between(self, person_id, start, end):
        return [s for s in self.list_for_person(person_id) if start <= s.start_at < end]

    def create(self, *, team_id, person_id, start_at, end_at, note):
        sid = self._next_id
        self._next_id += 1
        self.rows[sid] = WorkShift(
            shift_id=sid, team_id=team_id, person_id=person_id, start_at=start_at, end_at=end_at, note=note
        )
        return sid

    def update(self, *, shift_id, person_id, start_at, end_at, note):
        s = self.rows[int(shift_id)]
        self.rows[s.shift_id] = replace(s, person_id=person_id, start_at=start_at, end_at=end_at, note=note)

    def delete(self, shift_id):
        return self.rows.pop(int(shift_id), None) is not None


class FakeTemplates:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, ScheduleTemplate] = {}

    def get_by_id(self, template_id):
        return self.rows.get(int(template_id))

    def list_for_team(self, team_id):
        return sorted(
            [t for t in self.rows.values() if t.team_id == int(team_id)],
            key=lambda t: (t.name, t.template_id),
        )

    def name_exists(self, team_id, name, *, exclude_id=None):
        return any(
            t.team_id == int(team_id) and t.name.lower() == name.lower() and t.template_id != exclude_id
            for t in self.rows.values()
        )

    def create(self, *, team_id, name, active, weekly_pattern):
        tid = self._next_id
        self._next_id += 1
        self.rows[tid] = ScheduleTemplate(
            template_id=tid, team_id=team_id, name=name, active=active, weekly_pattern=weekly_pattern
        )
        return tid

    def update(self, *, template_id, name, active, weekly_pattern):
        t = self.rows[int(template_id)]
        self.rows[t.template_id] = replace(t, name=name, active=active, weekly_pattern=weekly_pattern)

    def deactivate_others(self, *, team_id, keep_id):
        n = 0
        for t in list(self.rows.values()):
            if t.team_id == int(team_id) and t.template_id != int(keep_id) and t.active:
                self.rows[t.template_id] = replace(t, active=False)
                n += 1
        return n

    def delete(self, template_id):
        return self.rows.pop(int(template_id), None) is not None


class Store:
    """Every fake repository of one test, wired into real services."""

    def __init__(self):
        self.persons = FakePersons(
            Person(person_id=1, full_name="Alice Martin"),
            Person(person_id=2, full_name="Bruno Petit"),
            Person(person_id=3, full_name="Chloe Durand"),
        )
        self.teams = FakeTeams(
            Team(team_id=10, name="Support", member_ids=(1, 2)),
            Team(team_id=20, name="Warehouse", member_ids=(3,)),
            Team(team_id=30, name="Empty", member_ids=()),
        )
        self.clocks = FakeClocks()
        self.pauses = FakePauses()
        self.leaves = FakeLeaves()
        self.shifts = FakeShifts()
        self.templates = FakeTemplates()
        self.tx = LocalTransactionManager()
        self.services = build_services(
            persons=self.persons,
            teams=self.teams,
            clocks=self.clocks,
            pauses=self.pauses,
            leaves=self.leaves,
            shifts=self.shifts,
            templates=self.templates,
            tx=self.tx,
        )


@pytest.fixture
def store() -> Store:
    return Store()


@pytest.fixture
def services(store):
    return store.services
