from datetime import date, datetime

import pytest

from src.timemanager.timemanager.core.enums import LeaveStatus, LeaveType
from src.timemanager.timemanager.core.exceptions import ConflictError, NotFoundError


def at(h, m=0, day=3):
    return datetime(2025, 3, day, h, m)


def test_person_timesheet_rows(services, store):
    services.shift_service.create_shift(10, start_at=at(9), end_at=at(17), person_id=1, note="desk")
    s = store.clocks.add(1, at(9), at(17))
    store.pauses.add(s.session_id, at(12), at(12, 30))
    store.leaves.add(1, LeaveType.PAID, date(2025, 3, 4), date(2025, 3, 4))
    store.leaves.add(1, LeaveType.SICK, date(2025, 3, 4), date(2025, 3, 5), status=LeaveStatus.APPROVED)

    sheet = services.timesheet_service.timesheet_for_person(1, date(2025, 3, 3), date(2025, 3, 4))

    assert sheet.person_name == "Alice Martin"
    first, second = sheet.days
    assert first.actual_hours == 7.5
    assert [p.note for p in first.planned] == ["desk"]
    assert first.leave is None
    assert second.planned == []
    assert second.actual_hours == 0.0
    assert second.leave == "APPROVED SICK"


def test_night_session_is_split_across_days(services, store):
    store.clocks.add(1, at(22), at(2, day=4))

    sheet = services.timesheet_service.timesheet_for_person(1, date(2025, 3, 3), date(2025, 3, 4))

    assert [d.actual_hours for d in sheet.days] == [2.0, 2.0]


def test_team_timesheet_covers_assigned_people(services):
    services.shift_service.create_shift(10, start_at=at(9), end_at=at(17), person_id=2)
    services.shift_service.create_shift(10, start_at=at(9), end_at=at(17))

    sheet = services.timesheet_service.timesheet_for_team(10, date(2025, 3, 3), date(2025, 3, 3))

    assert [p.person_id for p in sheet.people] == [2]
    assert sheet.as_dict()["teamName"] == "Support"


def test_invalid_window_and_unknown_subjects(services):
    with pytest.raises(ConflictError):
        services.timesheet_service.timesheet_for_person(1, date(2025, 3, 4), date(2025, 3, 3))
    with pytest.raises(NotFoundError):
        services.timesheet_service.timesheet_for_person(999, date(2025, 3, 3), date(2025, 3, 3))
    with pytest.raises(NotFoundError):
        services.timesheet_service.timesheet_for_team(99, date(2025, 3, 3), date(2025, 3, 3))
