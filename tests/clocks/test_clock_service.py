from datetime import datetime

import pytest

from src.timemanager.timemanager.core.exceptions import ConflictError, NotFoundError


def test_clock_in_then_out(services, store):
    s = services.clock_service.clock_in(1, at=datetime(2025, 3, 3, 9, 0))
    assert s.is_open
    assert services.clock_service.open_session(1).session_id == s.session_id

    closed = services.clock_service.clock_out(1, at=datetime(2025, 3, 3, 17, 0))

    assert closed.clock_out == datetime(2025, 3, 3, 17, 0)
    assert store.clocks.get_by_id(s.session_id).clock_out == datetime(2025, 3, 3, 17, 0)
    assert services.clock_service.open_session(1) is None


def test_double_clock_in_is_rejected(services):
    services.clock_service.clock_in(1, at=datetime(2025, 3, 3, 9, 0))

    with pytest.raises(ConflictError, match="already clocked-in"):
        services.clock_service.clock_in(1, at=datetime(2025, 3, 3, 9, 5))


def test_double_clock_out_is_rejected(services):
    services.clock_service.clock_in(1, at=datetime(2025, 3, 3, 9, 0))
    services.clock_service.clock_out(1, at=datetime(2025, 3, 3, 12, 0))

    with pytest.raises(ConflictError, match="Already clocked-out"):
        services.clock_service.clock_out(1, at=datetime(2025, 3, 3, 13, 0))


def test_clock_out_without_session(services):
    with pytest.raises(ConflictError, match="No active session"):
        services.clock_service.clock_out(2)


def test_clock_out_before_clock_in_is_rejected(services, store):
    services.clock_service.clock_in(1, at=datetime(2025, 3, 3, 9, 0))

    with pytest.raises(ConflictError):
        services.clock_service.clock_out(1, at=datetime(2025, 3, 3, 8, 0))
    assert store.clocks.get_latest_for_person(1).is_open


def test_unknown_person(services):
    with pytest.raises(NotFoundError):
        services.clock_service.clock_in(999)


def test_latest_session_tie_break_prefers_larger_id(services, store):
    start = datetime(2025, 3, 3, 9, 0)
    store.clocks.add(1, start, datetime(2025, 3, 3, 10, 0))
    store.clocks.add(1, start)

    closed = services.clock_service.clock_out(1, at=datetime(2025, 3, 3, 11, 0))

    assert closed.session_id == 2


def test_list_sessions_returns_window_overlap(services, store):
    store.clocks.add(1, datetime(2025, 3, 2, 22, 0), datetime(2025, 3, 3, 2, 0))
    store.clocks.add(1, datetime(2025, 3, 3, 9, 0), datetime(2025, 3, 3, 17, 0))
    store.clocks.add(1, datetime(2025, 3, 4, 9, 0), datetime(2025, 3, 4, 17, 0))

    sessions = services.clock_service.list_sessions(1, datetime(2025, 3, 3), datetime(2025, 3, 4))

    assert [s.session_id for s in sessions] == [1, 2]
