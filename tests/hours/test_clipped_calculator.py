from datetime import datetime

from src.timemanager.timemanager.clocks.model import ClockSession
from src.timemanager.timemanager.hours.calculator.clipped_calculator import ClippedHoursCalculator
from src.timemanager.timemanager.hours.model import SessionWithPauses
from src.timemanager.timemanager.pauses.model import Pause


def at(h, m=0, day=3):
    return datetime(2025, 3, day, h, m)


DAY = (at(0), at(0, day=4))


def test_pause_is_clipped_to_the_clipped_session():
    row = SessionWithPauses(
        session=ClockSession(session_id=1, person_id=1, clock_in=at(8), clock_out=at(12)),
        pauses=(Pause(pause_id=1, session_id=1, start_at=at(8), end_at=at(10)),),
    )

    # Window starts at 09:00, so only 09:00-10:00 of the pause counts.
    summary = ClippedHoursCalculator().compute([row], at(9), at(0, day=4))

    assert summary.gross_hours == 3.0
    assert summary.pause_hours == 1.0
    assert summary.net_hours == 2.0


def test_pause_minutes_are_clamped_to_gross():
    row = SessionWithPauses(
        session=ClockSession(session_id=1, person_id=1, clock_in=at(9), clock_out=at(10)),
        pauses=(
            Pause(pause_id=1, session_id=1, start_at=at(9), end_at=at(10)),
            Pause(pause_id=2, session_id=1, start_at=at(9, 30), end_at=at(10)),
        ),
    )

    summary = ClippedHoursCalculator().compute([row], *DAY)

    assert summary.pause_hours == 1.0
    assert summary.net_hours == 0.0


def test_open_pause_runs_to_session_end():
    row = SessionWithPauses(
        session=ClockSession(session_id=1, person_id=1, clock_in=at(9)),
        pauses=(Pause(pause_id=1, session_id=1, start_at=at(11)),),
    )

    summary = ClippedHoursCalculator().compute([row], at(9), at(12))

    assert summary.gross_hours == 3.0
    assert summary.pause_hours == 1.0
    assert summary.net_hours == 2.0


def test_sessions_outside_window_contribute_nothing():
    row = SessionWithPauses(session=ClockSession(session_id=1, person_id=1, clock_in=at(9, day=2), clock_out=at(17, day=2)))

    summary = ClippedHoursCalculator().compute([row], *DAY)

    assert summary.net_hours == 0.0
    assert summary.gross_hours == 0.0


def test_open_session_stops_at_open_end():
    row = SessionWithPauses(
        session=ClockSession(session_id=1, person_id=1, clock_in=at(9)),
        pauses=(Pause(pause_id=1, session_id=1, start_at=at(10)),),
    )

    summary = ClippedHoursCalculator().compute([row], *DAY, open_end=at(11))

    assert summary.gross_hours == 2.0
    assert summary.pause_hours == 1.0
    assert summary.net_hours == 1.0


def test_open_end_never_passes_the_window():
    row = SessionWithPauses(session=ClockSession(session_id=1, person_id=1, clock_in=at(22)))

    summary = ClippedHoursCalculator().compute([row], at(20), at(23), open_end=at(9, day=4))

    assert summary.gross_hours == 1.0
