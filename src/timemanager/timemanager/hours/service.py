from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Optional, Sequence

from ..clocks.model import ClockSession
from ..clocks.repository import ClockRepository
from ..common.locks import TransactionManager, person_subject
from ..core.exceptions import ConflictError, NotFoundError
from ..pauses.repository import PauseRepository
from ..people.repository import PersonRepository
from .calculator.base import HoursCalculator
from .calculator.clipped_calculator import ClippedHoursCalculator
from .model import HoursSummary, SessionWithPauses


def attach_pauses(sessions: Sequence[ClockSession], pauses: PauseRepository) -> list[SessionWithPauses]:
    """Pair each session with its pauses using one bulk pause query."""
    if not sessions:
        return []
    by_session = defaultdict(list)
    for pause in pauses.list_for_sessions([s.session_id for s in sessions]):
        by_session[pause.session_id].append(pause)
    return [SessionWithPauses(session=s, pauses=tuple(by_session.get(s.session_id, ()))) for s in sessions]


class HoursService:
    def __init__(
        self,
        clocks: ClockRepository,
        pauses: PauseRepository,
        persons: PersonRepository,
        tx: TransactionManager,
        *,
        calculator: Optional[HoursCalculator] = None,
    ):
        self._clocks = clocks
        self._pauses = pauses
        self._persons = persons
        self._tx = tx
        self._calculator = calculator or ClippedHoursCalculator()

    @property
    def calculator(self) -> HoursCalculator:
        return self._calculator

    def load(self, person_id: int, start: datetime, end: datetime) -> list[SessionWithPauses]:
        # Sessions and pauses are read in one unit so they belong together.
        with self._tx.atomic(person_subject(person_id)):
            sessions = self._clocks.list_for_person_between(int(person_id), start, end)
            return attach_pauses(sessions, self._pauses)

    def compute_hours(self, person_id: int, start: datetime, end: datetime) -> HoursSummary:
        if not self._persons.get_by_id(int(person_id)):
            raise NotFoundError(f"User not found: {person_id}")
        if start is None or end is None or start >= end:
            raise ConflictError("Invalid time window")
        return self._calculator.compute(self.load(person_id, start, end), start, end)
