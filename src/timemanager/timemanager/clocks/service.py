from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.locks import TransactionManager, person_subject
from ..core.exceptions import ConflictError, NotFoundError
from ..people.repository import PersonRepository
from .model import ClockSession
from .repository import ClockRepository

logger = logging.getLogger(__name__)


class ClockService:
    """Clock-in/clock-out state per person: NoOpenSession -> Open -> NoOpenSession."""

    def __init__(self, clocks: ClockRepository, persons: PersonRepository, tx: TransactionManager):
        self._clocks = clocks
        self._persons = persons
        self._tx = tx

    def _require_person(self, person_id: int) -> None:
        if not self._persons.get_by_id(int(person_id)):
            raise NotFoundError(f"User not found: {person_id}")

    def clock_in(self, person_id: int, *, at: Optional[datetime] = None) -> ClockSession:
        when = at or now_local()
        with self._tx.atomic(person_subject(person_id)):
            self._require_person(person_id)

            last = self._clocks.get_latest_for_person(int(person_id))
            if last and last.is_open:
                raise ConflictError("User is already clocked-in")

            session_id = self._clocks.create(person_id=int(person_id), clock_in=when)

        logger.info("Person %s clocked in at %s (session %s)", person_id, when, session_id)
        return ClockSession(session_id=session_id, person_id=int(person_id), clock_in=when)

    def clock_out(self, person_id: int, *, at: Optional[datetime] = None) -> ClockSession:
        when = at or now_local()
        with self._tx.atomic(person_subject(person_id)):
            self._require_person(person_id)

            last = self._clocks.get_latest_for_person(int(person_id))
            if not last:
                raise ConflictError("No active session to clock-out")
            if not last.is_open:
                raise ConflictError("Already clocked-out")
            if when <= last.clock_in:
                raise ConflictError("Invalid clock-out time")

            if not self._clocks.close(session_id=last.session_id, clock_out=when):
                raise ConflictError("Already clocked-out")

        logger.info("Person %s clocked out at %s (session %s)", person_id, when, last.session_id)
        return ClockSession(
            session_id=last.session_id,
            person_id=last.person_id,
            clock_in=last.clock_in,
            clock_out=when,
        )

    def open_session(self, person_id: int) -> Optional[ClockSession]:
        last = self._clocks.get_latest_for_person(int(person_id))
        return last if last and last.is_open else None

    def list_sessions(self, person_id: int, start: datetime, end: datetime) -> Sequence[ClockSession]:
        self._require_person(person_id)
        if end <= start:
            raise ConflictError("Invalid time window")
        return self._clocks.list_for_person_between(int(person_id), start, end)
