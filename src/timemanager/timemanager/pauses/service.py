from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..clocks.model import ClockSession
from ..clocks.repository import ClockRepository
from ..common.locks import TransactionManager, person_subject, session_subject
from ..common.validators import blank_to_none
from ..core.exceptions import ConflictError, NotFoundError
from ..intervals.model import Interval
from ..intervals.overlap import exists_overlap
from .model import Pause, PausePatch, apply_pause_patch
from .repository import PauseRepository

logger = logging.getLogger(__name__)


class PauseService:
    """Keeps every pause nested in its session and apart from its sibling pauses."""

    def __init__(self, pauses: PauseRepository, clocks: ClockRepository, tx: TransactionManager):
        self._pauses = pauses
        self._clocks = clocks
        self._tx = tx

    def _require_session(self, session_id: int) -> ClockSession:
        session = self._clocks.get_by_id(int(session_id))
        if not session:
            raise NotFoundError(f"Clock not found: {session_id}")
        return session

    def _require_pause(self, pause_id: int) -> Pause:
        pause = self._pauses.get_by_id(int(pause_id))
        if not pause:
            raise NotFoundError(f"Pause not found: {pause_id}")
        return pause

    def _subjects(self, session: ClockSession):
        # Clock-out moves the session end, so pauses also serialize on the person.
        return person_subject(session.person_id), session_subject(session.session_id)

    def _validate(
        self,
        session: ClockSession,
        start_at: Optional[datetime],
        end_at: Optional[datetime],
        *,
        exclude_id: Optional[int] = None,
    ) -> Interval:
        if start_at is None:
            raise ConflictError("startAt is required")
        if end_at is not None and not start_at < end_at:
            raise ConflictError("Invalid pause window")

        candidate = Interval(start_at, end_at)
        if not session.interval.contains(candidate):
            raise ConflictError("Pause must be inside the clock-in/out interval")

        siblings = [p for p in self._pauses.list_for_session(session.session_id) if p.pause_id != exclude_id]
        if candidate.is_open and any(p.is_open for p in siblings):
            raise ConflictError("There is already an open pause for this clock")
        if exists_overlap(candidate, [(p.pause_id, p.interval) for p in siblings], exclude_id):
            raise ConflictError("Pause overlaps an existing pause")
        return candidate

    def add_pause(
        self,
        session_id: int,
        *,
        start_at: Optional[datetime],
        end_at: Optional[datetime] = None,
        note: Optional[str] = None,
    ) -> Pause:
        session = self._require_session(session_id)
        with self._tx.atomic(*self._subjects(session)):
            session = self._require_session(session_id)
            candidate = self._validate(session, start_at, end_at)
            note = blank_to_none(note)
            pause_id = self._pauses.create(
                session_id=session.session_id,
                start_at=candidate.start,
                end_at=candidate.end,
                note=note,
            )

        logger.debug("Pause %s added to session %s", pause_id, session.session_id)
        return Pause(
            pause_id=pause_id,
            session_id=session.session_id,
            start_at=candidate.start,
            end_at=candidate.end,
            note=note,
        )

    def update_pause(self, pause_id: int, patch: PausePatch) -> Pause:
        current = self._require_pause(pause_id)
        session = self._require_session(current.session_id)
        with self._tx.atomic(*self._subjects(session)):
            current = self._require_pause(pause_id)
            merged = apply_pause_patch(current, patch)

            if patch.touches_window:
                session = self._require_session(current.session_id)
                self._validate(session, merged.start_at, merged.end_at, exclude_id=current.pause_id)

            self._pauses.update(
                pause_id=merged.pause_id,
                start_at=merged.start_at,
                end_at=merged.end_at,
                note=merged.note,
            )

        return merged

    def delete_pause(self, pause_id: int) -> None:
        if not self._pauses.delete(int(pause_id)):
            raise NotFoundError(f"Pause not found: {pause_id}")

    def list_pauses(self, session_id: int) -> Sequence[Pause]:
        self._require_session(session_id)
        return self._pauses.list_for_session(int(session_id))
