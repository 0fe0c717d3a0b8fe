from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import Iterator, Optional, Sequence

from ..common.locks import Subject, TransactionManager, person_subject, team_subject
from ..common.validators import blank_to_none
from ..core.exceptions import ConflictError, NotFoundError
from ..intervals.model import Interval
from ..intervals.overlap import exists_overlap
from ..people.repository import PersonRepository, TeamRepository
from .model import ShiftPatch, WorkShift, apply_shift_patch
from .repository import ShiftRepository

logger = logging.getLogger(__name__)

_RELOCK_ATTEMPTS = 3


class ShiftService:
    """Planned shifts; an assigned person never holds two overlapping shifts."""

    def __init__(
        self,
        shifts: ShiftRepository,
        teams: TeamRepository,
        persons: PersonRepository,
        tx: TransactionManager,
    ):
        self._shifts = shifts
        self._teams = teams
        self._persons = persons
        self._tx = tx

    def _require_shift(self, shift_id: int) -> WorkShift:
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift:
            raise NotFoundError(f"Shift not found: {shift_id}")
        return shift

    def _require_team(self, team_id: int) -> None:
        if not self._teams.get_by_id(int(team_id)):
            raise NotFoundError(f"Team not found: {team_id}")

    def _require_person(self, person_id: int) -> None:
        if not self._persons.get_by_id(int(person_id)):
            raise NotFoundError(f"User not found: {person_id}")

    @staticmethod
    def _subjects(*person_ids: Optional[int]) -> list[Subject]:
        return [person_subject(p) for p in person_ids if p is not None]

    @contextmanager
    def _locked_shift(self, shift_id: int, *person_ids: Optional[int]) -> Iterator[WorkShift]:
        """Lock the shift's current assignee plus ``person_ids`` and yield the shift.

        The assignee is read before locking; if it changed by the time the locks
        are held, the locks are dropped and taken again for the new assignee.
        """
        for _ in range(_RELOCK_ATTEMPTS):
            seen = self._require_shift(shift_id)
            with self._tx.atomic(*self._subjects(seen.person_id, *person_ids)):
                current = self._require_shift(shift_id)
                if current.person_id == seen.person_id:
                    yield current
                    return
            logger.debug("Shift %s reassigned while locking, retrying", shift_id)
        raise ConflictError(f"Shift is being modified concurrently: {shift_id}")

    def _ensure_free(self, person_id: int, interval: Interval, *, exclude_id: Optional[int] = None) -> None:
        others = self._shifts.list_for_person(int(person_id))
        if exists_overlap(interval, [(s.shift_id, s.interval) for s in others], exclude_id):
            logger.debug("Shift overlap for person %s at %s", person_id, interval)
            raise ConflictError("Employee already has overlapping shift")

    def create_shift(
        self,
        team_id: int,
        *,
        start_at: datetime,
        end_at: datetime,
        person_id: Optional[int] = None,
        note: Optional[str] = None,
    ) -> WorkShift:
        if start_at is None or end_at is None:
            raise ConflictError("Invalid time window")
        interval = Interval(start_at, end_at)
        note = blank_to_none(note)

        with self._tx.atomic(team_subject(team_id), *self._subjects(person_id)):
            self._require_team(team_id)
            if person_id is not None:
                self._require_person(person_id)
                self._ensure_free(person_id, interval)

            shift_id = self._shifts.create(
                team_id=int(team_id),
                person_id=int(person_id) if person_id is not None else None,
                start_at=start_at,
                end_at=end_at,
                note=note,
            )

        return WorkShift(
            shift_id=shift_id,
            team_id=int(team_id),
            person_id=int(person_id) if person_id is not None else None,
            start_at=start_at,
            end_at=end_at,
            note=note,
        )

    def update_shift(self, shift_id: int, patch: ShiftPatch) -> WorkShift:
        with self._locked_shift(shift_id, patch.person_id) as current:
            merged = apply_shift_patch(current, patch)

            interval = merged.interval
            if merged.person_id is not None:
                if merged.person_id != current.person_id:
                    self._require_person(merged.person_id)
                self._ensure_free(merged.person_id, interval, exclude_id=merged.shift_id)

            self._persist(merged)

        return merged

    def assign_shift(self, shift_id: int, person_id: int) -> WorkShift:
        with self._locked_shift(shift_id, person_id) as current:
            self._require_person(person_id)
            self._ensure_free(person_id, current.interval, exclude_id=current.shift_id)

            assigned = apply_shift_patch(current, ShiftPatch(person_id=int(person_id)))
            self._persist(assigned)

        logger.info("Shift %s assigned to person %s", assigned.shift_id, person_id)
        return assigned

    def unassign_shift(self, shift_id: int) -> WorkShift:
        with self._locked_shift(shift_id) as current:
            unassigned = replace(current, person_id=None)
            self._persist(unassigned)

        return unassigned

    def delete_shift(self, shift_id: int) -> None:
        if not self._shifts.delete(int(shift_id)):
            raise NotFoundError(f"Shift not found: {shift_id}")

    def _persist(self, shift: WorkShift) -> None:
        self._shifts.update(
            shift_id=shift.shift_id,
            person_id=shift.person_id,
            start_at=shift.start_at,
            end_at=shift.end_at,
            note=shift.note,
        )

    def list_shifts_for_team(self, team_id: int, start: datetime, end: datetime) -> Sequence[WorkShift]:
        self._require_team(team_id)
        if end <= start:
            raise ConflictError("Invalid time window")
        return self._shifts.list_for_team_between(int(team_id), start, end)

    def list_shifts_for_person(self, person_id: int, start: datetime, end: datetime) -> Sequence[WorkShift]:
        self._require_person(person_id)
        if end <= start:
            raise ConflictError("Invalid time window")
        return self._shifts.list_for_person_between(int(person_id), start, end)

