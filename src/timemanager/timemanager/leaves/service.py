from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.locks import TransactionManager, person_subject
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import ConflictError, NotFoundError
from ..intervals.model import Interval
from ..intervals.overlap import exists_overlap
from ..people.repository import PersonRepository
from .model import LeavePatch, LeaveRequest, apply_leave_patch
from .repository import LeaveRepository
from .transitions import ensure_editable, transition

logger = logging.getLogger(__name__)

_BLOCKING = (LeaveStatus.PENDING, LeaveStatus.APPROVED)


class LeaveService:
    """Leave requests: no two PENDING/APPROVED requests of a person share a day."""

    def __init__(self, leaves: LeaveRepository, persons: PersonRepository, tx: TransactionManager):
        self._leaves = leaves
        self._persons = persons
        self._tx = tx

    def _require_person(self, person_id: int) -> None:
        if not self._persons.get_by_id(int(person_id)):
            raise NotFoundError(f"User not found: {person_id}")

    def _require_leave(self, leave_id: int) -> LeaveRequest:
        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise NotFoundError(f"Leave not found: {leave_id}")
        return leave

    def _overlaps(
        self,
        person_id: int,
        days: Interval,
        statuses: Iterable[LeaveStatus],
        *,
        exclude_id: Optional[int] = None,
    ) -> bool:
        others = self._leaves.list_for_person(int(person_id), statuses=statuses)
        return exists_overlap(days, [(o.leave_id, o.days) for o in others], exclude_id)

    def request_leave(
        self,
        person_id: int,
        *,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> LeaveRequest:
        days = Interval.for_days(start_date, end_date)
        reason = (reason or "").strip() or None

        with self._tx.atomic(person_subject(person_id)):
            self._require_person(person_id)
            if self._overlaps(person_id, days, _BLOCKING):
                raise ConflictError("Overlaps an existing leave (APPROVED or PENDING)")

            leave_id = self._leaves.create(
                person_id=int(person_id),
                leave_type=leave_type,
                start_date=start_date,
                end_date=end_date,
                reason=reason,
            )

        logger.info("Leave %s requested by person %s (%s..%s)", leave_id, person_id, start_date, end_date)
        return LeaveRequest(
            leave_id=leave_id,
            person_id=int(person_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            status=LeaveStatus.PENDING,
            reason=reason,
        )

    def _decide(self, leave_id: int, target: LeaveStatus, *, person_id: Optional[int] = None, note: Optional[str] = None):
        leave = self._require_leave(leave_id)
        with self._tx.atomic(person_subject(leave.person_id)):
            leave = self._require_leave(leave_id)
            if person_id is not None and leave.person_id != int(person_id):
                raise ConflictError("Cannot cancel another user's leave")
            status = transition(leave.status, target)

            # A PENDING sibling never blocks approval; only an APPROVED one does.
            if target == LeaveStatus.APPROVED and self._overlaps(
                leave.person_id, leave.days, (LeaveStatus.APPROVED,), exclude_id=leave.leave_id
            ):
                raise ConflictError("Conflicts with an already APPROVED leave")

            reason = note.strip() if note and note.strip() else None
            if not self._leaves.set_status(
                leave_id=leave.leave_id, expected=leave.status, status=status, reason=reason
            ):
                raise ConflictError(f"Only PENDING leaves can be {target.value.lower()}")

        logger.info("Leave %s of person %s -> %s", leave.leave_id, leave.person_id, status.value)
        return replace(leave, status=status, reason=reason if reason is not None else leave.reason)

    def approve(self, leave_id: int) -> LeaveRequest:
        return self._decide(leave_id, LeaveStatus.APPROVED)

    def reject(self, leave_id: int, note: Optional[str] = None) -> LeaveRequest:
        return self._decide(leave_id, LeaveStatus.REJECTED, note=note)

    def cancel(self, person_id: int, leave_id: int) -> LeaveRequest:
        return self._decide(leave_id, LeaveStatus.CANCELLED, person_id=person_id)

    def update_leave(self, leave_id: int, patch: LeavePatch, *, person_id: Optional[int] = None) -> LeaveRequest:
        leave = self._require_leave(leave_id)
        with self._tx.atomic(person_subject(leave.person_id)):
            leave = self._require_leave(leave_id)
            if person_id is not None and leave.person_id != int(person_id):
                raise ConflictError("Cannot modify another user's leave")
            ensure_editable(leave.status, "modified")

            merged = apply_leave_patch(leave, patch)
            days = Interval.for_days(merged.start_date, merged.end_date)
            if self._overlaps(merged.person_id, days, _BLOCKING, exclude_id=merged.leave_id):
                raise ConflictError("Overlaps an existing leave (APPROVED or PENDING)")

            self._leaves.update(
                leave_id=merged.leave_id,
                leave_type=merged.leave_type,
                start_date=merged.start_date,
                end_date=merged.end_date,
                reason=merged.reason,
            )

        return merged

    def delete_leave(self, leave_id: int, *, person_id: Optional[int] = None) -> None:
        leave = self._require_leave(leave_id)
        with self._tx.atomic(person_subject(leave.person_id)):
            leave = self._require_leave(leave_id)
            if person_id is not None and leave.person_id != int(person_id):
                raise ConflictError("Cannot delete another user's leave")
            ensure_editable(leave.status, "deleted")
            self._leaves.delete(leave.leave_id)

    def list_for_person(self, person_id: int) -> Sequence[LeaveRequest]:
        """Employee history, newest first."""
        self._require_person(person_id)
        return self._leaves.list_for_person(int(person_id), newest_first=True)

    def list_pending(self, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[LeaveRequest]:
        return self._leaves.list_by_status(LeaveStatus.PENDING, limit=limit)

    def list_for_person_in_window(self, person_id: int, start: date, end: date) -> Sequence[LeaveRequest]:
        if start > end:
            raise ConflictError("Invalid date range")
        return self._leaves.list_for_person_in_window(int(person_id), start, end)
