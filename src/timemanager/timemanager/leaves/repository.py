from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_person(
        self,
        person_id: int,
        *,
        statuses: Optional[Iterable[LeaveStatus]] = None,
        newest_first: bool = False,
    ) -> Sequence[LeaveRequest]:
        """Ordered by ``start_date`` (ascending unless ``newest_first``)."""

        raise NotImplementedError

    def list_by_status(self, status: LeaveStatus, *, limit: int = 200) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_for_person_in_window(self, person_id: int, start: date, end: date) -> Sequence[LeaveRequest]:
        """Requests covering at least one day of ``[start, end]``."""

        raise NotImplementedError

    def create(
        self,
        *,
        person_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        leave_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> None:
        raise NotImplementedError

    def set_status(
        self,
        *,
        leave_id: int,
        expected: LeaveStatus,
        status: LeaveStatus,
        reason: Optional[str] = None,
    ) -> bool:
        """Compare-and-set; ``reason`` overwrites the stored one when given."""

        raise NotImplementedError

    def delete(self, leave_id: int) -> bool:
        raise NotImplementedError
