from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType
from ..intervals.model import Interval


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    person_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    status: LeaveStatus
    reason: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def days(self) -> Interval:
        return Interval.for_days(self.start_date, self.end_date)

    @property
    def blocks_calendar(self) -> bool:
        return self.status in (LeaveStatus.PENDING, LeaveStatus.APPROVED)

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    @property
    def label(self) -> str:
        return f"{self.status.value} {self.leave_type.value}"


@dataclass(frozen=True)
class LeavePatch:
    leave_type: Optional[LeaveType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = None


def apply_leave_patch(leave: LeaveRequest, patch: LeavePatch) -> LeaveRequest:
    merged = leave
    if patch.leave_type is not None:
        merged = replace(merged, leave_type=patch.leave_type)
    if patch.start_date is not None:
        merged = replace(merged, start_date=patch.start_date)
    if patch.end_date is not None:
        merged = replace(merged, end_date=patch.end_date)
    if patch.reason is not None:
        merged = replace(merged, reason=patch.reason.strip() or None)
    return merged
