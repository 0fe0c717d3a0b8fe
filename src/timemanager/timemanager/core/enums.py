from __future__ import annotations

from enum import Enum


class LeaveStatus(str, Enum):
    """Lifecycle of a leave request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class LeaveType(str, Enum):
    PAID = "PAID"
    UNPAID = "UNPAID"
    SICK = "SICK"
    OTHER = "OTHER"


class SubjectKind(str, Enum):
    """What an atomic unit is serialized on."""

    PERSON = "person"
    SESSION = "session"
    TEAM = "team"
