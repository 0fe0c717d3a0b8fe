"""Leave request lifecycle.

PENDING -> APPROVED | REJECTED | CANCELLED; every other status is terminal.
"""

from __future__ import annotations

from ..core.enums import LeaveStatus
from ..core.exceptions import ConflictError

TRANSITIONS: dict[LeaveStatus, frozenset[LeaveStatus]] = {
    LeaveStatus.PENDING: frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED, LeaveStatus.CANCELLED}),
    LeaveStatus.APPROVED: frozenset(),
    LeaveStatus.REJECTED: frozenset(),
    LeaveStatus.CANCELLED: frozenset(),
}

_VERBS = {
    LeaveStatus.APPROVED: "approved",
    LeaveStatus.REJECTED: "rejected",
    LeaveStatus.CANCELLED: "cancelled",
}


def can_transition(current: LeaveStatus, target: LeaveStatus) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


def transition(current: LeaveStatus, target: LeaveStatus) -> LeaveStatus:
    if not can_transition(current, target):
        verb = _VERBS.get(target, target.value.lower())
        raise ConflictError(f"Only PENDING leaves can be {verb}")
    return target


def ensure_editable(current: LeaveStatus, action: str) -> None:
    """Edits and deletes are allowed only before a decision."""
    if current != LeaveStatus.PENDING:
        raise ConflictError(f"Only PENDING leaves can be {action}")
