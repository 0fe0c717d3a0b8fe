from datetime import date

import pytest

from src.timemanager.timemanager.core.enums import LeaveStatus, LeaveType
from src.timemanager.timemanager.core.exceptions import ConflictError, NotFoundError
from src.timemanager.timemanager.leaves.model import LeavePatch
from src.timemanager.timemanager.leaves.transitions import can_transition, transition


def test_request_creates_pending(services):
    leave = services.leave_service.request_leave(
        1, leave_type=LeaveType.PAID, start_date=date(2025, 1, 10), end_date=date(2025, 1, 12), reason="  trip "
    )

    assert leave.status == LeaveStatus.PENDING
    assert leave.reason == "trip"


def test_request_overlapping_approved_leave_is_rejected(services, store):
    store.leaves.add(1, LeaveType.PAID, date(2025, 1, 10), date(2025, 1, 12), status=LeaveStatus.APPROVED)

    with pytest.raises(ConflictError, match="Overlaps"):
        services.leave_service.request_leave(
            1, leave_type=LeaveType.PAID, start_date=date(2025, 1, 11), end_date=date(2025, 1, 13)
        )


def test_rejected_or_cancelled_leaves_do_not_block(services, store):
    store.leaves.add(1, LeaveType.PAID, date(2025, 1, 10), date(2025, 1, 12), status=LeaveStatus.REJECTED)
    store.leaves.add(1, LeaveType.PAID, date(2025, 1, 10), date(2025, 1, 12), status=LeaveStatus.CANCELLED)

    leave = services.leave_service.request_leave(
        1, leave_type=LeaveType.SICK, start_date=date(2025, 1, 11), end_date=date(2025, 1, 11)
    )
    assert leave.status == LeaveStatus.PENDING


def test_other_persons_leave_does_not_block(services, store):
    store.leaves.add(2, LeaveType.PAID, date(2025, 1, 10), date(2025, 1, 12), status=LeaveStatus.APPROVED)

    services.leave_service.request_leave(
        1, leave_type=LeaveType.PAID, start_date=date(2025, 1, 10), end_date=date(2025, 1, 12)
    )


def test_inverted_range_and_unknown_person(services):
    with pytest.raises(ConflictError):
        services.leave_service.request_leave(
            1, leave_type=LeaveType.PAID, start_date=date(2025, 1, 12), end_date=date(2025, 1, 10)
        )
    with pytest.raises(NotFoundError):
        services.leave_service.request_leave(
            999, leave_type=LeaveType.PAID, start_date=date(2025, 1, 10), end_date=date(2025, 1, 10)
        )


def test_approve_blocked_by_approved_sibling(services, store):
    store.leaves.add(1, LeaveType.PAID, date(2025, 1, 10), date(2025, 1, 12), status=LeaveStatus.APPROVED)
    pending = store.leaves.add(1, LeaveType.PAID, date(2025, 1, 12), date(2025, 1, 14))

    with pytest.raises(ConflictError, match="APPROVED"):
        services.leave_service.approve(pending.leave_id)
    assert store.leaves.get_by_id(pending.leave_id).status == LeaveStatus.PENDING


def test_approve_not_blocked_by_pending_sibling(services, store):
    first = store.leaves.add(1, LeaveType.PAID, date(2025, 1, 10), date(2025, 1, 12))
    store.leaves.add(1, LeaveType.UNPAID, date(2025, 1, 11), date(2025, 1, 13))

    approved = services.leave_service.approve(first.leave_id)

    assert approved.status == LeaveStatus.APPROVED


def test_decisions_only_from_pending(services, store):
    leave = store.leaves.add(1, LeaveType.PAID, date(2025, 2, 1), date(2025, 2, 2), status=LeaveStatus.APPROVED)

    with pytest.raises(ConflictError, match="Only PENDING"):
        services.leave_service.approve(leave.leave_id)
    with pytest.raises(ConflictError):
        services.leave_service.reject(leave.leave_id)
    with pytest.raises(ConflictError):
        services.leave_service.cancel(1, leave.leave_id)


def test_reject_overwrites_reason_with_note(services, store):
    leave = store.leaves.add(1, LeaveType.PAID, date(2025, 2, 1), date(2025, 2, 2), reason="holiday")

    rejected = services.leave_service.reject(leave.leave_id, "team is short")
    assert rejected.status == LeaveStatus.REJECTED
    assert store.leaves.get_by_id(leave.leave_id).reason == "team is short"


def test_reject_without_note_keeps_reason(services, store):
    leave = store.leaves.add(1, LeaveType.PAID, date(2025, 2, 1), date(2025, 2, 2), reason="holiday")

    services.leave_service.reject(leave.leave_id, "   ")

    assert store.leaves.get_by_id(leave.leave_id).reason == "holiday"


def test_cancel_requires_owner(services, store):
    leave = store.leaves.add(1, LeaveType.PAID, date(2025, 2, 1), date(2025, 2, 2))

    with pytest.raises(ConflictError, match="another user"):
        services.leave_service.cancel(2, leave.leave_id)

    cancelled = services.leave_service.cancel(1, leave.leave_id)
    assert cancelled.status == LeaveStatus.CANCELLED


def test_update_rechecks_overlap_excluding_self(services, store):
    leave = store.leaves.add(1, LeaveType.PAID, date(2025, 2, 1), date(2025, 2, 2))
    store.leaves.add(1, LeaveType.PAID, date(2025, 2, 10), date(2025, 2, 12))

    moved = services.leave_service.update_leave(leave.leave_id, LeavePatch(end_date=date(2025, 2, 4)))
    assert moved.end_date == date(2025, 2, 4)

    with pytest.raises(ConflictError, match="Overlaps"):
        services.leave_service.update_leave(leave.leave_id, LeavePatch(end_date=date(2025, 2, 10)))


def test_update_and_delete_only_while_pending(services, store):
    leave = store.leaves.add(1, LeaveType.PAID, date(2025, 2, 1), date(2025, 2, 2), status=LeaveStatus.REJECTED)

    with pytest.raises(ConflictError):
        services.leave_service.update_leave(leave.leave_id, LeavePatch(reason="again"))
    with pytest.raises(ConflictError):
        services.leave_service.delete_leave(leave.leave_id)

    pending = store.leaves.add(1, LeaveType.PAID, date(2025, 3, 1), date(2025, 3, 2))
    services.leave_service.delete_leave(pending.leave_id)
    assert store.leaves.get_by_id(pending.leave_id) is None


def test_listing(services, store):
    store.leaves.add(1, LeaveType.PAID, date(2025, 1, 1), date(2025, 1, 2))
    store.leaves.add(1, LeaveType.PAID, date(2025, 3, 1), date(2025, 3, 2), status=LeaveStatus.APPROVED)

    history = services.leave_service.list_for_person(1)
    assert [l.start_date for l in history] == [date(2025, 3, 1), date(2025, 1, 1)]
    assert [l.start_date for l in services.leave_service.list_pending()] == [date(2025, 1, 1)]
    assert len(services.leave_service.list_for_person_in_window(1, date(2025, 1, 2), date(2025, 2, 1))) == 1


def test_transition_table():
    assert can_transition(LeaveStatus.PENDING, LeaveStatus.APPROVED)
    assert not can_transition(LeaveStatus.APPROVED, LeaveStatus.CANCELLED)
    assert transition(LeaveStatus.PENDING, LeaveStatus.REJECTED) == LeaveStatus.REJECTED
    with pytest.raises(ConflictError):
        transition(LeaveStatus.CANCELLED, LeaveStatus.PENDING)
