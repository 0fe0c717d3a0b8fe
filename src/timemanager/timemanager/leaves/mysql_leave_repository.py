from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = "leave_id, person_id, leave_type, start_date, end_date, status, reason, created_at"


def _to_leave(r) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        person_id=int(r["person_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=LeaveStatus(r["status"]),
        reason=r.get("reason"),
        created_at=r.get("created_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_for_person(
        self,
        person_id: int,
        *,
        statuses: Optional[Iterable[LeaveStatus]] = None,
        newest_first: bool = False,
    ) -> Sequence[LeaveRequest]:
        clauses = ["person_id=%s"]
        params: list[object] = [int(person_id)]
        if statuses is not None:
            wanted = sorted({s.value for s in statuses})
            if not wanted:
                return []
            clauses.append(f"status IN ({','.join(['%s'] * len(wanted))})")
            params.extend(wanted)

        order = "DESC" if newest_first else "ASC"
        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY start_date {order}, leave_id {order}
                """,
                tuple(params),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_by_status(self, status: LeaveStatus, *, limit: int = 200) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE status=%s
                ORDER BY start_date ASC, leave_id ASC
                LIMIT %s
                """,
                (status.value, int(limit)),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_for_person_in_window(self, person_id: int, start: date, end: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE person_id=%s AND start_date <= %s AND end_date >= %s
                ORDER BY start_date ASC, leave_id ASC
                """,
                (int(person_id), end, start),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        person_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(person_id, leave_type, status, start_date, end_date, reason)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(person_id), leave_type.value, LeaveStatus.PENDING.value, start_date, end_date, reason),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        leave_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET leave_type=%s, start_date=%s, end_date=%s, reason=%s
                WHERE leave_id=%s
                """,
                (leave_type.value, start_date, end_date, reason, int(leave_id)),
            )

    def set_status(
        self,
        *,
        leave_id: int,
        expected: LeaveStatus,
        status: LeaveStatus,
        reason: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if reason is None:
                cur.execute(
                    "UPDATE leave_requests SET status=%s WHERE leave_id=%s AND status=%s",
                    (status.value, int(leave_id), expected.value),
                )
            else:
                cur.execute(
                    "UPDATE leave_requests SET status=%s, reason=%s WHERE leave_id=%s AND status=%s",
                    (status.value, reason, int(leave_id), expected.value),
                )
            return cur.rowcount > 0

    def delete(self, leave_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            return cur.rowcount > 0
