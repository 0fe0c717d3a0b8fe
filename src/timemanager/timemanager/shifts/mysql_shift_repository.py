from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from .model import WorkShift
from .repository import ShiftRepository

_COLUMNS = "shift_id, team_id, person_id, start_at, end_at, note"


def _to_shift(r) -> WorkShift:
    return WorkShift(
        shift_id=int(r["shift_id"]),
        team_id=int(r["team_id"]),
        person_id=optional_int(r.get("person_id")),
        start_at=r["start_at"],
        end_at=r["end_at"],
        note=r.get("note"),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, shift_id: int) -> Optional[WorkShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def list_for_person(self, person_id: int) -> Sequence[WorkShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_shifts
                WHERE person_id=%s
                ORDER BY start_at ASC, shift_id ASC
                """,
                (int(person_id),),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def list_for_team_between(self, team_id: int, start: datetime, end: datetime) -> Sequence[WorkShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_shifts
                WHERE team_id=%s AND start_at >= %s AND start_at < %s
                ORDER BY start_at ASC, shift_id ASC
                """,
                (int(team_id), start, end),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def list_for_person_between(self, person_id: int, start: datetime, end: datetime) -> Sequence[WorkShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_shifts
                WHERE person_id=%s AND start_at >= %s AND start_at < %s
                ORDER BY start_at ASC, shift_id ASC
                """,
                (int(person_id), start, end),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        team_id: int,
        person_id: Optional[int],
        start_at: datetime,
        end_at: datetime,
        note: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_shifts(team_id, person_id, start_at, end_at, note)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(team_id), optional_int(person_id), start_at, end_at, note),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        shift_id: int,
        person_id: Optional[int],
        start_at: datetime,
        end_at: datetime,
        note: Optional[str],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_shifts
                SET person_id=%s, start_at=%s, end_at=%s, note=%s
                WHERE shift_id=%s
                """,
                (optional_int(person_id), start_at, end_at, note, int(shift_id)),
            )

    def delete(self, shift_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_shifts WHERE shift_id=%s", (int(shift_id),))
            return cur.rowcount > 0
