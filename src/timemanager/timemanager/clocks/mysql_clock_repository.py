from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClockSession
from .repository import ClockRepository

_COLUMNS = "session_id, person_id, clock_in, clock_out"


def _to_session(r) -> ClockSession:
    return ClockSession(
        session_id=int(r["session_id"]),
        person_id=int(r["person_id"]),
        clock_in=r["clock_in"],
        clock_out=r.get("clock_out"),
    )


class MySQLClockRepository(ClockRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[ClockSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM clock_sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def get_latest_for_person(self, person_id: int) -> Optional[ClockSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM clock_sessions
                WHERE person_id=%s
                ORDER BY clock_in DESC, session_id DESC
                LIMIT 1
                """,
                (int(person_id),),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_for_person_between(self, person_id: int, start: datetime, end: datetime) -> Sequence[ClockSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM clock_sessions
                WHERE person_id=%s
                  AND clock_in < %s
                  AND (clock_out IS NULL OR clock_out > %s)
                ORDER BY clock_in ASC, session_id ASC
                """,
                (int(person_id), end, start),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_between(self, start: datetime, end: datetime) -> Sequence[ClockSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM clock_sessions
                WHERE clock_in < %s
                  AND (clock_out IS NULL OR clock_out > %s)
                ORDER BY person_id ASC, clock_in ASC, session_id ASC
                """,
                (end, start),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def create(self, *, person_id: int, clock_in: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO clock_sessions(person_id, clock_in) VALUES(%s,%s)",
                (int(person_id), clock_in),
            )
            return int(cur.lastrowid)

    def close(self, *, session_id: int, clock_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE clock_sessions SET clock_out=%s WHERE session_id=%s AND clock_out IS NULL",
                (clock_out, int(session_id)),
            )
            return cur.rowcount > 0
