from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Pause
from .repository import PauseRepository

_COLUMNS = "pause_id, session_id, start_at, end_at, note"


def _to_pause(r) -> Pause:
    return Pause(
        pause_id=int(r["pause_id"]),
        session_id=int(r["session_id"]),
        start_at=r["start_at"],
        end_at=r.get("end_at"),
        note=r.get("note"),
    )


class MySQLPauseRepository(PauseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, pause_id: int) -> Optional[Pause]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM clock_pauses WHERE pause_id=%s", (int(pause_id),))
            r = fetchone(cur)
            return _to_pause(r) if r else None

    def list_for_session(self, session_id: int) -> Sequence[Pause]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM clock_pauses
                WHERE session_id=%s
                ORDER BY start_at ASC, pause_id ASC
                """,
                (int(session_id),),
            )
            return [_to_pause(r) for r in fetchall(cur)]

    def list_for_sessions(self, session_ids: Iterable[int]) -> Sequence[Pause]:
        ids = sorted({int(i) for i in session_ids})
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM clock_pauses
                WHERE session_id IN ({placeholders})
                ORDER BY session_id ASC, start_at ASC, pause_id ASC
                """,
                tuple(ids),
            )
            return [_to_pause(r) for r in fetchall(cur)]

    def create(self, *, session_id: int, start_at: datetime, end_at: Optional[datetime], note: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO clock_pauses(session_id, start_at, end_at, note) VALUES(%s,%s,%s,%s)",
                (int(session_id), start_at, end_at, note),
            )
            return int(cur.lastrowid)

    def update(self, *, pause_id: int, start_at: datetime, end_at: Optional[datetime], note: Optional[str]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE clock_pauses SET start_at=%s, end_at=%s, note=%s WHERE pause_id=%s",
                (start_at, end_at, note, int(pause_id)),
            )

    def delete(self, pause_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM clock_pauses WHERE pause_id=%s", (int(pause_id),))
            return cur.rowcount > 0
