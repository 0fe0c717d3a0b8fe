from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Team
from .repository import TeamRepository


class MySQLTeamRepository(TeamRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, team_id: int) -> Optional[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT t.team_id, t.name, tm.person_id
                FROM teams t
                LEFT JOIN team_members tm ON tm.team_id = t.team_id
                WHERE t.team_id=%s
                ORDER BY tm.person_id
                """,
                (int(team_id),),
            )
            teams = self._group(fetchall(cur))
            return teams[0] if teams else None

    def list_with_members(self) -> Sequence[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT t.team_id, t.name, tm.person_id
                FROM teams t
                LEFT JOIN team_members tm ON tm.team_id = t.team_id
                ORDER BY t.team_id, tm.person_id
                """
            )
            return self._group(fetchall(cur))

    @staticmethod
    def _group(rows) -> list[Team]:
        names: dict[int, str] = {}
        members: dict[int, list[int]] = {}
        for r in rows:
            team_id = int(r["team_id"])
            names[team_id] = r["name"]
            bucket = members.setdefault(team_id, [])
            if r.get("person_id") is not None:
                bucket.append(int(r["person_id"]))
        return [Team(team_id=tid, name=names[tid], member_ids=tuple(members[tid])) for tid in names]
