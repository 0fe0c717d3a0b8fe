from __future__ import annotations

import json
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ScheduleTemplate, WeeklyPattern
from .repository import TemplateRepository

_COLUMNS = "template_id, team_id, name, active, weekly_pattern_json"


def _to_template(r) -> ScheduleTemplate:
    raw = r.get("weekly_pattern_json")
    return ScheduleTemplate(
        template_id=int(r["template_id"]),
        team_id=int(r["team_id"]),
        name=r["name"],
        active=bool(r["active"]),
        weekly_pattern=json.loads(raw) if raw else {},
    )


def _dump(pattern: WeeklyPattern) -> Optional[str]:
    return json.dumps(pattern) if pattern else None


class MySQLTemplateRepository(TemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, template_id: int) -> Optional[ScheduleTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM schedule_templates WHERE template_id=%s", (int(template_id),))
            r = fetchone(cur)
            return _to_template(r) if r else None

    def list_for_team(self, team_id: int) -> Sequence[ScheduleTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM schedule_templates
                WHERE team_id=%s
                ORDER BY name ASC, template_id ASC
                """,
                (int(team_id),),
            )
            return [_to_template(r) for r in fetchall(cur)]

    def name_exists(self, team_id: int, name: str, *, exclude_id: Optional[int] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS n
                FROM schedule_templates
                WHERE team_id=%s AND LOWER(name)=LOWER(%s) AND template_id <> %s
                """,
                (int(team_id), name, int(exclude_id or 0)),
            )
            r = fetchone(cur)
            return bool(r and int(r["n"]) > 0)

    def create(self, *, team_id: int, name: str, active: bool, weekly_pattern: WeeklyPattern) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedule_templates(team_id, name, active, weekly_pattern_json)
                VALUES(%s,%s,%s,%s)
                """,
                (int(team_id), name, 1 if active else 0, _dump(weekly_pattern)),
            )
            return int(cur.lastrowid)

    def update(self, *, template_id: int, name: str, active: bool, weekly_pattern: WeeklyPattern) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE schedule_templates
                SET name=%s, active=%s, weekly_pattern_json=%s
                WHERE template_id=%s
                """,
                (name, 1 if active else 0, _dump(weekly_pattern), int(template_id)),
            )

    def deactivate_others(self, *, team_id: int, keep_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE schedule_templates SET active=0 WHERE team_id=%s AND template_id <> %s AND active=1",
                (int(team_id), int(keep_id)),
            )
            return int(cur.rowcount or 0)

    def delete(self, template_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedule_templates WHERE template_id=%s", (int(template_id),))
            return cur.rowcount > 0
