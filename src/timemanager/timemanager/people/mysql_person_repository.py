from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Person
from .repository import PersonRepository


class MySQLPersonRepository(PersonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, person_id: int) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT person_id, full_name, is_active
                FROM persons
                WHERE person_id=%s
                """,
                (int(person_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Person(
                person_id=int(row["person_id"]),
                full_name=row["full_name"],
                is_active=bool(row.get("is_active", True)),
            )
