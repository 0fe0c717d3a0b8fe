from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection

# Connection shared by every repository call inside one atomic unit.
_bound_connection: ContextVar[Optional[tuple[DatabaseConnection, Any]]] = ContextVar(
    "timemanager_bound_connection", default=None
)


def bind_connection(conn_factory: DatabaseConnection, conn):
    return _bound_connection.set((conn_factory, conn))


def unbind_connection(token) -> None:
    _bound_connection.reset(token)


def bound_connection(conn_factory: DatabaseConnection):
    bound = _bound_connection.get()
    if bound and bound[0] is conn_factory:
        return bound[1]
    return None


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    shared = bound_connection(conn_factory)
    if shared is not None:
        # Commit/rollback belong to the enclosing transaction.
        cur = shared.cursor(dictionary=dictionary)
        try:
            yield shared, cur
        finally:
            cur.close()
        return

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None
