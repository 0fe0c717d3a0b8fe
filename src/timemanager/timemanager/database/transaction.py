from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from ..common.locks import Subject, TransactionManager, lock_name, ordered
from ..core.constants import DEFAULT_LOCK_TIMEOUT_SECONDS
from ..core.exceptions import ConflictError
from .connection import DatabaseConnection
from .mysql_base import bind_connection, bound_connection, unbind_connection

logger = logging.getLogger(__name__)


class MySQLTransactionManager(TransactionManager):
    """One connection per atomic unit, serialized per subject with ``GET_LOCK``.

    Named locks belong to the MySQL session, so any other process taking the
    same subject waits until this unit commits or rolls back.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, lock_timeout: int = DEFAULT_LOCK_TIMEOUT_SECONDS):
        self._conn_factory = conn_factory
        self._lock_timeout = int(lock_timeout)

    @contextmanager
    def atomic(self, *subjects: Subject) -> Iterator[None]:
        if bound_connection(self._conn_factory) is not None:
            # Nested unit: the outer one already holds the connection.
            yield
            return

        conn = self._conn_factory.connect()
        token = bind_connection(self._conn_factory, conn)
        acquired: list[str] = []
        try:
            cur = conn.cursor()
            try:
                for subject in ordered(subjects):
                    name = lock_name(subject)
                    cur.execute("SELECT GET_LOCK(%s, %s)", (name, self._lock_timeout))
                    row = cur.fetchone()
                    if not row or row[0] != 1:
                        logger.warning("Lock timeout on %s", name)
                        raise ConflictError(f"Resource is busy: {name}")
                    acquired.append(name)
            finally:
                cur.close()

            try:
                yield
                conn.commit()
            except Exception:
                conn.rollback()
                raise
        finally:
            unbind_connection(token)
            if acquired:
                cur = conn.cursor()
                try:
                    for name in reversed(acquired):
                        cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                        cur.fetchone()
                finally:
                    cur.close()
            conn.close()
