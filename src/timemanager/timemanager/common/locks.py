"""Per-subject serialization.

Every mutating operation runs inside ``atomic(*subjects)`` so that its
read-check-write cannot interleave with another writer on the same person,
session or team. Operations on different subjects do not block each other.
"""

from __future__ import annotations

import threading
import weakref
from contextlib import ExitStack, contextmanager
from typing import ContextManager, Iterator, Protocol

from ..core.enums import SubjectKind

Subject = tuple[SubjectKind, int]


def person_subject(person_id: int) -> Subject:
    return (SubjectKind.PERSON, int(person_id))


def session_subject(session_id: int) -> Subject:
    return (SubjectKind.SESSION, int(session_id))


def team_subject(team_id: int) -> Subject:
    return (SubjectKind.TEAM, int(team_id))


def lock_name(subject: Subject) -> str:
    kind, ident = subject
    return f"timemanager:{kind.value}:{ident}"


def ordered(subjects) -> list[Subject]:
    # A fixed acquisition order keeps two multi-subject units from deadlocking.
    return sorted(set(subjects), key=lambda s: (s[0].value, s[1]))


class TransactionManager(Protocol):
    def atomic(self, *subjects: Subject) -> ContextManager[None]:
        raise NotImplementedError


class SubjectLocks:
    """Registry of re-entrant locks keyed by subject.

    Entries are weak: a lock lives only while some unit holds or waits on it,
    so the registry stays bounded by the number of subjects in use.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: weakref.WeakValueDictionary = weakref.WeakValueDictionary()

    def get(self, subject: Subject) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(subject)
            if lock is None:
                lock = threading.RLock()
                self._locks[subject] = lock
            return lock

    def __len__(self) -> int:
        return len(self._locks)


class LocalTransactionManager(TransactionManager):
    """In-process serialization for single-process deployments and tests."""

    def __init__(self, locks: SubjectLocks | None = None):
        self._locks = locks if locks is not None else SubjectLocks()

    @contextmanager
    def atomic(self, *subjects: Subject) -> Iterator[None]:
        with ExitStack() as stack:
            for subject in ordered(subjects):
                stack.enter_context(self._locks.get(subject))
            yield
