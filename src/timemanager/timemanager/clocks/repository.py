from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import ClockSession


class ClockRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[ClockSession]:
        raise NotImplementedError

    def get_latest_for_person(self, person_id: int) -> Optional[ClockSession]:
        """Latest by ``clock_in`` descending; equal starts go to the larger id."""

        raise NotImplementedError

    def list_for_person_between(self, person_id: int, start: datetime, end: datetime) -> Sequence[ClockSession]:
        """Sessions intersecting ``[start, end)``, open ones included, by ``clock_in`` ascending."""

        raise NotImplementedError

    def list_between(self, start: datetime, end: datetime) -> Sequence[ClockSession]:
        """Same as ``list_for_person_between`` across every person."""

        raise NotImplementedError

    def create(self, *, person_id: int, clock_in: datetime) -> int:
        raise NotImplementedError

    def close(self, *, session_id: int, clock_out: datetime) -> bool:
        raise NotImplementedError
