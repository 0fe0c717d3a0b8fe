from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import WorkShift


class ShiftRepository(Protocol):
    def get_by_id(self, shift_id: int) -> Optional[WorkShift]:
        raise NotImplementedError

    def list_for_person(self, person_id: int) -> Sequence[WorkShift]:
        """Every shift assigned to the person, by ``start_at``."""

        raise NotImplementedError

    def list_for_team_between(self, team_id: int, start: datetime, end: datetime) -> Sequence[WorkShift]:
        """Shifts starting in ``[start, end)``, by ``start_at``."""

        raise NotImplementedError

    def list_for_person_between(self, person_id: int, start: datetime, end: datetime) -> Sequence[WorkShift]:
        raise NotImplementedError

    def create(
        self,
        *,
        team_id: int,
        person_id: Optional[int],
        start_at: datetime,
        end_at: datetime,
        note: Optional[str],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        shift_id: int,
        person_id: Optional[int],
        start_at: datetime,
        end_at: datetime,
        note: Optional[str],
    ) -> None:
        raise NotImplementedError

    def delete(self, shift_id: int) -> bool:
        raise NotImplementedError
