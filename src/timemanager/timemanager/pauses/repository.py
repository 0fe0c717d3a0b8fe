from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from .model import Pause


class PauseRepository(Protocol):
    def get_by_id(self, pause_id: int) -> Optional[Pause]:
        raise NotImplementedError

    def list_for_session(self, session_id: int) -> Sequence[Pause]:
        """Ordered by ``start_at`` ascending."""

        raise NotImplementedError

    def list_for_sessions(self, session_ids: Iterable[int]) -> Sequence[Pause]:
        raise NotImplementedError

    def create(self, *, session_id: int, start_at: datetime, end_at: Optional[datetime], note: Optional[str]) -> int:
        raise NotImplementedError

    def update(self, *, pause_id: int, start_at: datetime, end_at: Optional[datetime], note: Optional[str]) -> None:
        raise NotImplementedError

    def delete(self, pause_id: int) -> bool:
        raise NotImplementedError
