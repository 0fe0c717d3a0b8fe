from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Optional

from ..model import HoursSummary, SessionWithPauses


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def compute(
        self,
        rows: Iterable[SessionWithPauses],
        start: datetime,
        end: datetime,
        *,
        open_end: Optional[datetime] = None,
    ) -> HoursSummary:
        raise NotImplementedError
