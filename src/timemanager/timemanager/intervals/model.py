from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.exceptions import ConflictError

# Stand-in for +infinity when an interval is still open.
OPEN_END = datetime.max


@dataclass(frozen=True)
class Interval:
    """A time range ``[start, end)``; ``end is None`` means still open."""

    start: datetime
    end: Optional[datetime] = None

    def __post_init__(self):
        if self.start is None:
            raise ConflictError("Interval start is required")
        if self.end is not None and not self.start < self.end:
            raise ConflictError("Invalid time window")

    @property
    def is_open(self) -> bool:
        return self.end is None

    @property
    def effective_end(self) -> datetime:
        return self.end if self.end is not None else OPEN_END

    @classmethod
    def for_days(cls, start_date: date, end_date: date) -> "Interval":
        """Day-granularity range; both days inclusive."""
        if start_date is None or end_date is None or start_date > end_date:
            raise ConflictError("Invalid date range")
        return cls(
            start=datetime.combine(start_date, datetime.min.time()),
            end=datetime.combine(end_date + timedelta(days=1), datetime.min.time()),
        )

    def contains(self, other: "Interval") -> bool:
        """True when ``other`` lies inside this interval's bounds."""
        return self.start <= other.start and other.effective_end <= self.effective_end

    def clip(self, lower: datetime, upper: datetime) -> Optional[tuple[datetime, datetime]]:
        """Truncate to ``[lower, upper]``; an open end is read as ``upper``.

        Returns ``None`` when nothing is left.
        """
        start = max(self.start, lower)
        end = min(self.end if self.end is not None else upper, upper)
        if end <= start:
            return None
        return start, end
