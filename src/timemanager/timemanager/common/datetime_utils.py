from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import DAYS_PER_WEEK


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; ``None``/blank stays ``None``."""
    if value is None or not str(value).strip():
        return None
    return datetime.fromisoformat(str(value).strip())


def parse_hhmm(value: str) -> time:
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def now_in_zone(zone: str | ZoneInfo) -> datetime:
    """Wall-clock time in ``zone``, returned naive like every stored timestamp."""
    tz = zone if isinstance(zone, ZoneInfo) else ZoneInfo(zone)
    return datetime.now(tz).replace(tzinfo=None)


def start_of_day(d: date) -> datetime:
    return datetime.combine(d, time.min)


def week_window(now: datetime) -> tuple[datetime, datetime]:
    """[most recent Monday 00:00, +7 days)."""
    monday = now.date() - timedelta(days=now.weekday())
    start = start_of_day(monday)
    return start, start + timedelta(days=DAYS_PER_WEEK)


def month_window(now: datetime) -> tuple[datetime, datetime]:
    """[first of month 00:00, first of next month 00:00)."""
    first = now.date().replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return start_of_day(first), start_of_day(next_first)


def iter_days(start: date, end: date):
    """Yield every date in the inclusive range [start, end]."""
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)
