from __future__ import annotations

from typing import Hashable, Iterable, Optional

from .model import Interval


def overlaps(a: Interval, b: Interval) -> bool:
    """Strict overlap; intervals touching at one instant do not conflict."""
    return a.start < b.effective_end and b.start < a.effective_end


def exists_overlap(
    candidate: Interval,
    items: Iterable[tuple[Hashable, Interval]],
    exclude_id: Optional[Hashable] = None,
) -> bool:
    """True iff any ``(identifier, interval)`` other than ``exclude_id`` overlaps ``candidate``."""
    for ident, interval in items:
        if exclude_id is not None and ident == exclude_id:
            continue
        if overlaps(candidate, interval):
            return True
    return False
