from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Person:
    """Domain entity: an employee, as seen by the time engine.

    Only identity and the active flag; accounts and roles live elsewhere.
    """

    person_id: int
    full_name: str
    is_active: bool = True


@dataclass(frozen=True)
class Team:
    team_id: int
    name: str
    member_ids: tuple[int, ...] = field(default_factory=tuple)
