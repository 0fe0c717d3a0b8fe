from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Person, Team


class PersonRepository(Protocol):
    """Identity lookup.

    Note: services depend on this interface only, never on a concrete store.
    """

    def get_by_id(self, person_id: int) -> Optional[Person]:
        raise NotImplementedError


class TeamRepository(Protocol):
    def get_by_id(self, team_id: int) -> Optional[Team]:
        raise NotImplementedError

    def list_with_members(self) -> Sequence[Team]:
        raise NotImplementedError
