from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ScheduleTemplate, WeeklyPattern


class TemplateRepository(Protocol):
    def get_by_id(self, template_id: int) -> Optional[ScheduleTemplate]:
        raise NotImplementedError

    def list_for_team(self, team_id: int) -> Sequence[ScheduleTemplate]:
        """Templates of a team ordered by name."""

        raise NotImplementedError

    def name_exists(self, team_id: int, name: str, *, exclude_id: Optional[int] = None) -> bool:
        """Case-insensitive name lookup within one team."""

        raise NotImplementedError

    def create(self, *, team_id: int, name: str, active: bool, weekly_pattern: WeeklyPattern) -> int:
        raise NotImplementedError

    def update(self, *, template_id: int, name: str, active: bool, weekly_pattern: WeeklyPattern) -> None:
        raise NotImplementedError

    def deactivate_others(self, *, team_id: int, keep_id: int) -> int:
        """Clear ``active`` on every template of the team except ``keep_id``.

        Returns how many were deactivated.
        """

        raise NotImplementedError

    def delete(self, template_id: int) -> bool:
        raise NotImplementedError
