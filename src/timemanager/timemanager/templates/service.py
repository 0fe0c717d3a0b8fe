from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import iter_days
from ..common.locks import TransactionManager, team_subject
from ..common.validators import require_non_empty
from ..core.exceptions import ConflictError, NotFoundError
from ..people.repository import TeamRepository
from ..shifts.repository import ShiftRepository
from .model import ScheduleTemplate, TemplatePatch, WeeklyPattern, apply_template_patch, pattern_slots
from .repository import TemplateRepository

logger = logging.getLogger(__name__)


class TemplateService:
    """Schedule templates; at most one active template per team.

    Every write runs under the team subject so activating one template and
    deactivating its siblings happen in the same unit.
    """

    def __init__(
        self,
        templates: TemplateRepository,
        teams: TeamRepository,
        shifts: ShiftRepository,
        tx: TransactionManager,
    ):
        self._templates = templates
        self._teams = teams
        self._shifts = shifts
        self._tx = tx

    def _require_template(self, template_id: int) -> ScheduleTemplate:
        template = self._templates.get_by_id(int(template_id))
        if not template:
            raise NotFoundError(f"Template not found: {template_id}")
        return template

    def _ensure_unique_name(self, team_id: int, name: str, *, exclude_id: Optional[int] = None) -> None:
        if self._templates.name_exists(int(team_id), name, exclude_id=exclude_id):
            raise ConflictError("Template name already exists for this team")

    def _ensure_single_active(self, template: ScheduleTemplate) -> None:
        if template.active:
            n = self._templates.deactivate_others(team_id=template.team_id, keep_id=template.template_id)
            if n:
                logger.info("Deactivated %s sibling template(s) of team %s", n, template.team_id)

    def create_template(
        self,
        team_id: int,
        *,
        name: str,
        active: bool = False,
        weekly_pattern: Optional[WeeklyPattern] = None,
    ) -> ScheduleTemplate:
        name = require_non_empty(name, "name")
        pattern = weekly_pattern or {}
        pattern_slots(pattern)

        with self._tx.atomic(team_subject(team_id)):
            if not self._teams.get_by_id(int(team_id)):
                raise NotFoundError(f"Team not found: {team_id}")
            self._ensure_unique_name(team_id, name)

            template_id = self._templates.create(
                team_id=int(team_id), name=name, active=bool(active), weekly_pattern=pattern
            )
            template = ScheduleTemplate(
                template_id=template_id,
                team_id=int(team_id),
                name=name,
                active=bool(active),
                weekly_pattern=pattern,
            )
            self._ensure_single_active(template)

        return template

    def update_template(self, template_id: int, patch: TemplatePatch) -> ScheduleTemplate:
        current = self._require_template(template_id)
        with self._tx.atomic(team_subject(current.team_id)):
            current = self._require_template(template_id)
            merged = apply_template_patch(current, patch)

            if patch.name is not None:
                require_non_empty(patch.name, "name")
                if merged.name.lower() != current.name.lower():
                    self._ensure_unique_name(current.team_id, merged.name, exclude_id=current.template_id)
            if patch.weekly_pattern is not None:
                pattern_slots(merged.weekly_pattern)

            self._save(merged)
            self._ensure_single_active(merged)

        return merged

    def activate(self, template_id: int) -> ScheduleTemplate:
        current = self._require_template(template_id)
        with self._tx.atomic(team_subject(current.team_id)):
            current = self._require_template(template_id)
            activated = replace(current, active=True)
            self._ensure_single_active(activated)
            self._save(activated)

        logger.info("Template %s is now active for team %s", activated.template_id, activated.team_id)
        return activated

    def deactivate(self, template_id: int) -> ScheduleTemplate:
        current = self._require_template(template_id)
        with self._tx.atomic(team_subject(current.team_id)):
            current = self._require_template(template_id)
            deactivated = replace(current, active=False)
            self._save(deactivated)

        return deactivated

    def delete_template(self, template_id: int) -> None:
        if not self._templates.delete(int(template_id)):
            raise NotFoundError(f"Template not found: {template_id}")

    def list_for_team(self, team_id: int) -> Sequence[ScheduleTemplate]:
        return self._templates.list_for_team(int(team_id))

    def _save(self, template: ScheduleTemplate) -> None:
        self._templates.update(
            template_id=template.template_id,
            name=template.name,
            active=template.active,
            weekly_pattern=template.weekly_pattern,
        )

    def generate_shifts(self, template_id: int, from_date: date, to_date: date) -> int:
        """Create one unassigned shift per pattern slot per day in ``[from_date, to_date]``.

        Returns the number of shifts created.
        """
        if from_date is None or to_date is None or from_date > to_date:
            raise ConflictError("Invalid date range")

        template = self._require_template(template_id)
        created = 0
        with self._tx.atomic(team_subject(template.team_id)):
            template = self._require_template(template_id)
            if not template.active:
                raise ConflictError("Template is not active")
            slots = pattern_slots(template.weekly_pattern)
            note = f"generated from template: {template.name}"

            for day in iter_days(from_date, to_date):
                for start, end in slots.get(day.weekday(), []):
                    self._shifts.create(
                        team_id=template.team_id,
                        person_id=None,
                        start_at=datetime.combine(day, start),
                        end_at=datetime.combine(day, end),
                        note=note,
                    )
                    created += 1

        logger.info("Generated %s shift(s) from template %s (%s..%s)", created, template.template_id, from_date, to_date)
        return created
