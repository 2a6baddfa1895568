"""Dispatch Controller - weekly crew board."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, List, Optional

from movemax.shared.domain.dispatch import schedule
from movemax.shared.domain.models import Project

if TYPE_CHECKING:
    from movemax.app.state.auth_state import AuthState
    from movemax.app.state.domain_store import DomainStore

logger = logging.getLogger(__name__)


class DispatchController:
    """Crew-to-project assignments; mutations require dispatch/edit."""

    def __init__(self, domain: DomainStore, auth: AuthState):
        self.domain = domain
        self.auth = auth

    @property
    def can_edit(self) -> bool:
        return self.auth.has_permission("dispatch", "edit")

    def week_days(self, start: date) -> List[date]:
        return schedule.week_days(start)

    def dispatchable_projects(self) -> List[Project]:
        return schedule.dispatchable_projects(self.domain.projects)

    def unassigned_projects(self) -> List[Project]:
        return schedule.unassigned_projects(self.domain.projects)

    def assignment_for(self, staff_id: str, day: str) -> Optional[Project]:
        return schedule.assignment_for(self.domain.projects, staff_id, day)

    def assign(self, staff_id: str, day: str, project_id: str) -> None:
        """Put the staff member on ``project_id`` for ``day``.

        Two sequential project updates: the member is first removed from the
        project they hold that day (when it differs from the target), then
        added to the target.
        """
        self.auth.require("dispatch", "edit")

        current = next(
            (p for p in self.domain.projects if p.date == day and staff_id in p.assigned_crew_ids),
            None,
        )
        if current is not None and current.id != project_id:
            self.domain.update_project(current.model_copy(update={
                "assigned_crew_ids": [sid for sid in current.assigned_crew_ids if sid != staff_id],
            }))

        target = self.domain.get_project(project_id)
        if target is not None and staff_id not in target.assigned_crew_ids:
            self.domain.update_project(target.model_copy(update={
                "assigned_crew_ids": [*target.assigned_crew_ids, staff_id],
            }))
            logger.info(f"Assigned {staff_id} to {project_id} on {day}")

    def unassign(self, staff_id: str, project_id: str) -> None:
        self.auth.require("dispatch", "edit")
        project = self.domain.get_project(project_id)
        if project is None or staff_id not in project.assigned_crew_ids:
            return
        self.domain.update_project(project.model_copy(update={
            "assigned_crew_ids": [sid for sid in project.assigned_crew_ids if sid != staff_id],
        }))
        logger.info(f"Unassigned {staff_id} from {project_id}")
