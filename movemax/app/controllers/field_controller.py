"""Field Controller - mobile "My Tasks" mode for movers and supervisors.

Every action is performed as the signed-in user and leaves an entry in the
activity log.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional, Tuple

from movemax.shared.core.exceptions import AuthenticationRequiredError, FormValidationError
from movemax.shared.domain.dispatch.schedule import dispatchable_projects
from movemax.shared.domain.field.scanner import ScanResult, apply_scan_status, find_scan_target, format_elapsed
from movemax.shared.domain.models import (
    Incident,
    IncidentSeverity,
    MoveLoad,
    Project,
    Role,
    StaffMember,
    Task,
    TimeEntry,
)
from movemax.shared.domain.timestamps import parse_timestamp

if TYPE_CHECKING:
    from movemax.app.state.auth_state import AuthState
    from movemax.app.state.domain_store import DomainStore

logger = logging.getLogger(__name__)

SUPERVISOR_ROLES = (Role.SITE_SUPERVISOR, Role.ADMIN)


class FieldController:
    """Tasks, scanner, incidents, time clock and load sign-off."""

    def __init__(self, domain: DomainStore, auth: AuthState):
        self.domain = domain
        self.auth = auth

    def _user(self) -> StaffMember:
        user = self.auth.current_user
        if user is None:
            raise AuthenticationRequiredError()
        return user

    def _log(self, user: StaffMember, project_id: str, action: str, details: str) -> None:
        self.domain.log_activity(project_id, user.id, user.name, action, details)

    def field_projects(self) -> List[Project]:
        """Projects offered in the clock-in and incident pickers."""
        return dispatchable_projects(self.domain.projects)

    # --- Tasks ---

    def my_tasks(self) -> List[Tuple[Project, Task]]:
        user = self._user()
        return [
            (project, task)
            for project in self.domain.projects
            for task in project.tasks
            if task.assigned_to == user.id
        ]

    def pending_tasks(self) -> List[Tuple[Project, Task]]:
        return [(p, t) for p, t in self.my_tasks() if t.status != "Done"]

    def completed_tasks(self) -> List[Tuple[Project, Task]]:
        return [(p, t) for p, t in self.my_tasks() if t.status == "Done"]

    def toggle_task(self, project_id: str, task_id: str) -> Optional[str]:
        """Flip a task between Todo and Done; returns the new status."""
        user = self._user()
        project = self.domain.get_project(project_id)
        task = next((t for t in project.tasks if t.id == task_id), None) if project else None
        if task is None:
            return None

        new_status = "Todo" if task.status == "Done" else "Done"
        tasks = [t.model_copy(update={"status": new_status}) if t.id == task_id else t for t in project.tasks]
        self.domain.update_project(project.model_copy(update={"tasks": tasks}))
        action = "Completed Task" if new_status == "Done" else "Reopened Task"
        self._log(user, project_id, action, f"Task: {task.title}")
        return new_status

    # --- Scanner ---

    def scan(self, query: str) -> Optional[ScanResult]:
        return find_scan_target(self.domain.projects, query)

    def update_scan_status(self, result: ScanResult, status: str) -> ScanResult:
        user = self._user()
        project = self.domain.get_project(result.project_id)
        if project is None:
            return result
        self.domain.update_project(apply_scan_status(project, result, status))
        self._log(user, project.id, "Field Status Update", f"{result.name} marked as {status}")
        return replace(result, status=status)

    # --- Incidents ---

    def submit_incident(
        self,
        project_id: str,
        description: str,
        incident_type: str = "Damage",
        severity: IncidentSeverity = IncidentSeverity.LOW,
        ai_analysis: Optional[str] = None,
    ) -> Incident:
        user = self._user()
        if not project_id or not (description or "").strip():
            raise FormValidationError("Please select project and describe issue")

        incident = Incident(
            id=f"inc-{uuid.uuid4().hex[:12]}",
            project_id=project_id,
            type=incident_type or "Damage",
            description=description,
            severity=severity or IncidentSeverity.LOW,
            reported_by=user.id,
            reporter_name=user.name,
            timestamp=self.domain.now().isoformat(),
            ai_analysis=ai_analysis,
        )
        self.domain.report_incident(incident)
        self._log(user, project_id, "Reported Incident", f"{incident.type} - {incident.severity.value}")
        return incident

    # --- Time clock ---

    def clock_in(self, project_id: str) -> Optional[TimeEntry]:
        user = self._user()
        if not project_id:
            raise FormValidationError("Select a project first", field="project_id")
        return self.domain.clock_in(user.id, project_id)

    def clock_out(self) -> Optional[TimeEntry]:
        return self.domain.clock_out(self._user().id)

    def active_shift(self) -> Optional[TimeEntry]:
        user = self.auth.current_user
        return self.domain.active_time_entry(user.id) if user else None

    def elapsed(self, now: Optional[datetime] = None) -> str:
        shift = self.active_shift()
        if shift is None:
            return "00:00:00"
        return format_elapsed((now or self.domain.now()) - parse_timestamp(shift.start_time))

    # --- Fleet ---

    @property
    def is_supervisor(self) -> bool:
        user = self.auth.current_user
        return user is not None and user.role in SUPERVISOR_ROLES

    def active_loads(self) -> List[Tuple[Project, MoveLoad]]:
        if not self.is_supervisor:
            return []
        return [(project, load) for project in self.domain.projects for load in project.loads]

    def sign_off_load(self, load_id: str, signature: str) -> Optional[MoveLoad]:
        """Release a load: In Transit, signed and stamped."""
        user = self._user()
        match = next(((p, l) for p, l in self.active_loads() if l.id == load_id), None)
        if match is None:
            return None
        project, load = match

        signed = load.model_copy(update={
            "status": "In Transit",
            "signature": signature,
            "signed_at": self.domain.now().isoformat(),
        })
        loads = [signed if l.id == load_id else l for l in project.loads]
        self.domain.update_project(project.model_copy(update={"loads": loads}))
        self._log(user, project.id, "Load Sign-off", f"Released {load.name}")
        return signed
