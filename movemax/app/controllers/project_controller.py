"""Project Controller - project workspace actions (scope, logistics, finance)."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence

from movemax.shared.core.exceptions import FormValidationError
from movemax.shared.domain.models import (
    DestinationZone,
    Expense,
    Incident,
    IncidentSeverity,
    MoveCrate,
    MoveDepartment,
    MoveDocument,
    MoveLoad,
    MoveStatus,
    Project,
    ProjectPhase,
    StoragePlan,
    StorageUnit,
    Task,
)
from movemax.shared.domain.projects import finance, forms

if TYPE_CHECKING:
    from movemax.app.state.auth_state import AuthState
    from movemax.app.state.domain_store import DomainStore

logger = logging.getLogger(__name__)

UNASSIGNED_LOAD = "unassign"


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class ProjectController:
    """Edits to a single project; every mutation needs projects/edit."""

    def __init__(self, domain: DomainStore, auth: AuthState):
        self.domain = domain
        self.auth = auth

    @property
    def can_edit(self) -> bool:
        return self.auth.has_permission("projects", "edit")

    def _editable(self, project_id: str) -> Optional[Project]:
        self.auth.require("projects", "edit")
        return self.domain.get_project(project_id)

    def _actor_name(self) -> str:
        user = self.auth.current_user
        return user.name if user else "Admin"

    # --- Listing ---

    def filter_projects(self, query: str = "", status: Optional[MoveStatus] = None) -> List[Project]:
        return finance.filter_projects(self.domain.projects, query, status)

    def financials(self, project_id: str) -> finance.ProjectFinancials:
        project = self.domain.get_project(project_id)
        if project is None:
            return finance.ProjectFinancials(labor=0, expenses=0, total=0, margin=0)
        return finance.financials(project)

    # --- Create / edit ---

    def save_project(self, data: Mapping[str, Any], editing: bool = False) -> Project:
        """Validate the form, then update the existing project or add a new one."""
        self.auth.require("projects", "edit")
        forms.validate_project_form(data)

        if editing:
            current = self.domain.get_project(str(data.get("id", "")))
            if current is None:
                raise FormValidationError("Project no longer exists", field="id")
            merged = current.model_dump()
            merged.update(data)
            project = Project.model_validate(merged)
            self.domain.update_project(project)
            logger.info(f"Project {project.id} updated")
            return project

        project = forms.build_new_project(data, forms.new_project_id())
        self.domain.add_project(project)
        logger.info(f"Project {project.id} created for {project.customer_name}")
        return project

    def delete_project(self, project_id: str) -> None:
        self.auth.require("projects", "delete")
        self.domain.delete_project(project_id)

    # --- Scope ---

    def save_storage_units(self, project_id: str, units: Sequence[StorageUnit]) -> None:
        """Replace the identified units of the storage plan (e.g. after an AI scan)."""
        project = self._editable(project_id)
        if project is None:
            return
        plan = project.storage_plan or StoragePlan()
        self.domain.update_project(project.model_copy(update={
            "storage_plan": plan.model_copy(update={"identified_units": list(units)}),
        }))

    def save_destination_zones(self, project_id: str, zones: Sequence[DestinationZone]) -> None:
        project = self._editable(project_id)
        if project is None:
            return
        self.domain.update_project(project.model_copy(update={"destination_zones": list(zones)}))

    def provision_crates(self, project_id: str, count: int, prefix: str = "CR-", start: int = 1) -> List[MoveCrate]:
        project = self._editable(project_id)
        if project is None or count <= 0:
            return []
        crates = forms.build_crates(count, prefix, start, id_stamp=uuid.uuid4().int % 10**9)
        self.domain.update_project(project.model_copy(update={"crates": [*project.crates, *crates]}))
        logger.info(f"{count} crates provisioned for {project_id}")
        return crates

    def generate_manifest(self, project_id: str) -> Optional[MoveDocument]:
        project = self._editable(project_id)
        if project is None:
            return None
        document = MoveDocument(
            id=_new_id("man"),
            name=f"Project_Manifest_{project.id}.pdf",
            type="PDF",
            url="#",
            uploaded_by="System",
            uploaded_at=self.domain.now().isoformat(),
            size="1.2 MB",
        )
        self.domain.update_project(project.model_copy(update={"documents": [document, *project.documents]}))
        return document

    def generate_tasks(self, project_id: str) -> List[Task]:
        """Append the standard kickoff tasks."""
        project = self._editable(project_id)
        if project is None:
            return []
        tasks = [
            Task(id=_new_id("t"), title="Send Welcome Packet", description="Email client", department_id=""),
            Task(id=_new_id("t"), title="Order Crates", description="Based on estimate", department_id=""),
        ]
        self.domain.update_project(project.model_copy(update={"tasks": [*project.tasks, *tasks]}))
        return tasks

    # --- Logistics ---

    def create_load(self, project_id: str, name: str = "", vehicle_id: str = "v1") -> Optional[MoveLoad]:
        project = self._editable(project_id)
        if project is None:
            return None
        load = MoveLoad(id=_new_id("load"), vehicle_id=vehicle_id or "v1", name=name or "New Load")
        self.domain.update_project(project.model_copy(update={"loads": [*project.loads, load]}))
        return load

    def assign_item_to_load(self, project_id: str, item_id: str, load_id: Optional[str]) -> None:
        """Put an inventory item on a load; ``None`` or "unassign" clears it."""
        project = self._editable(project_id)
        if project is None:
            return
        target = None if load_id in (None, UNASSIGNED_LOAD) else load_id
        inventory = [
            item.model_copy(update={"load_id": target}) if item.id == item_id else item
            for item in project.inventory
        ]
        self.domain.update_project(project.model_copy(update={"inventory": inventory}))

    # --- Departments, phases, zones ---

    def save_department(self, project_id: str, data: Mapping[str, Any]) -> Optional[MoveDepartment]:
        project = self._editable(project_id)
        if project is None:
            return None
        department = MoveDepartment(
            id=data.get("id") or _new_id("dept"),
            name=data.get("name") or "New Dept",
            move_date=data.get("move_date") or project.date,
            status="Pending",
            contact_name=data.get("contact_name"),
            budget=0,
            actual_spend=0,
        )
        if data.get("id"):
            departments = [department if d.id == department.id else d for d in project.departments]
        else:
            departments = [*project.departments, department]
        self.domain.update_project(project.model_copy(update={"departments": departments}))
        return department

    def save_phase(self, project_id: str, data: Mapping[str, Any]) -> Optional[ProjectPhase]:
        project = self._editable(project_id)
        if project is None:
            return None
        phase = ProjectPhase(
            id=data.get("id") or _new_id("ph"),
            name=data.get("name") or "New Phase",
            date=data.get("date") or project.date,
            status=data.get("status") or "Pending",
            assigned_crew_count=data.get("assigned_crew_count") or 0,
        )
        if data.get("id"):
            phases = [phase if p.id == phase.id else p for p in project.phases]
        else:
            phases = [*project.phases, phase]
        self.domain.update_project(project.model_copy(update={"phases": phases}))
        return phase

    def save_zone(self, project_id: str, data: Mapping[str, Any]) -> Optional[DestinationZone]:
        project = self._editable(project_id)
        if project is None:
            return None
        zone = DestinationZone(
            id=data.get("id") or _new_id("zone"),
            name=data.get("name") or "New Zone",
            floor=data.get("floor") or "1",
            capacity=data.get("capacity") or 10,
            coordinates=data.get("coordinates"),
        )
        if data.get("id"):
            zones = [zone if z.id == zone.id else z for z in project.destination_zones]
        else:
            zones = [*project.destination_zones, zone]
        self.domain.update_project(project.model_copy(update={"destination_zones": zones}))
        return zone

    def delete_zone(self, project_id: str, zone_id: str) -> None:
        project = self._editable(project_id)
        if project is None:
            return
        zones = [z for z in project.destination_zones if z.id != zone_id]
        if len(zones) != len(project.destination_zones):
            self.domain.update_project(project.model_copy(update={"destination_zones": zones}))

    def map_crate_to_zone(self, project_id: str, source_id: str, zone_id: str) -> None:
        """Map a crate (by id) or, failing that, a storage unit to a zone."""
        project = self._editable(project_id)
        if project is None:
            return
        if any(c.id == source_id for c in project.crates):
            crates = [
                c.model_copy(update={"destination_zone_id": zone_id}) if c.id == source_id else c
                for c in project.crates
            ]
            self.domain.update_project(project.model_copy(update={"crates": crates}))
            return

        plan = project.storage_plan or StoragePlan()
        units = [
            u.model_copy(update={"mapped_to": zone_id}) if u.id == source_id else u
            for u in plan.identified_units
        ]
        self.domain.update_project(project.model_copy(update={
            "storage_plan": plan.model_copy(update={"identified_units": units}),
        }))

    def bulk_map_crates(self, project_id: str, query: str, zone_id: str) -> int:
        """Map every unmapped crate matching name/barcode; returns the count."""
        project = self._editable(project_id)
        if project is None:
            return 0
        q = query.lower()
        mapped = 0
        crates = []
        for crate in project.crates:
            if not crate.destination_zone_id and (q in crate.name.lower() or q in crate.barcode.lower()):
                crate = crate.model_copy(update={"destination_zone_id": zone_id})
                mapped += 1
            crates.append(crate)
        if mapped:
            self.domain.update_project(project.model_copy(update={"crates": crates}))
        return mapped

    # --- Finance & incidents ---

    def add_expense(self, project_id: str, data: Mapping[str, Any]) -> Optional[Expense]:
        if self._editable(project_id) is None:
            return None
        try:
            amount = float(data.get("amount") or 0)
        except (TypeError, ValueError):
            amount = 0.0
        expense = Expense(
            id=_new_id("exp"),
            project_id=project_id,
            category=data.get("category") or "Other",
            amount=amount,
            description=data.get("description") or "",
            date=self.domain.now().isoformat(),
            logged_by=self._actor_name(),
        )
        self.domain.add_expense(expense)
        return expense

    def report_incident(self, project_id: str, data: Mapping[str, Any]) -> Optional[Incident]:
        if self._editable(project_id) is None:
            return None
        description = (data.get("description") or "").strip()
        if not description:
            raise FormValidationError("Please describe the incident", field="description")
        user = self.auth.current_user
        incident = Incident(
            id=_new_id("inc"),
            project_id=project_id,
            type=data.get("type") or "Other",
            description=description,
            severity=data.get("severity") or IncidentSeverity.LOW,
            reported_by=user.id if user else "Admin",
            reporter_name=user.name if user else None,
            timestamp=self.domain.now().isoformat(),
            ai_analysis=data.get("ai_analysis"),
        )
        self.domain.report_incident(incident)
        return incident

    def resolve_incident(self, project_id: str, incident_id: str) -> None:
        self.auth.require("projects", "edit")
        self.domain.resolve_incident(incident_id, project_id)
