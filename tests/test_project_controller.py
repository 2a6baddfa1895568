from __future__ import annotations

import pytest

from movemax.app.controllers import ProjectController
from movemax.shared.core.exceptions import FormValidationError, PermissionDeniedError
from movemax.shared.domain.models import IncidentStatus, MoveStatus


@pytest.fixture
def projects(domain, auth) -> ProjectController:
    return ProjectController(domain, auth)


def _form(**overrides):
    data = {
        "customer_name": "Harbor Dental",
        "origin": "1 Pier Rd",
        "destination": "9 Bay St",
        "date": "2024-07-01",
        "value": "4200",
    }
    data.update(overrides)
    return data


# --- Listing ---


def test_filter_projects(projects):
    assert [p.id for p in projects.filter_projects("law")] == ["P-2024-002"]
    assert [p.id for p in projects.filter_projects("p-2024-00", MoveStatus.BOOKED)] == ["P-2024-002", "P-2024-004"]


def test_financials(projects):
    summary = projects.financials("P-2024-001")
    assert summary.labor == 480
    assert summary.expenses == pytest.approx(1435.5)
    assert summary.margin == pytest.approx(145000 - 1915.5)
    assert [name for name, _ in summary.breakdown()] == ["Margin", "Labor", "Expenses"]

    assert projects.financials("P-404").total == 0


# --- Create / edit ---


def test_mutations_need_projects_edit(projects):
    with pytest.raises(PermissionDeniedError):
        projects.save_project(_form())
    with pytest.raises(PermissionDeniedError):
        projects.provision_crates("P-2024-001", 2)


def test_create_project(projects, auth, domain):
    auth.login("2")
    project = projects.save_project(_form())
    assert project.id.startswith("P-2024-")
    assert project.value == 4200
    assert project.status == MoveStatus.PENDING
    assert domain.projects[0].id == project.id


@pytest.mark.parametrize("overrides, message", [
    ({"customer_name": " "}, "Customer name is required"),
    ({"destination": ""}, "Destination address is required"),
    ({"value": "lots"}, "Project value must be a number"),
    ({"value": -5}, "Project value cannot be negative"),
])
def test_create_project_validation(projects, auth, overrides, message):
    auth.login("2")
    with pytest.raises(FormValidationError, match=message):
        projects.save_project(_form(**overrides))


def test_edit_project_merges_form_fields(projects, auth, domain):
    auth.login("3")
    updated = projects.save_project(_form(id="P-2024-003", value=6000), editing=True)
    assert updated.value == 6000
    assert updated.customer_name == "Harbor Dental"
    assert domain.get_project("P-2024-003").projected_savings.sq_ft == 0


def test_delete_requires_delete_permission(projects, auth, domain):
    auth.login("3")
    with pytest.raises(PermissionDeniedError):
        projects.delete_project("P-2024-003")

    auth.login("2")
    projects.delete_project("P-2024-003")
    assert domain.get_project("P-2024-003") is None


# --- Scope ---


def test_provision_crates(projects, auth, domain):
    auth.login("1")
    crates = projects.provision_crates("P-2024-003", 3, prefix="CR-", start=9)
    assert [c.name for c in crates] == ["CR-009", "CR-010", "CR-011"]
    assert [c.barcode for c in domain.get_project("P-2024-003").crates] == ["CR-009", "CR-010", "CR-011"]
    assert projects.provision_crates("P-2024-003", 0) == []


def test_generate_manifest_and_tasks(projects, auth, domain):
    auth.login("1")
    document = projects.generate_manifest("P-2024-001")
    assert document.name == "Project_Manifest_P-2024-001.pdf"
    assert domain.get_project("P-2024-001").documents[0].id == document.id

    tasks = projects.generate_tasks("P-2024-002")
    assert [t.title for t in tasks] == ["Send Welcome Packet", "Order Crates"]
    assert len(domain.get_project("P-2024-002").tasks) == 3


def test_unknown_project_is_ignored(projects, auth):
    auth.login("1")
    assert projects.generate_manifest("P-404") is None
    assert projects.create_load("P-404") is None


# --- Logistics ---


def test_assign_item_to_load_and_back(projects, auth, domain):
    auth.login("1")
    load = projects.create_load("P-2024-001", "Load 2 - Desks")
    assert domain.get_project("P-2024-001").loads[-1].name == "Load 2 - Desks"

    projects.assign_item_to_load("P-2024-001", "i1", load.id)
    assert domain.get_project("P-2024-001").inventory[0].load_id == load.id

    projects.assign_item_to_load("P-2024-001", "i1", "unassign")
    assert domain.get_project("P-2024-001").inventory[0].load_id is None


# --- Departments, phases, zones ---


def test_save_department_adds_then_updates(projects, auth, domain):
    auth.login("1")
    dept = projects.save_department("P-2024-003", {"name": "Finance"})
    assert dept.move_date == domain.get_project("P-2024-003").date

    projects.save_department("P-2024-003", {"id": dept.id, "name": "Finance & HR"})
    assert [d.name for d in domain.get_project("P-2024-003").departments] == ["Finance & HR"]


def test_save_phase(projects, auth, domain):
    auth.login("1")
    phase = projects.save_phase("P-2024-003", {"name": "Survey", "assigned_crew_count": 2})
    assert domain.get_project("P-2024-003").phases[0].id == phase.id
    assert phase.status == "Pending"


def test_zone_lifecycle(projects, auth, domain):
    auth.login("1")
    zone = projects.save_zone("P-2024-003", {"name": "Room 12", "coordinates": {"x": 10, "y": 20}})
    assert zone.capacity == 10
    assert zone.coordinates.x == 10

    projects.save_zone("P-2024-003", {"id": zone.id, "name": "Room 12B"})
    assert [z.name for z in domain.get_project("P-2024-003").destination_zones] == ["Room 12B"]

    projects.delete_zone("P-2024-003", zone.id)
    assert domain.get_project("P-2024-003").destination_zones == []


def test_map_crate_or_unit_to_zone(projects, auth, domain):
    auth.login("1")
    projects.map_crate_to_zone("P-2024-001", "crate-101", "z3")
    assert domain.get_project("P-2024-001").crates[0].destination_zone_id == "z3"

    projects.map_crate_to_zone("P-2024-001", "mock-2", "z4")
    units = domain.get_project("P-2024-001").storage_plan.identified_units
    assert units[1].mapped_to == "z4"


def test_bulk_map_only_touches_unmapped_matches(projects, auth, domain):
    auth.login("1")
    projects.provision_crates("P-2024-001", 3, prefix="IT-")
    assert projects.bulk_map_crates("P-2024-001", "it-", "z2") == 3
    assert projects.bulk_map_crates("P-2024-001", "it-", "z4") == 0

    crates = domain.get_project("P-2024-001").crates
    assert crates[0].destination_zone_id == "z1"
    assert {c.destination_zone_id for c in crates[1:]} == {"z2"}


# --- Finance & incidents ---


def test_add_expense_records_actor(projects, auth, domain):
    auth.login("2")
    expense = projects.add_expense("P-2024-001", {"category": "Parking", "amount": "42.5", "description": "Meter"})
    assert expense.logged_by == "David Chen"
    assert expense.amount == 42.5
    assert domain.get_project("P-2024-001").expenses[0].id == expense.id

    bad = projects.add_expense("P-2024-001", {"amount": "n/a"})
    assert bad.amount == 0.0
    assert bad.category == "Other"


def test_report_and_resolve_incident(projects, auth, domain):
    auth.login("2")
    with pytest.raises(FormValidationError, match="Please describe the incident"):
        projects.report_incident("P-2024-002", {"description": ""})

    incident = projects.report_incident("P-2024-002", {"description": "Door frame chipped", "type": "Damage"})
    assert incident.reported_by == "2"
    projects.resolve_incident("P-2024-002", incident.id)
    assert domain.get_project("P-2024-002").incidents[0].status == IncidentStatus.RESOLVED
