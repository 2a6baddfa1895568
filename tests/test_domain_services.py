from __future__ import annotations

import random
from datetime import date, timedelta, timezone

from movemax.shared.domain import seed
from movemax.shared.domain.dispatch import shift_week
from movemax.shared.domain.field import format_elapsed
from movemax.shared.domain.models import MoveStatus, WarehouseVault
from movemax.shared.domain.projects import build_new_project, crate_label, new_project_id
from movemax.shared.domain.reporting import dashboard_metrics, global_search
from movemax.shared.domain.reporting.metrics import DashboardMetrics
from movemax.shared.domain.timestamps import parse_timestamp
from movemax.shared.domain.warehouse import WarehouseService

TODAY = date(2024, 6, 10)


def _vault(vault_id: str, occupied: bool, location: str = "Row 1-1") -> WarehouseVault:
    return WarehouseVault(
        id=vault_id,
        status="Occupied" if occupied else "Empty",
        location_code=location,
        client_name="Acme" if occupied else None,
        updated_at="2024-06-01",
    )


# --- Warehouse ---


def test_seeded_warehouse_is_deterministic():
    first = WarehouseService(today=lambda: TODAY)
    second = WarehouseService(today=lambda: TODAY)
    assert len(first.vaults) == 60
    assert [v.status for v in first.vaults] == [v.status for v in second.vaults]
    assert first.occupied_count + first.available == 60
    assert first.vaults[10].location_code == "Row 2-1"
    assert first.vaults[9].location_code == "Row 1-10"


def test_utilization_rounds_half_up():
    vaults = [_vault(f"V-{i}", occupied=(i == 0)) for i in range(8)]
    assert WarehouseService(vaults).utilization == 13
    assert WarehouseService([]).utilization == 0


def test_assign_and_vacate(domain):
    service = WarehouseService([_vault("V-101", False), _vault("V-102", True)], today=lambda: TODAY)

    vault = service.assign("V-101", "P-2024-002", domain.projects)
    assert vault.client_name == "Law Firm Partners"
    assert vault.contents_description == "Assigned Project Storage"
    assert vault.updated_at == "2024-06-10"
    assert service.utilization == 100

    orphan = service.assign("V-101", "P-404", domain.projects)
    assert orphan.client_name == "Unknown Client"

    emptied = service.vacate("V-102")
    assert emptied.status == "Empty"
    assert emptied.client_name is None
    assert service.available == 1
    assert service.assign("V-999", "P-2024-002", domain.projects) is None


def test_warehouse_search():
    service = WarehouseService([_vault("V-101", True, "Row 1-1"), _vault("V-102", False, "Row 2-4")])
    assert [v.id for v in service.search("acme")] == ["V-101"]
    assert [v.id for v in service.search("row 2")] == ["V-102"]
    assert [v.id for v in service.search("v-10")] == ["V-101", "V-102"]


# --- Dashboard ---


def test_dashboard_metrics_over_seed():
    metrics = dashboard_metrics(seed.initial_projects(TODAY), TODAY)
    assert metrics.total_sq_ft == 5200
    assert metrics.total_recycled == 12500
    assert metrics.active_projects == 3
    assert metrics.total_revenue == 171200
    assert metrics.estimated_savings == 18200

    assert [b.name for b in metrics.chart] == ["Dec", "Jan", "Feb", "Mar", "Apr", "May", "Jun"]
    june = metrics.chart[-1]
    assert june.moves == 4
    assert june.revenue == 171200


def test_chart_ignores_months_outside_window():
    projects = seed.initial_projects(TODAY)
    projects[2] = projects[2].model_copy(update={"date": "2024-09-01"})
    metrics = dashboard_metrics(projects, TODAY)
    assert sum(b.moves for b in metrics.chart) == 3


def test_estimated_savings_rounds_half_up():
    assert DashboardMetrics(total_sq_ft=1, total_recycled=0, active_projects=0, total_revenue=0).estimated_savings == 4


# --- Search ---


def test_global_search_kinds():
    projects = seed.initial_projects(TODAY)
    staff = seed.initial_staff()

    project_hits = global_search("law firm", projects, staff)
    assert [(h.kind, h.id) for h in project_hits] == [("Project", "P-2024-002")]

    asset = global_search("herman", projects, staff)[0]
    assert asset.kind == "Asset"
    assert asset.subtitle == "TechCorp HQ Relocation • Open Office"

    person = global_search("sarah@", projects, staff)[0]
    assert (person.kind, person.subtitle, person.link) == ("Staff", "Admin", "/profiles")


def test_global_search_limit_and_blank_query():
    projects = seed.initial_projects(TODAY)
    staff = seed.initial_staff()
    assert len(global_search("e", projects, staff)) == 6
    assert len(global_search("e", projects, staff, limit=2)) == 2
    assert global_search("  ", projects, staff) == []


# --- Small helpers ---


def test_crate_labels_are_zero_padded():
    assert crate_label("CR-", 7) == "CR-007"
    assert crate_label("A", 1234) == "A1234"


def test_new_project_defaults():
    project_id = new_project_id(random.Random(3))
    assert project_id.startswith("P-2024-")
    assert 1000 <= int(project_id.rsplit("-", 1)[1]) <= 9999

    project = build_new_project(
        {"customer_name": " Acme ", "origin": "A", "destination": "B", "date": "2024-07-01"}, project_id
    )
    assert project.customer_name == "Acme"
    assert project.status == MoveStatus.PENDING
    assert project.value == 0
    assert project.inventory == []


def test_format_elapsed():
    assert format_elapsed(timedelta(hours=25, seconds=3)) == "25:00:03"
    assert format_elapsed(timedelta(seconds=-5)) == "00:00:00"


def test_shift_week():
    assert shift_week(TODAY, -1) == date(2024, 6, 3)


def test_parse_timestamp_treats_naive_values_as_utc():
    assert parse_timestamp("2024-06-08T08:00:00").tzinfo == timezone.utc
    assert parse_timestamp("2024-06-08T08:00:00+02:00").utcoffset() == timedelta(hours=2)
