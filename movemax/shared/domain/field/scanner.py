"""Barcode/name lookup for the field scanner and shift-timer formatting."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Literal, Optional, Sequence

from movemax.shared.domain.models import Project, StoragePlan

ScanKind = Literal["crate", "asset"]

# Statuses that disable the "Load" / "Complete" actions on a scan result
LOADED_STATUSES = ("Moved", "In Transit", "Delivered", "Unpacked")
COMPLETED_STATUSES = ("Delivered", "Unpacked")


@dataclass(frozen=True)
class ScanResult:
    kind: ScanKind
    id: str
    name: str
    origin_label: str
    destination_label: str
    status: str
    description: str
    project_id: str

    @property
    def load_status(self) -> str:
        return "Moved" if self.kind == "crate" else "In Transit"

    @property
    def complete_status(self) -> str:
        return "Unpacked" if self.kind == "crate" else "Delivered"

    @property
    def can_load(self) -> bool:
        return self.status not in LOADED_STATUSES

    @property
    def can_complete(self) -> bool:
        return self.status not in COMPLETED_STATUSES


def find_scan_target(projects: Sequence[Project], query: str) -> Optional[ScanResult]:
    """Case-insensitive substring lookup, project by project.

    Within a project, crates (id, barcode, name) are checked before storage
    units (id, name). The first hit wins.
    """
    q = query.strip().lower()
    if not q:
        return None

    for project in projects:
        units = project.storage_plan.identified_units if project.storage_plan else []

        crate = next(
            (c for c in project.crates if q in c.id.lower() or q in c.barcode.lower() or q in c.name.lower()),
            None,
        )
        if crate is not None:
            source = next((u for u in units if u.id == crate.source_unit_id), None)
            zone = next((z for z in project.destination_zones if z.id == crate.destination_zone_id), None)
            return ScanResult(
                kind="crate",
                id=crate.id,
                name=crate.name,
                origin_label=f"{source.name} ({source.location})" if source else "Unknown Origin",
                destination_label=f"{zone.name} (Flr {zone.floor})" if zone else "Unassigned",
                status=crate.status,
                description=f"Barcode: {crate.barcode}",
                project_id=project.id,
            )

        unit = next((u for u in units if q in u.id.lower() or q in u.name.lower()), None)
        if unit is not None:
            return ScanResult(
                kind="asset",
                id=unit.id,
                name=unit.name,
                origin_label=unit.location or "Unknown",
                destination_label=unit.mapped_to or "Unassigned",
                status=unit.status or "Pending",
                description=unit.type,
                project_id=project.id,
            )
    return None


def apply_scan_status(project: Project, result: ScanResult, status: str) -> Project:
    """Copy of ``project`` with the scanned crate or unit set to ``status``."""
    if result.kind == "crate":
        crates = [c.model_copy(update={"status": status}) if c.id == result.id else c for c in project.crates]
        return project.model_copy(update={"crates": crates})

    plan = project.storage_plan or StoragePlan()
    units = [u.model_copy(update={"status": status}) if u.id == result.id else u for u in plan.identified_units]
    return project.model_copy(update={"storage_plan": plan.model_copy(update={"identified_units": units})})


def format_elapsed(elapsed: timedelta) -> str:
    """HH:MM:SS; hours are not wrapped at 24."""
    total = max(0, int(elapsed.total_seconds()))
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
