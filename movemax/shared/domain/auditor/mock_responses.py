"""Canned auditor results returned when no API key is configured."""

from datetime import datetime, timezone
from typing import List, Sequence

from movemax.shared.domain.models import (
    ContainerScanResult,
    DamageAssessment,
    DestinationZone,
    DetectedItem,
    Disposition,
    IncidentSeverity,
    InventoryItem,
    StorageUnit,
)


def _stamp() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def move_summary(inventory: Sequence[InventoryItem]) -> str:
    total = sum(item.quantity for item in inventory)
    return (
        f"Project Scope Analysis: This relocation involves {total} tagged assets. "
        "Critical handling required for executive furniture and IT infrastructure."
    )


def destination_zones() -> List[DestinationZone]:
    names = ["Room 301 (Exec)", "Room 302", "Room 303", "Conference A", "Open Bullpen North"]
    return [DestinationZone(id=f"z{i}", name=name, floor="3") for i, name in enumerate(names, start=1)]


def floorplan_units() -> List[StorageUnit]:
    stamp = _stamp()
    return [
        StorageUnit(
            id=f"fp-{stamp}-1",
            name="Corner Desk Cluster",
            type="Desk",
            location="Room 204",
            estimated_crates=6,
            detected_from_image=True,
        ),
        StorageUnit(
            id=f"fp-{stamp}-2",
            name="Filing Bank (6 Units)",
            type="Cabinet",
            location="Hallway B",
            estimated_crates=12,
            detected_from_image=True,
        ),
    ]


def drawer_scan() -> ContainerScanResult:
    return ContainerScanResult(
        id=f"scan-{_stamp()}",
        timestamp=datetime.now(timezone.utc).isoformat(),
        confidence=0.95,
        items=[
            DetectedItem(type="Manila Folder", count=35, suggested_disposition=Disposition.DIGITIZE),
            DetectedItem(type="Binder (3-ring)", count=4, suggested_disposition=Disposition.RECYCLE),
            DetectedItem(type="Office Supplies", count=1, suggested_disposition=Disposition.KEEP),
        ],
    )


def storage_image_units() -> List[StorageUnit]:
    return [
        StorageUnit(
            id="mock-1",
            name="Herman Miller Aeron Chair",
            type="Chair",
            detected_from_image=True,
            estimated_crates=0,
            location="Detected Zone",
        )
    ]


def damage_assessment() -> DamageAssessment:
    return DamageAssessment(
        description="AI Analysis: Visible scratch on surface. No structural compromise detected.",
        severity=IncidentSeverity.LOW,
    )
