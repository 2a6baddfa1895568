"""Seed collections used on first run and by a full store reset.

Every factory builds fresh model instances, so callers may keep or mutate
what they receive without affecting later resets. Dates are relative to
``today`` (defaults to the current local date).
"""

from __future__ import annotations

import random
from datetime import date, timedelta
from typing import List, Optional

from .models import (
    AppSettings,
    MoveStatus,
    Project,
    Role,
    StaffMember,
    Vehicle,
    WarehouseVault,
)

# Minimal destination floorplan drawn as an inline SVG
DESTINATION_FLOORPLAN_SVG = (
    "data:image/svg+xml;base64,PHN2ZyB3aWR0aD0iODAwIiBoZWlnaHQ9IjYwMCIgeG1sbnM9Imh0dHA6Ly93d3cudzMub3Jn"
    "LzIwMDAvc3ZnIj48cmVjdCB4PSI1MCIgeT0iNTAiIHdpZHRoPSI3MDAiIGhlaWdodD0iNTAwIiBmaWxsPSJub25lIiBzdHJva2U9"
    "IiMzMzQxNTUiIHN0cm9rZS13aWR0aD0iNCIvPjwvc3ZnPg=="
)

WAREHOUSE_VAULT_COUNT = 60
WAREHOUSE_SEED = 2024


def _relative(today: Optional[date], days: int) -> str:
    base = today or date.today()
    return (base + timedelta(days=days)).isoformat()


def _full_access() -> dict:
    return {area: {"view": True, "edit": True, "delete": True}
            for area in ("profiles", "projects", "dispatch", "settings")}


def default_settings() -> AppSettings:
    return AppSettings()


def initial_vehicles() -> List[Vehicle]:
    return [
        Vehicle(id="v1", name="Truck 101", type="26ft Box", volume_capacity=1700, license_plate="MV-8821"),
        Vehicle(id="v2", name="Truck 102", type="26ft Box", volume_capacity=1700, license_plate="MV-8822"),
        Vehicle(id="v3", name="Trailer 500", type="53ft Trailer", volume_capacity=3800, license_plate="TR-9901"),
        Vehicle(id="v4", name="Van 05", type="Van", volume_capacity=400, license_plate="VN-4432"),
    ]


def initial_staff() -> List[StaffMember]:
    no_access = {"view": False, "edit": False, "delete": False}
    return [
        StaffMember(
            id="1", name="Sarah Jenkins", email="sarah@movemax.com", phone="555-0101",
            role=Role.ADMIN, hourly_rate=65, permissions=_full_access(),
        ),
        StaffMember(
            id="2", name="David Chen", email="david@movemax.com", phone="555-0102",
            role=Role.PROJECT_MANAGER, hourly_rate=50,
            permissions={
                "profiles": {"view": True, "edit": True, "delete": False},
                "projects": {"view": True, "edit": True, "delete": True},
                "dispatch": {"view": True, "edit": True, "delete": False},
                "settings": dict(no_access),
            },
        ),
        StaffMember(
            id="3", name="Mike Ross", email="mike@movemax.com", phone="555-0103",
            role=Role.SITE_SUPERVISOR, hourly_rate=35,
            permissions={
                "profiles": {"view": True, "edit": False, "delete": False},
                "projects": {"view": True, "edit": True, "delete": False},
                "dispatch": {"view": True, "edit": False, "delete": False},
                "settings": dict(no_access),
            },
        ),
        StaffMember(
            id="4", name="Marcus Johnson", email="marcus@movemax.com", phone="555-0104",
            role=Role.MOVER, hourly_rate=25,
            permissions={
                "profiles": {"view": True, "edit": False, "delete": False},
                "projects": {"view": True, "edit": True, "delete": False},
                "dispatch": {"view": True, "edit": False, "delete": False},
                "settings": dict(no_access),
            },
        ),
    ]


def _techcorp(today: Optional[date]) -> Project:
    def d(days: int) -> str:
        return _relative(today, days)

    return Project.model_validate({
        "id": "P-2024-001",
        "customerName": "TechCorp HQ Relocation",
        "origin": "500 Innovation Dr, San Francisco, CA",
        "destination": "100 Future Blvd, Austin, TX",
        "date": d(0),
        "status": MoveStatus.IN_PROGRESS,
        "value": 145000.00,
        "assignedCrewIds": ["2", "3"],
        "contactName": "Jennifer Wu",
        "contactEmail": "j.wu@techcorp.com",
        "contactPhone": "(415) 555-9090",
        "projectedSavings": {"sqFt": 5200, "recycledWeight": 12500},
        "retainAuditImages": False,
        "departments": [
            {"id": "dept-1", "name": "Executive Wing", "moveDate": d(-2), "status": "Completed",
             "headCount": 15, "budget": 25000, "actualSpend": 22400,
             "contactName": "James Sterling", "contactEmail": "j.sterling@techcorp.com",
             "contactPhone": "(415) 555-9001"},
            {"id": "dept-2", "name": "IT Infrastructure", "moveDate": d(0), "status": "In Progress",
             "headCount": 8, "budget": 45000, "actualSpend": 12000,
             "contactName": "Ravi Patel", "contactEmail": "r.patel@techcorp.com",
             "contactPhone": "(415) 555-9002"},
            {"id": "dept-3", "name": "Open Office (Sales)", "moveDate": d(14), "status": "Pending",
             "headCount": 120, "budget": 75000, "actualSpend": 0,
             "contactName": "Lisa Monroe", "contactEmail": "l.monroe@techcorp.com",
             "contactPhone": "(415) 555-9003"},
        ],
        "destinationZones": [
            {"id": "z1", "name": "Exec Suite 301", "floor": "3", "capacity": 1, "coordinates": {"x": 80, "y": 20}},
            {"id": "z2", "name": "Server Room B", "floor": "1", "capacity": 0, "coordinates": {"x": 15, "y": 80}},
            {"id": "z3", "name": "Open Sales Floor", "floor": "2", "capacity": 120, "coordinates": {"x": 50, "y": 50}},
            {"id": "z4", "name": "Conf Room Alpha", "floor": "2", "capacity": 12, "coordinates": {"x": 25, "y": 25}},
        ],
        "inventory": [
            {"id": "i1", "name": "Exec Desk (Mahogany)", "quantity": 4, "volume": 120, "isFragile": True,
             "room": "Executive Wing", "departmentId": "dept-1", "disposition": "Resell",
             "condition": "Good", "resaleValue": 850, "disposalCost": 0},
            {"id": "i2", "name": "Herman Miller Chairs", "quantity": 120, "volume": 600, "isFragile": False,
             "room": "Open Office", "departmentId": "dept-3", "disposition": "Keep",
             "condition": "Good", "resaleValue": 0, "disposalCost": 0},
            {"id": "i3", "name": "Server Racks (42U)", "quantity": 8, "volume": 320, "isFragile": True,
             "room": "Server Room", "departmentId": "dept-2", "loadId": "load-1", "disposition": "Keep",
             "condition": "Good", "resaleValue": 0, "disposalCost": 0},
            {"id": "i4", "name": "Workstations (Dual Monitor)", "quantity": 120, "volume": 1200,
             "isFragile": True, "room": "Open Office", "departmentId": "dept-3",
             "disposition": "Recycle", "condition": "Poor", "resaleValue": 50, "disposalCost": 15},
            {"id": "i5", "name": "Conf Table (Glass)", "quantity": 1, "volume": 100, "isFragile": True,
             "room": "Boardroom", "departmentId": "dept-1", "disposition": "Donate",
             "condition": "Fair", "resaleValue": 0, "disposalCost": 50},
        ],
        "crates": [
            {"id": "crate-101", "name": "Crate #101", "barcode": "C-101", "sourceUnitId": "mock-1",
             "sourceSubUnitId": "s1", "destinationZoneId": "z1", "status": "Packed"},
        ],
        "tasks": [
            {"id": "t1", "title": "Disconnect Server Room Power", "description": "Coordinate with IT Director",
             "status": "Done", "assignedTo": "2", "departmentId": "dept-2"},
            {"id": "t2", "title": "Pack Executive Art", "description": "Use crate #44",
             "status": "Done", "assignedTo": "3", "departmentId": "dept-1"},
            {"id": "t3", "title": "Label Sales Monitors", "description": "Color code Red",
             "status": "Todo", "departmentId": "dept-3"},
        ],
        "phases": [
            {"id": "ph1", "name": "Exec: Crate Delivery", "date": d(-4), "status": "Completed",
             "assignedCrewCount": 2, "departmentId": "dept-1"},
            {"id": "ph2", "name": "Exec: Move Day", "date": d(-2), "status": "Completed",
             "assignedCrewCount": 4, "departmentId": "dept-1"},
            {"id": "ph3", "name": "IT: Server Decom", "date": d(-1), "status": "Completed",
             "assignedCrewCount": 4, "departmentId": "dept-2"},
            {"id": "ph4", "name": "IT: Transport & Install", "date": d(0), "status": "In Progress",
             "assignedCrewCount": 8, "departmentId": "dept-2"},
            {"id": "ph5", "name": "Sales: Packing Material Drop", "date": d(10), "status": "Pending",
             "assignedCrewCount": 2, "departmentId": "dept-3"},
            {"id": "ph6", "name": "Sales: Main Move", "date": d(14), "status": "Pending",
             "assignedCrewCount": 20, "departmentId": "dept-3"},
        ],
        "incidents": [
            {"id": "inc-1", "projectId": "P-2024-001", "type": "Damage",
             "description": "Scuff on hallway wall during server rack transport.",
             "severity": "Low", "status": "Open", "reportedBy": "3", "reporterName": "Mike Ross",
             "timestamp": d(0)},
        ],
        "loads": [
            {"id": "load-1", "vehicleId": "v1", "name": "Load 1 - Server Equip", "status": "Loading",
             "itemsCount": 8, "currentVolume": 320},
        ],
        "storagePlan": {
            "identifiedUnits": [
                {"id": "mock-1", "name": "Lateral File Cabinet", "type": "Cabinet", "location": "Room 102",
                 "mappedTo": "Exec Suite 301", "estimatedCrates": 4, "coordinates": {"x": 20, "y": 35},
                 "subUnits": [
                     {"id": "s1", "type": "drawer", "label": "Drawer 1"},
                     {"id": "s2", "type": "drawer", "label": "Drawer 2"},
                 ]},
                {"id": "mock-2", "name": "Reception Desk", "type": "Desk", "location": "Lobby",
                 "mappedTo": "Main Entry", "estimatedCrates": 2, "coordinates": {"x": 65, "y": 70},
                 "subUnits": []},
            ],
            "mappings": [],
        },
        "destinationPlan": {"floorplanImage": DESTINATION_FLOORPLAN_SVG},
        "documents": [
            {"id": "doc-1", "name": "Master Service Agreement.pdf", "type": "Contract", "url": "#",
             "uploadedBy": "Sarah Jenkins", "uploadedAt": d(-10), "size": "2.4 MB"},
            {"id": "doc-2", "name": "Certificate of Insurance.pdf", "type": "PDF", "url": "#",
             "uploadedBy": "Sarah Jenkins", "uploadedAt": d(-10), "size": "1.1 MB"},
            {"id": "doc-3", "name": "New Office Blueprint.png", "type": "Image", "url": "#",
             "uploadedBy": "David Chen", "uploadedAt": d(-5), "size": "8.5 MB"},
        ],
        "expenses": [
            {"id": "exp-1", "projectId": "P-2024-001", "category": "Materials", "amount": 1250.50,
             "description": "100x Eco Crates", "date": d(-5), "loggedBy": "Sarah Jenkins"},
            {"id": "exp-2", "projectId": "P-2024-001", "category": "Fuel", "amount": 185.00,
             "description": "Diesel for Truck 101", "date": d(0), "loggedBy": "Mike Ross"},
        ],
        "timeEntries": [
            {"id": "te-1", "staffId": "3", "staffName": "Mike Ross", "projectId": "P-2024-001",
             "startTime": d(-2) + "T08:00:00", "endTime": d(-2) + "T16:00:00",
             "durationHours": 8, "cost": 280},
            {"id": "te-2", "staffId": "4", "staffName": "Marcus Johnson", "projectId": "P-2024-001",
             "startTime": d(-2) + "T08:00:00", "endTime": d(-2) + "T16:00:00",
             "durationHours": 8, "cost": 200},
        ],
    })


def _bare_project(project_id: str, customer: str, origin: str, destination: str,
                  when: str, status: MoveStatus, value: float) -> Project:
    return Project(
        id=project_id,
        customer_name=customer,
        origin=origin,
        destination=destination,
        date=when,
        status=status,
        value=value,
        projected_savings={"sq_ft": 0, "recycled_weight": 0},
        retain_audit_images=False,
    )


def initial_projects(today: Optional[date] = None) -> List[Project]:
    law_firm = Project.model_validate({
        "id": "P-2024-002",
        "customerName": "Law Firm Partners",
        "origin": "12 Wall St, NY",
        "destination": "88 Madison Ave, NY",
        "date": _relative(today, 1),
        "status": MoveStatus.BOOKED,
        "value": 12500.00,
        "contactName": "Robert Pearson",
        "contactEmail": "r.pearson@lfp.law",
        "contactPhone": "(212) 555-0011",
        "assignedCrewIds": ["3"],
        "projectedSavings": {"sqFt": 0, "recycledWeight": 0},
        "retainAuditImages": True,
        "departments": [
            {"id": "d1", "name": "Main Office", "moveDate": _relative(today, 1), "status": "Pending",
             "budget": 12000, "actualSpend": 500, "contactName": "Admin Desk",
             "contactEmail": "admin@lfp.law"},
        ],
        "inventory": [
            {"id": "i4", "name": "File Cabinets (Lateral)", "quantity": 12, "volume": 200,
             "isFragile": False, "room": "Archives", "departmentId": "d1",
             "disposition": "Recycle", "condition": "Poor"},
        ],
        "tasks": [
            {"id": "t3", "title": "Secure Parking Permit", "description": "Need 40ft spot",
             "status": "Todo", "departmentId": "d1"},
        ],
        "phases": [
            {"id": "ph1", "name": "File Packing", "date": _relative(today, 0), "status": "Pending",
             "assignedCrewCount": 4, "departmentId": "d1"},
            {"id": "ph2", "name": "Furniture Move", "date": _relative(today, 1), "status": "Pending",
             "assignedCrewCount": 6, "departmentId": "d1"},
        ],
    })
    return [
        _techcorp(today),
        law_firm,
        _bare_project("P-2024-003", "StartUp Inc.", "WeWork, Seattle", "Private Office, Seattle",
                      _relative(today, 3), MoveStatus.PENDING, 5200.00),
        _bare_project("P-2024-004", "Global Logistics Branch", "Warehouse A", "Warehouse B",
                      _relative(today, 1), MoveStatus.BOOKED, 8500.00),
    ]


def initial_warehouse(today: Optional[date] = None) -> List[WarehouseVault]:
    """Sixty vaults, roughly 40% occupied, laid out ten per row."""
    rng = random.Random(WAREHOUSE_SEED)
    vaults: List[WarehouseVault] = []
    for i in range(1, WAREHOUSE_VAULT_COUNT + 1):
        occupied = rng.random() > 0.6
        vaults.append(WarehouseVault(
            id=f"V-{100 + i}",
            status="Occupied" if occupied else "Empty",
            location_code=f"Row {-(-i // 10)}-{i % 10 or 10}",
            project_id="P-2024-001" if occupied else None,
            client_name="TechCorp HQ Relocation" if occupied else None,
            contents_description="Office Furniture Storage" if occupied else None,
            updated_at=_relative(today, -5 if occupied else -20),
        ))
    return vaults
