"""Domain records for relocation projects, staff and their nested collections.

Every model serialises with camelCase aliases so the persisted JSON keeps the
same layout the browser build wrote to local storage. Nested project
collections default to empty lists, so a record persisted without e.g.
``timeEntries`` still reads back as an empty sequence.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Base for every persisted record."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ============================================================================
# Enumerations
# ============================================================================


class MoveStatus(str, Enum):
    PENDING = "Pending"
    QUOTED = "Quoted"
    BOOKED = "Booked"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Role(str, Enum):
    ADMIN = "Admin"
    PROJECT_MANAGER = "Project Manager"
    SITE_SUPERVISOR = "Site Supervisor"
    MOVER = "Mover"


class StaffStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class IncidentStatus(str, Enum):
    OPEN = "Open"
    INVESTIGATING = "Investigating"
    RESOLVED = "Resolved"


class IncidentSeverity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class Disposition(str, Enum):
    KEEP = "Keep"
    RESELL = "Resell"
    DONATE = "Donate"
    RECYCLE = "Recycle"
    TRASH = "Trash"
    DIGITIZE = "Digitize"


AssetCondition = Literal["New", "Good", "Fair", "Poor", "Damaged"]
ProcessStatus = Literal["Pending", "Packed", "Moved", "Unpacked"]
WorkStatus = Literal["Pending", "In Progress", "Completed"]
TaskStatus = Literal["Todo", "In Progress", "Done"]
UnitStatus = Literal["Pending", "In Transit", "Delivered"]
LoadStatus = Literal["Planned", "Loading", "In Transit", "Unloading", "Complete"]
ExpenseCategory = Literal["Fuel", "Materials", "Parking", "Food", "Permits", "Other"]
DocumentType = Literal["PDF", "Image", "Spreadsheet", "Contract", "Other"]
PermissionAction = Literal["view", "edit", "delete"]

PERMISSION_AREAS = ("profiles", "projects", "dispatch", "settings")
PERMISSION_ACTIONS = ("view", "edit", "delete")


# ============================================================================
# Project nested records
# ============================================================================


class Coordinates(DomainModel):
    """Percent position (0-100) on a floorplan image."""
    x: float
    y: float


class DestinationZone(DomainModel):
    id: str
    name: str
    floor: Optional[str] = None
    capacity: Optional[float] = None
    coordinates: Optional[Coordinates] = None


class MoveDepartment(DomainModel):
    id: str
    name: str
    move_date: str
    status: WorkStatus = "Pending"
    head_count: Optional[int] = None
    budget: Optional[float] = None
    actual_spend: Optional[float] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None


class InventoryItem(DomainModel):
    id: str
    name: str
    quantity: int
    volume: float
    is_fragile: bool = False
    room: str = ""
    department_id: Optional[str] = None
    load_id: Optional[str] = None
    crate_id: Optional[str] = None
    status: Optional[Literal["Pending", "Packed", "Loaded", "Delivered"]] = None
    storage_unit_id: Optional[str] = None
    storage_sub_unit_id: Optional[str] = None
    disposition: Optional[Disposition] = None
    condition: Optional[AssetCondition] = None
    resale_value: Optional[float] = None
    disposal_cost: Optional[float] = None
    content_type: Optional[Literal["Files", "Supplies", "Tech", "Personal", "Furniture", "Other"]] = None
    audit_image_url: Optional[str] = None


class MoveCrate(DomainModel):
    id: str
    name: str
    barcode: str
    source_unit_id: Optional[str] = None
    source_sub_unit_id: Optional[str] = None
    destination_zone_id: Optional[str] = None
    destination_unit_id: Optional[str] = None
    destination_sub_unit_id: Optional[str] = None
    status: ProcessStatus = "Pending"


class StorageSubUnit(DomainModel):
    id: str
    type: Literal["drawer", "shelf", "cabinet_space"]
    label: str


class DetectedItem(DomainModel):
    type: str
    count: int
    suggested_disposition: Optional[Disposition] = None


class ContainerScanResult(DomainModel):
    id: str
    timestamp: str
    items: List[DetectedItem] = Field(default_factory=list)
    confidence: float = 0.0


class StorageUnit(DomainModel):
    id: str
    name: str
    type: str
    sub_units: List[StorageSubUnit] = Field(default_factory=list)
    detected_from_image: Optional[bool] = None
    estimated_crates: Optional[float] = None
    scans: List[ContainerScanResult] = Field(default_factory=list)
    location: Optional[str] = None
    mapped_to: Optional[str] = None
    status: Optional[UnitStatus] = None
    department_id: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    asset_tag: Optional[str] = None
    condition: Optional[AssetCondition] = None
    suggested_disposition: Optional[Disposition] = None


class ContentMapping(DomainModel):
    source_id: str
    source_label: str
    destination_label: str
    status: Literal["planned", "packed", "moved"] = "planned"


class StoragePlan(DomainModel):
    identified_units: List[StorageUnit] = Field(default_factory=list)
    mappings: List[ContentMapping] = Field(default_factory=list)
    floorplan_image: Optional[str] = None


class DestinationPlan(DomainModel):
    floorplan_image: Optional[str] = None


class Task(DomainModel):
    id: str
    title: str
    description: str = ""
    assigned_to: Optional[str] = None
    status: TaskStatus = "Todo"
    is_ai_generated: Optional[bool] = None
    proof_of_work: Optional[str] = None
    department_id: Optional[str] = None


class ProjectPhase(DomainModel):
    id: str
    name: str
    date: str
    status: WorkStatus = "Pending"
    assigned_crew_count: Optional[int] = None
    department_id: Optional[str] = None


class Incident(DomainModel):
    id: str
    project_id: str
    type: str
    description: str
    severity: IncidentSeverity = IncidentSeverity.LOW
    status: IncidentStatus = IncidentStatus.OPEN
    reported_by: str
    reporter_name: Optional[str] = None
    timestamp: str
    photo_url: Optional[str] = None
    ai_analysis: Optional[str] = None


class Vehicle(DomainModel):
    id: str
    name: str
    type: Literal["26ft Box", "53ft Trailer", "Van"]
    volume_capacity: float
    license_plate: Optional[str] = None


class MoveLoad(DomainModel):
    id: str
    vehicle_id: str
    name: str
    seal_number: Optional[str] = None
    driver_name: Optional[str] = None
    status: LoadStatus = "Planned"
    items_count: int = 0
    current_volume: float = 0
    signature: Optional[str] = None
    signed_at: Optional[str] = None


class MoveDocument(DomainModel):
    id: str
    name: str
    type: DocumentType
    url: str
    uploaded_by: str
    uploaded_at: str
    size: str


class TimeEntry(DomainModel):
    id: str
    staff_id: str
    staff_name: str
    project_id: str
    start_time: str
    end_time: Optional[str] = None
    duration_hours: Optional[float] = None
    cost: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None


class Expense(DomainModel):
    id: str
    project_id: str
    category: ExpenseCategory = "Other"
    amount: float
    description: str = ""
    date: str
    logged_by: str


class ProjectedSavings(DomainModel):
    sq_ft: float = 0
    recycled_weight: float = 0


# ============================================================================
# Top-level records
# ============================================================================


class Project(DomainModel):
    """One relocation engagement ("move")."""
    id: str
    customer_name: str
    origin: str
    destination: str
    date: str
    status: MoveStatus = MoveStatus.PENDING
    value: float = 0
    assigned_crew_ids: List[str] = Field(default_factory=list)
    notes: Optional[str] = None

    inventory: List[InventoryItem] = Field(default_factory=list)
    departments: List[MoveDepartment] = Field(default_factory=list)
    destination_zones: List[DestinationZone] = Field(default_factory=list)
    storage_plan: Optional[StoragePlan] = None
    destination_plan: Optional[DestinationPlan] = None
    crates: List[MoveCrate] = Field(default_factory=list)
    tasks: List[Task] = Field(default_factory=list)
    phases: List[ProjectPhase] = Field(default_factory=list)
    incidents: List[Incident] = Field(default_factory=list)
    loads: List[MoveLoad] = Field(default_factory=list)
    documents: List[MoveDocument] = Field(default_factory=list)
    expenses: List[Expense] = Field(default_factory=list)
    time_entries: List[TimeEntry] = Field(default_factory=list)

    projected_savings: Optional[ProjectedSavings] = None
    liquidation_total: Optional[float] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    retain_audit_images: Optional[bool] = None


class Permission(DomainModel):
    view: bool = False
    edit: bool = False
    delete: bool = False


class StaffMember(DomainModel):
    id: str
    name: str
    email: str = ""
    phone: str = ""
    role: Role = Role.MOVER
    avatar_url: Optional[str] = None
    permissions: Dict[str, Permission] = Field(default_factory=dict)
    status: StaffStatus = StaffStatus.ACTIVE
    hourly_rate: Optional[float] = None


class ActivityLogEntry(DomainModel):
    id: str
    project_id: str
    user_id: str
    user_name: str
    action: str
    timestamp: str
    details: Optional[str] = None


class IntegrationSettings(DomainModel):
    slack: bool = False
    google_calendar: bool = True
    quickbooks: bool = False


class NotificationSettings(DomainModel):
    email_daily_digest: bool = True
    email_incidents: bool = True
    sms_critical: bool = True


class AppSettings(DomainModel):
    company_name: str = "MoveMax Logistics"
    support_email: str = "support@movemax.com"
    weight_unit: Literal["lbs", "kg"] = "lbs"
    distance_unit: Literal["mi", "km"] = "mi"
    currency: Literal["USD", "EUR", "GBP"] = "USD"
    integrations: IntegrationSettings = Field(default_factory=IntegrationSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)


class WarehouseVault(DomainModel):
    id: str
    status: Literal["Occupied", "Empty"]
    location_code: str
    project_id: Optional[str] = None
    client_name: Optional[str] = None
    contents_description: Optional[str] = None
    updated_at: str


class DamageAssessment(DomainModel):
    description: str
    severity: IncidentSeverity = IncidentSeverity.MEDIUM
