"""Domain Store: the single owner of project, staff, log and settings state.

All mutations are synchronous and follow replace-by-id semantics. A mutation
that names an unknown id is a silent no-op: nothing changes and nothing is
written to storage. Collections are replaced wholesale on every change, so a
list obtained from a property is never modified afterwards.

Persistence uses four independent keys. Each key hydrates on its own and
falls back to the seed value when absent or invalid; after hydration every
effective change rewrites all four keys.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from movemax.shared.domain import seed
from movemax.shared.domain.models import (
    ActivityLogEntry,
    AppSettings,
    Expense,
    Incident,
    IncidentStatus,
    Project,
    StaffMember,
    TimeEntry,
)
from movemax.shared.domain.timestamps import parse_timestamp, utc_now
from movemax.shared.infrastructure.persistence.local_storage import LocalStorage

logger = logging.getLogger(__name__)

STORAGE_COLLECTIONS = ("moves", "staff", "logs", "settings")

_PROJECTS = TypeAdapter(List[Project])
_STAFF = TypeAdapter(List[StaffMember])
_LOGS = TypeAdapter(List[ActivityLogEntry])
_SETTINGS = TypeAdapter(AppSettings)


class DomainStore:
    """Application state container with local-storage mirroring.

    Usage:
        store = DomainStore(LocalStorage("data/movemax.duckdb"))
        store.clock_in("4", "P-2024-001")
        store.clock_out("4")
    """

    def __init__(
        self,
        storage: LocalStorage,
        key_prefix: str = "movemax",
        clock: Optional[Callable[[], datetime]] = None,
        on_reload: Optional[Callable[[], None]] = None,
        today: Optional[date] = None,
    ) -> None:
        """Create the store and hydrate it from storage.

        Args:
            storage: Key/value storage the four collections are mirrored to
            key_prefix: Prefix of the persisted keys (``<prefix>_moves`` ...)
            clock: Source of "now"; must return timezone-aware datetimes
            on_reload: Called after ``reset_store`` to rebuild the application
            today: Anchor date for seed data (defaults to the current date)
        """
        self.storage = storage
        self.keys: Dict[str, str] = {name: f"{key_prefix}_{name}" for name in STORAGE_COLLECTIONS}
        self._clock = clock or utc_now
        self._on_reload = on_reload
        self._today = today
        self._initialized = False

        self._projects: List[Project] = self._load("moves", _PROJECTS, lambda: seed.initial_projects(today))
        self._staff: List[StaffMember] = self._load("staff", _STAFF, seed.initial_staff)
        self._logs: List[ActivityLogEntry] = self._load("logs", _LOGS, list)
        self._settings: AppSettings = self._load("settings", _SETTINGS, seed.default_settings)
        self._initialized = True

    # --- Read access ---

    def now(self) -> datetime:
        return self._clock()

    @property
    def projects(self) -> List[Project]:
        return self._projects

    @property
    def staff(self) -> List[StaffMember]:
        return self._staff

    @property
    def logs(self) -> List[ActivityLogEntry]:
        return self._logs

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def get_project(self, project_id: str) -> Optional[Project]:
        return next((p for p in self._projects if p.id == project_id), None)

    def get_staff(self, staff_id: str) -> Optional[StaffMember]:
        return next((s for s in self._staff if s.id == staff_id), None)

    def project_logs(self, project_id: str) -> List[ActivityLogEntry]:
        return [entry for entry in self._logs if entry.project_id == project_id]

    def active_time_entry(self, staff_id: str) -> Optional[TimeEntry]:
        """First open entry for the staff member, in project order."""
        for project in self._projects:
            for entry in project.time_entries:
                if entry.staff_id == staff_id and entry.is_open:
                    return entry
        return None

    # --- Projects ---

    def update_project(self, project: Project) -> None:
        """Replace the project with the same id; unknown ids are ignored."""
        self._map_project(project.id, lambda _current: project)

    def add_project(self, project: Project) -> None:
        self._projects = [project, *self._projects]
        self._persist()

    def delete_project(self, project_id: str) -> None:
        remaining = [p for p in self._projects if p.id != project_id]
        if len(remaining) == len(self._projects):
            return
        self._projects = remaining
        self._persist()

    # --- Staff ---

    def update_staff(self, member: StaffMember) -> None:
        if not any(s.id == member.id for s in self._staff):
            return
        self._staff = [member if s.id == member.id else s for s in self._staff]
        self._persist()

    def add_staff(self, member: StaffMember) -> None:
        self._staff = [*self._staff, member]
        self._persist()

    def delete_staff(self, staff_id: str) -> None:
        remaining = [s for s in self._staff if s.id != staff_id]
        if len(remaining) == len(self._staff):
            return
        self._staff = remaining
        self._persist()

    # --- Activity log ---

    def log_activity(
        self,
        project_id: str,
        user_id: str,
        user_name: str,
        action: str,
        details: Optional[str] = None,
    ) -> ActivityLogEntry:
        """Prepend a log entry with a store-assigned id and timestamp.

        The timestamp never precedes the current newest entry, even if the
        wall clock steps backwards.
        """
        now = self._clock()
        if self._logs:
            newest = parse_timestamp(self._logs[0].timestamp)
            if now < newest:
                now = newest

        entry = ActivityLogEntry(
            id=f"log-{uuid.uuid4().hex[:12]}",
            project_id=project_id,
            user_id=user_id,
            user_name=user_name,
            action=action,
            details=details,
            timestamp=now.isoformat(),
        )
        self._logs = [entry, *self._logs]
        self._persist()
        return entry

    # --- Incidents & expenses ---

    def report_incident(self, incident: Incident) -> None:
        """Insert at the head of the owning project's incident list."""
        self._map_project(
            incident.project_id,
            lambda p: p.model_copy(update={"incidents": [incident, *p.incidents]}),
        )

    def resolve_incident(self, incident_id: str, project_id: str) -> None:
        project = self.get_project(project_id)
        if project is None or not any(inc.id == incident_id for inc in project.incidents):
            return
        incidents = [
            inc.model_copy(update={"status": IncidentStatus.RESOLVED}) if inc.id == incident_id else inc
            for inc in project.incidents
        ]
        self._map_project(project_id, lambda p: p.model_copy(update={"incidents": incidents}))

    def add_expense(self, expense: Expense) -> None:
        """Insert at the head of the owning project's expense list."""
        self._map_project(
            expense.project_id,
            lambda p: p.model_copy(update={"expenses": [expense, *p.expenses]}),
        )

    # --- Settings ---

    def update_settings(self, partial: Mapping[str, Any]) -> None:
        """Shallow-merge ``partial`` (field names) into the settings record.

        Nested sections such as ``integrations`` are replaced, not merged. A
        partial that fails validation is dropped and nothing is persisted.
        """
        merged = self._settings.model_dump()
        merged.update(partial)
        try:
            settings = AppSettings.model_validate(merged)
        except ValidationError as exc:
            logger.warning(f"Ignoring invalid settings update: {exc.error_count()} error(s)")
            return
        self._settings = settings
        self._persist()

    # --- Time clock ---

    def clock_in(self, staff_id: str, project_id: str) -> Optional[TimeEntry]:
        """Open a time entry under the project.

        Other open entries of the same staff member are left untouched, so a
        member may hold several open entries across projects.
        """
        if self.get_project(project_id) is None:
            return None
        member = self.get_staff(staff_id)
        entry = TimeEntry(
            id=f"te-{uuid.uuid4().hex[:12]}",
            staff_id=staff_id,
            staff_name=member.name if member else "Unknown",
            project_id=project_id,
            start_time=self._clock().isoformat(),
        )
        self._map_project(
            project_id,
            lambda p: p.model_copy(update={"time_entries": [entry, *p.time_entries]}),
        )
        return entry

    def clock_out(self, staff_id: str) -> Optional[TimeEntry]:
        """Close the most recently started open entry of the staff member.

        Duration and cost use the member's hourly rate at clock-out time and
        are rounded to two decimals. Returns the closed entry, or None when
        the member had nothing open.
        """
        open_entries = [
            (project.id, entry)
            for project in self._projects
            for entry in project.time_entries
            if entry.staff_id == staff_id and entry.is_open
        ]
        if not open_entries:
            return None

        project_id, entry = max(open_entries, key=lambda pair: parse_timestamp(pair[1].start_time))
        member = self.get_staff(staff_id)
        hourly_rate = (member.hourly_rate or 0) if member else 0

        now = self._clock()
        hours = (now - parse_timestamp(entry.start_time)).total_seconds() / 3600
        closed = entry.model_copy(update={
            "end_time": now.isoformat(),
            "duration_hours": round(hours, 2),
            "cost": round(hours * hourly_rate, 2),
        })
        self._map_project(
            project_id,
            lambda p: p.model_copy(update={
                "time_entries": [closed if te.id == entry.id else te for te in p.time_entries],
            }),
        )
        logger.debug(f"Clocked out {staff_id} from {project_id}: {closed.duration_hours}h")
        return closed

    # --- Reset ---

    def reset_store(self) -> None:
        """Restore seed data, drop the persisted keys and request a reload."""
        self._projects = seed.initial_projects(self._today)
        self._staff = seed.initial_staff()
        self._logs = []
        self._settings = seed.default_settings()
        for key in self.keys.values():
            self.storage.remove_item(key)
        logger.info("Store reset to seed data; persisted keys cleared")
        if self._on_reload is not None:
            self._on_reload()

    # --- Internals ---

    def _map_project(self, project_id: str, change: Callable[[Project], Project]) -> bool:
        """Apply ``change`` to the matching project and persist; False if absent."""
        if not any(p.id == project_id for p in self._projects):
            logger.debug(f"Ignoring mutation for unknown project '{project_id}'")
            return False
        self._projects = [change(p) if p.id == project_id else p for p in self._projects]
        self._persist()
        return True

    def _load(self, name: str, adapter: TypeAdapter, fallback: Callable[[], Any]) -> Any:
        key = self.keys[name]
        raw = self.storage.get_item(key)
        if raw is None:
            return fallback()
        try:
            return adapter.validate_json(raw)
        except ValidationError as exc:
            logger.warning(f"Discarding unreadable '{key}', using defaults: {exc.error_count()} error(s)")
            return fallback()

    def _persist(self) -> None:
        if not self._initialized:
            return
        self.storage.set_item(self.keys["moves"], json.dumps([p.to_json_dict() for p in self._projects]))
        self.storage.set_item(self.keys["staff"], json.dumps([s.to_json_dict() for s in self._staff]))
        self.storage.set_item(self.keys["logs"], json.dumps([e.to_json_dict() for e in self._logs]))
        self.storage.set_item(self.keys["settings"], json.dumps(self._settings.to_json_dict()))
