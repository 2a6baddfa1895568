"""Crew schedule queries for the dispatch board."""

from datetime import date, timedelta
from typing import List, Optional, Sequence

from movemax.shared.domain.models import MoveStatus, Project

DISPATCHABLE_STATUSES = (MoveStatus.BOOKED, MoveStatus.IN_PROGRESS)


def week_days(start: date) -> List[date]:
    return [start + timedelta(days=offset) for offset in range(7)]


def shift_week(start: date, weeks: int) -> date:
    return start + timedelta(days=7 * weeks)


def dispatchable_projects(projects: Sequence[Project]) -> List[Project]:
    """Projects that still need a crew on the board (Booked or In Progress)."""
    return [p for p in projects if p.status in DISPATCHABLE_STATUSES]


def unassigned_projects(projects: Sequence[Project]) -> List[Project]:
    return [p for p in dispatchable_projects(projects) if not p.assigned_crew_ids]


def assignment_for(projects: Sequence[Project], staff_id: str, day: str) -> Optional[Project]:
    """The dispatchable project the staff member works on ``day`` (ISO date)."""
    return next(
        (p for p in dispatchable_projects(projects) if p.date == day and staff_id in p.assigned_crew_ids),
        None,
    )
