"""Dispatch board schedule queries."""

from movemax.shared.domain.dispatch.schedule import (
    assignment_for,
    dispatchable_projects,
    shift_week,
    unassigned_projects,
    week_days,
)

__all__ = ["assignment_for", "dispatchable_projects", "shift_week", "unassigned_projects", "week_days"]
