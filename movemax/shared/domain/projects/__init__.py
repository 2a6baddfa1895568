"""Project workspace rules: form validation, crate labels, financials."""

from movemax.shared.domain.projects.finance import ProjectFinancials, filter_projects, financials
from movemax.shared.domain.projects.forms import (
    build_crates,
    build_new_project,
    crate_label,
    new_project_id,
    validate_project_form,
)

__all__ = [
    "ProjectFinancials",
    "build_crates",
    "build_new_project",
    "crate_label",
    "filter_projects",
    "financials",
    "new_project_id",
    "validate_project_form",
]
