"""Project form validation and record builders."""

from __future__ import annotations

import random
from typing import Any, List, Mapping, Optional

from movemax.shared.core.exceptions import FormValidationError
from movemax.shared.domain.models import MoveCrate, MoveStatus, Project, ProjectedSavings

REQUIRED_FIELDS = (
    ("customer_name", "Customer name is required"),
    ("origin", "Origin address is required"),
    ("destination", "Destination address is required"),
    ("date", "Move date is required"),
)


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def validate_project_form(data: Mapping[str, Any]) -> None:
    """Check the create/edit form; raises on the first problem found."""
    for key, message in REQUIRED_FIELDS:
        if not _text(data, key):
            raise FormValidationError(message, field=key)

    value = data.get("value")
    if value not in (None, ""):
        try:
            amount = float(value)
        except (TypeError, ValueError):
            raise FormValidationError("Project value must be a number", field="value") from None
        if amount < 0:
            raise FormValidationError("Project value cannot be negative", field="value")


def new_project_id(rng: Optional[random.Random] = None) -> str:
    return f"P-2024-{(rng or random).randint(1000, 9999)}"


def build_new_project(data: Mapping[str, Any], project_id: str) -> Project:
    """A fresh project from validated form data, with empty collections."""
    try:
        value = float(data.get("value") or 0)
    except (TypeError, ValueError):
        value = 0.0
    return Project(
        id=project_id,
        customer_name=_text(data, "customer_name"),
        origin=_text(data, "origin"),
        destination=_text(data, "destination"),
        date=_text(data, "date"),
        status=data.get("status") or MoveStatus.PENDING,
        value=value,
        projected_savings=ProjectedSavings(sq_ft=0, recycled_weight=0),
        retain_audit_images=bool(data.get("retain_audit_images", False)),
    )


def crate_label(prefix: str, number: int) -> str:
    return f"{prefix}{number:03d}"


def build_crates(count: int, prefix: str, start: int, id_stamp: int) -> List[MoveCrate]:
    labels = [crate_label(prefix, start + i) for i in range(count)]
    return [
        MoveCrate(id=f"crate-{id_stamp}-{i}", name=label, barcode=label, status="Pending")
        for i, label in enumerate(labels)
    ]
