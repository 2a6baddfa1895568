"""Dashboard KPIs and the monthly activity chart."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Sequence

from movemax.shared.domain.models import MoveStatus, Project

logger = logging.getLogger(__name__)

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
SAVINGS_PER_SQ_FT = 3.5
CHART_MONTHS = 7


@dataclass
class MonthBucket:
    name: str
    moves: int = 0
    revenue: float = 0.0


@dataclass
class DashboardMetrics:
    total_sq_ft: float
    total_recycled: float
    active_projects: int
    total_revenue: float
    chart: List[MonthBucket] = field(default_factory=list)

    @property
    def estimated_savings(self) -> int:
        return math.floor(self.total_sq_ft * SAVINGS_PER_SQ_FT + 0.5)


def _month_index(value: str) -> int | None:
    try:
        return datetime.fromisoformat(value).month - 1
    except ValueError:
        logger.debug(f"Skipping unparsable project date '{value}'")
        return None


def dashboard_metrics(projects: Sequence[Project], today: date) -> DashboardMetrics:
    """Totals across all projects plus a chart of the last seven months.

    Chart buckets are keyed by month name only; a project dated in the same
    month of another year lands in that month's bucket.
    """
    total_sq_ft = sum(p.projected_savings.sq_ft for p in projects if p.projected_savings)
    total_recycled = sum(p.projected_savings.recycled_weight for p in projects if p.projected_savings)
    active = sum(1 for p in projects if p.status in (MoveStatus.IN_PROGRESS, MoveStatus.BOOKED))
    revenue = sum(p.value for p in projects)

    buckets: Dict[str, MonthBucket] = {}
    for back in range(CHART_MONTHS - 1, -1, -1):
        name = MONTH_NAMES[(today.month - 1 - back) % 12]
        buckets[name] = MonthBucket(name)

    for project in projects:
        index = _month_index(project.date)
        if index is None:
            continue
        bucket = buckets.get(MONTH_NAMES[index])
        if bucket is not None:
            bucket.moves += 1
            bucket.revenue += project.value

    return DashboardMetrics(
        total_sq_ft=total_sq_ft,
        total_recycled=total_recycled,
        active_projects=active,
        total_revenue=revenue,
        chart=list(buckets.values()),
    )
