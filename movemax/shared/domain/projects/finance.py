"""Project financial summary and list filtering."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from movemax.shared.domain.models import MoveStatus, Project


@dataclass(frozen=True)
class ProjectFinancials:
    labor: float
    expenses: float
    total: float
    margin: float

    def breakdown(self) -> List[Tuple[str, float]]:
        """Non-zero slices for the margin chart."""
        slices = [("Margin", self.margin), ("Labor", self.labor), ("Expenses", self.expenses)]
        return [(name, value) for name, value in slices if value > 0]


def financials(project: Project) -> ProjectFinancials:
    labor = sum(entry.cost or 0 for entry in project.time_entries)
    expenses = sum(expense.amount for expense in project.expenses)
    total = labor + expenses
    return ProjectFinancials(labor=labor, expenses=expenses, total=total, margin=max(0, project.value - total))


def filter_projects(
    projects: Sequence[Project],
    query: str = "",
    status: Optional[MoveStatus] = None,
) -> List[Project]:
    """Match customer name or id (case-insensitive); ``status=None`` means all."""
    q = query.lower()
    return [
        p for p in projects
        if (q in p.customer_name.lower() or q in p.id.lower())
        and (status is None or p.status == status)
    ]
