"""Global header search across projects, assets and staff."""

from dataclasses import dataclass
from typing import List, Literal, Sequence

from movemax.shared.domain.models import Project, StaffMember

SearchKind = Literal["Project", "Asset", "Staff"]
DEFAULT_LIMIT = 6


@dataclass(frozen=True)
class SearchHit:
    kind: SearchKind
    title: str
    subtitle: str
    link: str
    id: str


def global_search(
    query: str,
    projects: Sequence[Project],
    staff: Sequence[StaffMember],
    limit: int = DEFAULT_LIMIT,
) -> List[SearchHit]:
    """Project and asset hits in project order, then staff; capped at ``limit``."""
    q = query.strip().lower()
    if not q:
        return []

    hits: List[SearchHit] = []
    for project in projects:
        if q in project.customer_name.lower() or q in project.id.lower():
            hits.append(SearchHit("Project", project.customer_name, project.id, "/moves", project.id))
        for item in project.inventory:
            if q in item.name.lower() or q in item.id.lower():
                hits.append(SearchHit(
                    "Asset", item.name, f"{project.customer_name} • {item.room}", "/moves", project.id
                ))

    for member in staff:
        if q in member.name.lower() or q in member.email.lower():
            hits.append(SearchHit("Staff", member.name, member.role.value, "/profiles", member.id))

    return hits[:limit]
