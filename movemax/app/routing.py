"""Route table and access guard for the MoveMax shell."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from movemax.shared.domain.models import Role

LOGIN_PATH = "/login"
NOT_FOUND_PAGE = "not_found"

PUBLIC_ROUTES: Dict[str, str] = {
    "/login": "login",
    "/audit": "auditor",
}
PORTAL_PREFIX = "/portal/"

ADMIN_ROUTES: Dict[str, str] = {
    "/reports": "dashboard",
    "/moves": "projects",
    "/warehouse": "warehouse",
    "/my-tasks": "my_tasks",
    "/profiles": "profiles",
    "/staff": "staff",
    "/dispatch": "dispatch",
    "/settings": "settings",
}


@dataclass(frozen=True)
class RouteMatch:
    path: str
    page: str
    params: Dict[str, str] = field(default_factory=dict)
    redirected: bool = False

    @property
    def found(self) -> bool:
        return self.page != NOT_FOUND_PAGE


@dataclass(frozen=True)
class NavItem:
    id: str
    label: str
    path: str
    permission_key: str


NAV_CONFIG: List[NavItem] = [
    NavItem("reports", "Dashboard", "/reports", "projects"),
    NavItem("moves", "Projects", "/moves", "projects"),
    NavItem("audit", "Auditor", "/audit", "projects"),
    NavItem("warehouse", "Warehouse", "/warehouse", "projects"),
    NavItem("mytasks", "My Tasks", "/my-tasks", "projects"),
    NavItem("profiles", "Profiles", "/profiles", "profiles"),
    NavItem("staff", "Staff", "/staff", "profiles"),
    NavItem("dispatch", "Dispatch", "/dispatch", "dispatch"),
    NavItem("settings", "Settings", "/settings", "settings"),
]


def _normalize(path: str) -> str:
    path = path.split("?", 1)[0].split("#", 1)[0].strip() or "/"
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def resolve_route(path: str, authenticated: bool) -> RouteMatch:
    """Map a path to a page, applying the sign-in guard.

    Public routes always resolve. Admin routes redirect to the login page
    when nobody is signed in. ``/`` always redirects to the login page.
    """
    path = _normalize(path)

    if path in PUBLIC_ROUTES:
        return RouteMatch(path, PUBLIC_ROUTES[path])
    if path.startswith(PORTAL_PREFIX) and "/" not in path[len(PORTAL_PREFIX):]:
        project_id = path[len(PORTAL_PREFIX):]
        if project_id:
            return RouteMatch(path, "client_portal", {"project_id": project_id})
    if path == "/":
        return RouteMatch(LOGIN_PATH, PUBLIC_ROUTES[LOGIN_PATH], redirected=True)
    if path in ADMIN_ROUTES:
        if not authenticated:
            return RouteMatch(LOGIN_PATH, PUBLIC_ROUTES[LOGIN_PATH], redirected=True)
        return RouteMatch(path, ADMIN_ROUTES[path])
    return RouteMatch(path, NOT_FOUND_PAGE)


def landing_path(role: Optional[Role]) -> str:
    """Where a user lands after signing in: field staff start on their tasks."""
    if role in (Role.MOVER, Role.SITE_SUPERVISOR):
        return "/my-tasks"
    return "/moves"
