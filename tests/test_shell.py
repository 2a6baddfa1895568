from __future__ import annotations

import pytest

from movemax.app.routing import NAV_CONFIG, landing_path, resolve_route
from movemax.app.state.app_state import AppState
from movemax.shared.core import events
from movemax.shared.core.exceptions import FormValidationError
from movemax.shared.domain.models import Role

# --- Routing ---


def test_root_always_redirects_to_login():
    for authenticated in (False, True):
        match = resolve_route("/", authenticated)
        assert match.path == "/login"
        assert match.redirected


def test_admin_routes_require_sign_in():
    guarded = resolve_route("/moves", authenticated=False)
    assert guarded.page == "login"
    assert guarded.redirected

    allowed = resolve_route("/moves", authenticated=True)
    assert allowed.page == "projects"
    assert not allowed.redirected


def test_public_routes_resolve_without_sign_in():
    assert resolve_route("/audit", authenticated=False).page == "auditor"
    assert resolve_route("/login", authenticated=False).page == "login"


def test_client_portal_route_carries_project_id():
    match = resolve_route("/portal/P-2024-001", authenticated=False)
    assert match.page == "client_portal"
    assert match.params == {"project_id": "P-2024-001"}


def test_unknown_route_is_not_found():
    match = resolve_route("/nope", authenticated=True)
    assert not match.found
    assert not resolve_route("/portal/", authenticated=True).found


def test_trailing_slash_and_query_are_ignored():
    assert resolve_route("/dispatch/?week=2", authenticated=True).page == "dispatch"


def test_landing_path_by_role():
    assert landing_path(Role.MOVER) == "/my-tasks"
    assert landing_path(Role.SITE_SUPERVISOR) == "/my-tasks"
    assert landing_path(Role.PROJECT_MANAGER) == "/moves"
    assert landing_path(Role.ADMIN) == "/moves"


# --- AppState ---


@pytest.mark.asyncio
async def test_sign_in_lands_field_staff_on_their_tasks(app_state, event_bus, recorder):
    await event_bus.subscribe(events.TOPIC_USER_LOGGED_IN, recorder)

    match = await app_state.sign_in("4")
    await event_bus.wait_until_idle()

    assert match.path == "/my-tasks"
    assert app_state.nav_selected == "mytasks"
    assert recorder.payloads == [{"user_id": "4", "user_name": "Marcus Johnson"}]


@pytest.mark.asyncio
async def test_sign_in_unknown_user(app_state):
    assert await app_state.sign_in("404") is None
    assert app_state.current_route.page == "login"


@pytest.mark.asyncio
async def test_sign_out_returns_to_login(app_state, auth):
    await app_state.sign_in("2")
    match = await app_state.sign_out()
    assert match.page == "login"
    assert not auth.is_authenticated


@pytest.mark.asyncio
async def test_navigate_publishes_route_changes(app_state, event_bus, recorder):
    await event_bus.subscribe(events.TOPIC_ROUTE_CHANGED, recorder)
    await app_state.navigate("/settings")
    await event_bus.wait_until_idle()
    assert recorder.payloads == [{"path": "/login", "page": "login", "redirected": True}]


@pytest.mark.asyncio
async def test_nav_select_event_updates_selection(app_state, event_bus):
    await app_state.initialize()
    await event_bus.publish(events.TOPIC_NAV_SELECT, events.create_nav_select_event("dispatch"))
    await event_bus.wait_until_idle()
    assert app_state.nav_selected == "dispatch"


def test_visible_nav_items_follow_view_permissions(app_state, auth):
    assert app_state.visible_nav_items == []

    auth.login("1")
    assert len(app_state.visible_nav_items) == len(NAV_CONFIG)

    auth.login("4")
    assert "settings" not in [item.id for item in app_state.visible_nav_items]
    assert "dispatch" in [item.id for item in app_state.visible_nav_items]


@pytest.mark.asyncio
async def test_toasts_expire_after_duration(event_bus, auth, recorder):
    now = [0.0]
    state = AppState(event_bus, auth, toast_duration=3.0, clock=lambda: now[0])
    await event_bus.subscribe(events.TOPIC_TOAST_SHOW, recorder)

    first = await state.notify("Project saved")
    now[0] = 2.0
    second = await state.notify("Clocked in", "info")
    await event_bus.wait_until_idle()

    assert [t.id for t in state.active_toasts()] == [first.id, second.id]
    assert [p["message"] for p in recorder.payloads] == ["Project saved", "Clocked in"]

    now[0] = 3.5
    assert [t.id for t in state.active_toasts()] == [second.id]

    state.dismiss_toast(second.id)
    assert state.active_toasts() == []


@pytest.mark.asyncio
async def test_report_error_shows_error_toast(app_state):
    toast = await app_state.report_error(FormValidationError("Customer name is required", field="customer_name"))
    assert toast.level == "error"
    assert toast.message == "Customer name is required"
