"""Application Shell State Management.

Navigation, current route and the toast queue. Page-level data lives in the
DomainStore; this class only tracks what the shell shows.
"""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from movemax.app.routing import NAV_CONFIG, NavItem, RouteMatch, landing_path, resolve_route
from movemax.app.state.auth_state import AuthState
from movemax.shared.core import events
from movemax.shared.core.event_bus import EventBus, EventPayload
from movemax.shared.core.exceptions import MoveMaxError

logger = logging.getLogger(__name__)


@dataclass
class Toast:
    id: str
    message: str
    level: events.ToastLevel
    created_at: float


class AppState:
    """State for the application shell.

    Subscribes to ``nav.select`` so any component can change the selected
    item through the event bus; everything else is driven by direct calls.
    """

    def __init__(
        self,
        event_bus: EventBus,
        auth: AuthState,
        toast_duration: float = 3.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.bus = event_bus
        self.auth = auth
        self.toast_duration = toast_duration
        self._clock = clock

        self.nav_selected: str = "reports"
        self.current_route: RouteMatch = resolve_route("/login", authenticated=False)
        self.toasts: List[Toast] = []

        self._toast_ids = itertools.count(1)
        self._started = False

    async def initialize(self) -> None:
        """Bind to EventBus events; safe to call more than once."""
        if self._started:
            return
        await self.bus.subscribe(events.TOPIC_NAV_SELECT, self._handle_nav_select)
        self._started = True

    # --- Navigation ---

    @property
    def visible_nav_items(self) -> List[NavItem]:
        return [item for item in NAV_CONFIG if self.auth.has_permission(item.permission_key, "view")]

    def set_nav(self, nav_id: str) -> None:
        self.nav_selected = nav_id

    async def navigate(self, path: str) -> RouteMatch:
        """Resolve ``path`` against the guard and make it the current route."""
        match = resolve_route(path, self.auth.is_authenticated)
        self.current_route = match
        for item in NAV_CONFIG:
            if match.path.startswith(item.path):
                self.nav_selected = item.id
                break
        await self.bus.publish(
            events.TOPIC_ROUTE_CHANGED,
            events.create_route_changed_event(match.path, match.page, match.redirected),
        )
        return match

    # --- Session ---

    async def sign_in(self, user_id: str) -> Optional[RouteMatch]:
        """Log in and land on the role's start page; None for unknown ids."""
        if not self.auth.login(user_id):
            return None
        user = self.auth.current_user
        await self.bus.publish(events.TOPIC_USER_LOGGED_IN, events.create_user_event(user.id, user.name))
        return await self.navigate(landing_path(user.role))

    async def sign_out(self) -> RouteMatch:
        user_id = self.auth.current_user_id
        self.auth.logout()
        await self.bus.publish(events.TOPIC_USER_LOGGED_OUT, events.create_user_event(user_id))
        return await self.navigate("/login")

    # --- Toasts ---

    async def notify(self, message: str, level: events.ToastLevel = "success") -> Toast:
        toast = Toast(
            id=f"toast-{next(self._toast_ids)}",
            message=message,
            level=level,
            created_at=self._clock(),
        )
        self.toasts.append(toast)
        await self.bus.publish(events.TOPIC_TOAST_SHOW, events.create_toast_event(toast.id, message, level))
        return toast

    async def report_error(self, error: MoveMaxError) -> Toast:
        logger.info(f"Surfacing error to user: {error}")
        return await self.notify(str(error), "error")

    def active_toasts(self) -> List[Toast]:
        """Drop expired toasts and return the ones still showing."""
        now = self._clock()
        self.toasts = [t for t in self.toasts if now - t.created_at < self.toast_duration]
        return list(self.toasts)

    def dismiss_toast(self, toast_id: str) -> None:
        self.toasts = [t for t in self.toasts if t.id != toast_id]

    # --- Event Handlers ---

    async def _handle_nav_select(self, payload: EventPayload) -> None:
        nav_id = payload.get("id")
        if nav_id:
            self.set_nav(str(nav_id))
