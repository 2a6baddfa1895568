"""Canonical event topics and payload builders for MoveMax."""

from __future__ import annotations

import time
from typing import Any, Dict, Literal

from .event_bus import EventPayload

# Shell topics
TOPIC_TOAST_SHOW = "toast.show"
TOPIC_NAV_SELECT = "nav.select"
TOPIC_ROUTE_CHANGED = "route.changed"

# Session topics
TOPIC_USER_LOGGED_IN = "auth.login"
TOPIC_USER_LOGGED_OUT = "auth.logout"

# Auditor topics
TOPIC_AI_ANALYSIS_START = "ai.analysis.start"
TOPIC_AI_ANALYSIS_COMPLETE = "ai.analysis.complete"

ToastLevel = Literal["success", "error", "info"]


def create_toast_event(toast_id: str, message: str, level: ToastLevel = "success") -> EventPayload:
    """Create a toast notification event."""
    return {
        "id": toast_id,
        "message": message,
        "level": level,
        "ts": time.time(),
    }


def create_nav_select_event(nav_id: str) -> EventPayload:
    return {"id": nav_id}


def create_route_changed_event(path: str, page: str, redirected: bool) -> EventPayload:
    return {"path": path, "page": page, "redirected": redirected}


def create_user_event(user_id: str | None, user_name: str | None = None) -> EventPayload:
    return {"user_id": user_id, "user_name": user_name}


def create_ai_analysis_event(
    kind: str,
    mocked: bool,
    result_count: int | None = None,
    details: Dict[str, Any] | None = None,
) -> EventPayload:
    """Create an AI analysis lifecycle event.

    Args:
        kind: Analysis kind (e.g. "floorplan", "damage")
        mocked: Whether the deterministic mock path produced the result
        result_count: Optional number of records returned
        details: Optional extra fields merged into the payload
    """
    event: EventPayload = {"kind": kind, "mocked": mocked}
    if result_count is not None:
        event["result_count"] = result_count
    if details:
        event.update(details)
    return event
