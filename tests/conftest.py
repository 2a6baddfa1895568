from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import List

import pytest

from movemax.app.state.app_state import AppState
from movemax.app.state.auth_state import AuthState
from movemax.app.state.domain_store import DomainStore
from movemax.shared.core.event_bus import EventBus, EventPayload
from movemax.shared.infrastructure.persistence import LocalStorage

TODAY = date(2024, 6, 10)
START = datetime(2024, 6, 10, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock; ``advance`` moves it forward (or back)."""

    def __init__(self, start: datetime = START) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class Recorder:
    """Collects payloads published on one topic."""

    def __init__(self) -> None:
        self.payloads: List[EventPayload] = []

    async def __call__(self, payload: EventPayload) -> None:
        self.payloads.append(payload)


@pytest.fixture
def storage():
    store = LocalStorage(":memory:").open()
    yield store
    store.close()


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def domain(storage, clock, today) -> DomainStore:
    return DomainStore(storage, clock=clock, today=today)


@pytest.fixture
def auth(domain) -> AuthState:
    return AuthState(lambda: domain.staff)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def app_state(event_bus, auth) -> AppState:
    return AppState(event_bus, auth, toast_duration=3.0, clock=lambda: 0.0)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
