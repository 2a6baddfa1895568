"""Global State Store - Service Locator Pattern.

Provides centralized access to the domain store, auth gate, shell state and
controllers from any page or command. Implements the singleton pattern for
consistent state access.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from movemax.app.controllers import DispatchController, FieldController, ProjectController
from movemax.app.state.app_state import AppState
from movemax.app.state.auth_state import AuthState
from movemax.app.state.domain_store import DomainStore
from movemax.shared.core.configuration import SystemConfig, get_config
from movemax.shared.core.event_bus import EventBus
from movemax.shared.domain.auditor import AuditorService
from movemax.shared.domain.models import ActivityLogEntry
from movemax.shared.domain.reporting import SearchHit, global_search
from movemax.shared.domain.warehouse import WarehouseService
from movemax.shared.infrastructure.llm import ProviderFactory
from movemax.shared.infrastructure.persistence import LocalStorage

logger = logging.getLogger(__name__)


class Store:
    """Global state store for the application.

    Usage:
        # During app initialization
        Store.initialize(event_bus)

        # Anywhere else
        store = Store.get()
        store.auth.login("1")
        store.domain.clock_in("1", "P-2024-001")
    """

    _instance: Optional['Store'] = None

    def __init__(
        self,
        event_bus: EventBus,
        config: SystemConfig,
        storage: LocalStorage,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Initialize store with event bus, configuration and storage.

        Note: Do not call directly. Use Store.initialize() instead.
        """
        self.bus = event_bus
        self.config = config
        self.storage = storage
        self._clock = clock

        provider = ProviderFactory.create_from_config(config.ai)
        self.auditor = AuditorService(provider, config.ai, event_bus)
        self._build()

    def _build(self) -> None:
        self.domain = DomainStore(
            self.storage,
            key_prefix=self.config.storage.key_prefix,
            clock=self._clock,
            on_reload=self.reload,
        )
        self.auth = AuthState(lambda: self.domain.staff)
        self.app = AppState(self.bus, self.auth, toast_duration=self.config.ui.toast_duration)
        self.projects = ProjectController(self.domain, self.auth)
        self.dispatch = DispatchController(self.domain, self.auth)
        self.field = FieldController(self.domain, self.auth)
        self.warehouse = WarehouseService()

    def search(self, query: str) -> List[SearchHit]:
        """Header search across projects, assets and staff."""
        return global_search(query, self.domain.projects, self.domain.staff, self.config.ui.search_result_limit)

    def recent_activity(self) -> List[ActivityLogEntry]:
        return self.domain.logs[: self.config.ui.recent_activity_limit]

    def reload(self) -> None:
        """Rebuild all state from storage, as a fresh page load would.

        The signed-in user, toasts and session-local warehouse state are lost.
        """
        logger.info("Reloading application state from storage")
        self._build()

    @classmethod
    def initialize(
        cls,
        event_bus: EventBus,
        config: Optional[SystemConfig] = None,
        storage: Optional[LocalStorage] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> 'Store':
        """Initialize the global store instance.

        Should be called once during application startup. Without an explicit
        storage the DuckDB file from ``config.storage.db_path`` is opened.

        Raises:
            RuntimeError: If store is already initialized
        """
        if cls._instance is not None:
            raise RuntimeError("Store already initialized!")

        config = config or get_config()
        if storage is None:
            storage = LocalStorage(config.storage.db_path).open()
        cls._instance = cls(event_bus, config, storage, clock)
        return cls._instance

    @classmethod
    def get(cls) -> 'Store':
        """Get the global store instance.

        Raises:
            RuntimeError: If store has not been initialized
        """
        if cls._instance is None:
            raise RuntimeError("Store not initialized! Call Store.initialize() first.")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the store instance.

        Primarily used for testing. In production, store persists for
        application lifetime.
        """
        cls._instance = None
