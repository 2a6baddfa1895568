"""Warehouse vault allocation.

Vault state is held per session and is not written to local storage.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Callable, List, Optional, Sequence

from movemax.shared.domain import seed
from movemax.shared.domain.models import Project, WarehouseVault

logger = logging.getLogger(__name__)

ASSIGNED_CONTENTS = "Assigned Project Storage"


class WarehouseService:
    """In-memory vault grid with assign/vacate operations."""

    def __init__(
        self,
        vaults: Optional[Sequence[WarehouseVault]] = None,
        today: Callable[[], date] = date.today,
    ):
        self._today = today
        self.vaults: List[WarehouseVault] = list(vaults) if vaults is not None else seed.initial_warehouse(today())

    @property
    def occupied_count(self) -> int:
        return sum(1 for v in self.vaults if v.status == "Occupied")

    @property
    def available(self) -> int:
        return len(self.vaults) - self.occupied_count

    @property
    def utilization(self) -> int:
        """Percent of vaults occupied, rounded half up."""
        if not self.vaults:
            return 0
        return math.floor(self.occupied_count * 100 / len(self.vaults) + 0.5)

    def get(self, vault_id: str) -> Optional[WarehouseVault]:
        return next((v for v in self.vaults if v.id == vault_id), None)

    def search(self, query: str) -> List[WarehouseVault]:
        q = query.lower()
        return [
            v for v in self.vaults
            if q in v.id.lower()
            or (v.client_name is not None and q in v.client_name.lower())
            or q in v.location_code.lower()
        ]

    def assign(self, vault_id: str, project_id: str, projects: Sequence[Project]) -> Optional[WarehouseVault]:
        vault = self.get(vault_id)
        if vault is None:
            return None
        project = next((p for p in projects if p.id == project_id), None)
        updated = vault.model_copy(update={
            "status": "Occupied",
            "project_id": project_id,
            "client_name": project.customer_name if project else "Unknown Client",
            "contents_description": ASSIGNED_CONTENTS,
            "updated_at": self._today().isoformat(),
        })
        self._replace(updated)
        logger.info(f"Vault {vault_id} assigned to {updated.client_name}")
        return updated

    def vacate(self, vault_id: str) -> Optional[WarehouseVault]:
        vault = self.get(vault_id)
        if vault is None:
            return None
        updated = vault.model_copy(update={
            "status": "Empty",
            "project_id": None,
            "client_name": None,
            "contents_description": None,
            "updated_at": self._today().isoformat(),
        })
        self._replace(updated)
        logger.info(f"Vault {vault_id} vacated")
        return updated

    def _replace(self, vault: WarehouseVault) -> None:
        self.vaults = [vault if v.id == vault.id else v for v in self.vaults]
