"""Warehouse vault allocation."""

from movemax.shared.domain.warehouse.service import WarehouseService

__all__ = ["WarehouseService"]
