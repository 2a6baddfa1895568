"""Persistence adapters (DuckDB key/value storage)."""

from movemax.shared.infrastructure.persistence.local_storage import LocalStorage

__all__ = ["LocalStorage"]
