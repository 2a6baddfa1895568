"""DuckDB-backed key/value storage.

Mirrors the browser ``localStorage`` contract the store was written against:
string keys, string values, ``get_item`` returns None for a missing key.
Errors from the database (disk full, locked file) are not caught here and
reach the caller.
"""

import logging
from pathlib import Path
from typing import List, Optional

import duckdb

logger = logging.getLogger(__name__)


class LocalStorage:
    """String key/value table in a single DuckDB file (or ``:memory:``)."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or ":memory:"
        self.conn: Optional[duckdb.DuckDBPyConnection] = None

    def open(self) -> "LocalStorage":
        """Connect and create the table; safe to call more than once."""
        if self.conn is not None:
            return self
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = duckdb.connect(self.db_path)
        self._create_schema()
        logger.info(f"Local storage opened: {self.db_path}")
        return self

    def _create_schema(self) -> None:
        self._connection().execute("""
            CREATE TABLE IF NOT EXISTS local_storage (
                key VARCHAR PRIMARY KEY,
                value VARCHAR NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

    def _connection(self) -> duckdb.DuckDBPyConnection:
        if self.conn is None:
            self.open()
        return self.conn

    def get_item(self, key: str) -> Optional[str]:
        row = self._connection().execute(
            "SELECT value FROM local_storage WHERE key = ?", (key,)
        ).fetchone()
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        conn = self._connection()
        existing = conn.execute(
            "SELECT key FROM local_storage WHERE key = ?", (key,)
        ).fetchone()
        if existing:
            conn.execute("""
                UPDATE local_storage
                SET value = ?, updated_at = CURRENT_TIMESTAMP
                WHERE key = ?
            """, (value, key))
        else:
            conn.execute(
                "INSERT INTO local_storage (key, value) VALUES (?, ?)", (key, value)
            )

    def remove_item(self, key: str) -> None:
        self._connection().execute("DELETE FROM local_storage WHERE key = ?", (key,))

    def keys(self) -> List[str]:
        rows = self._connection().execute(
            "SELECT key FROM local_storage ORDER BY key"
        ).fetchall()
        return [row[0] for row in rows]

    def clear(self) -> None:
        self._connection().execute("DELETE FROM local_storage")

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None
            logger.debug(f"Local storage closed: {self.db_path}")
