"""Data Access Layer over the generic key/value store.

Responsibilities
----------------
- Read and write JSON documents keyed by string.
- Write several keys in one transaction so related records land together.
- Translate ``sqlite3`` failures into ``StorageError`` for the HTTP layer.
"""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ratecard.core.errors import StorageError

from .schema import BASIC_UTC_NOW

_UPSERT_SQL = f"""
INSERT INTO kv_store (key, value)
VALUES (?, ?)
ON CONFLICT(key) DO UPDATE SET
    value = excluded.value,
    updated_at = ({BASIC_UTC_NOW})
"""


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _dump(value: Any) -> str:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)

    # ------------------------------------------------------------------
    # Reads
    def get_value(self, key: str, default: Any = None) -> Any:
        try:
            with self._connect() as conn:
                cur = conn.cursor()
                cur.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
                row = cur.fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"failed to read '{key}': {e}") from e
        if not row:
            return default
        return json.loads(row["value"])

    def get_values(self, keys: Iterable[str]) -> Dict[str, Any]:
        """Return the decoded values for ``keys`` read in one connection.

        Missing keys are absent from the result.
        """
        keys = list(keys)
        if not keys:
            return {}
        placeholders = ",".join("?" for _ in keys)
        try:
            with self._connect() as conn:
                cur = conn.cursor()
                cur.execute(
                    f"SELECT key, value FROM kv_store WHERE key IN ({placeholders})",
                    keys,
                )
                rows = cur.fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"failed to read {keys}: {e}") from e
        return {r["key"]: json.loads(r["value"]) for r in rows}

    # ------------------------------------------------------------------
    # Writes
    def set_value(self, key: str, value: Any) -> None:
        self.set_values({key: value})

    def set_values(self, items: Mapping[str, Any]) -> None:
        """Upsert every item in a single transaction (all or nothing)."""
        payload = [(k, self._dump(v)) for k, v in items.items()]
        conn: Optional[sqlite3.Connection] = None
        try:
            conn = self._connect()
            conn.executemany(_UPSERT_SQL, payload)
            conn.commit()
        except sqlite3.Error as e:
            if conn is not None:
                conn.rollback()
            raise StorageError(f"failed to write {list(items)}: {e}") from e
        finally:
            if conn is not None:
                conn.close()

    def insert_missing(self, items: Mapping[str, Any]) -> List[str]:
        """Insert keys that do not exist yet; existing values are left untouched.

        Returns the keys that were inserted.
        """
        inserted: List[str] = []
        conn: Optional[sqlite3.Connection] = None
        try:
            conn = self._connect()
            cur = conn.cursor()
            for key, value in items.items():
                cur.execute(
                    "INSERT OR IGNORE INTO kv_store (key, value) VALUES (?, ?)",
                    (key, self._dump(value)),
                )
                if cur.rowcount:
                    inserted.append(key)
            conn.commit()
        except sqlite3.Error as e:
            if conn is not None:
                conn.rollback()
            raise StorageError(f"failed to seed {list(items)}: {e}") from e
        finally:
            if conn is not None:
                conn.close()
        return inserted
