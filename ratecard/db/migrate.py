"""Database migration utilities.

Schema evolution is keyed by an integer `schema_version` stored in the
key/value table itself. Each step upgrades the SQLite store in place while
preserving saved quotes and refreshed rates.
"""

from __future__ import annotations
from pathlib import Path
import json
import sqlite3
from typing import Optional

from ratecard.models.constants import KEY_SCHEMA_VERSION

from . import schema as schema_def
from .schema import init_db
from .seed import seed_catalog

CURRENT_SCHEMA_VERSION = 1


def _get_schema_version(conn: sqlite3.Connection) -> Optional[int]:
    try:
        cur = conn.cursor()
        cur.execute("SELECT value FROM kv_store WHERE key=?", (KEY_SCHEMA_VERSION,))
        row = cur.fetchone()
        if row:
            return int(json.loads(row[0]))
    except sqlite3.OperationalError:
        # kv_store may not exist yet (first run before init_db)
        return None
    return None


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    cur = conn.cursor()
    cur.execute(
        "INSERT INTO kv_store (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, "
        f"updated_at=({schema_def.BASIC_UTC_NOW})",
        (KEY_SCHEMA_VERSION, json.dumps(version)),
    )


def apply_migrations(db_path: Path) -> int:
    """Create/upgrade the schema, seed the catalog and return the schema version."""
    init_db(db_path)
    conn = sqlite3.connect(db_path)
    try:
        version = _get_schema_version(conn) or 0
        if version < CURRENT_SCHEMA_VERSION:
            # v1: key/value store; catalog is seeded below for every version
            version = CURRENT_SCHEMA_VERSION
        _set_schema_version(conn, version)
        conn.commit()
    finally:
        conn.close()
    seed_catalog(db_path)
    return version
