"""SQLite helpers for the persistence layer."""
from __future__ import annotations

import json
import os
import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from config.settings import settings


@contextmanager
def get_conn(db_path: Optional[str] = None) -> Iterator[sqlite3.Connection]:
    """Yield a SQLite connection, ensuring the data directory exists."""

    path = db_path or settings.DB_PATH
    directory = os.path.dirname(path) or "."
    os.makedirs(directory, exist_ok=True)
    conn = sqlite3.connect(path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


class SqliteStore:
    """JSON values in the ``kv_entries`` table, one namespace per instance."""

    def __init__(self, namespace: str, db_path: Optional[str] = None) -> None:
        self.namespace = namespace
        self._db_path = db_path

    def get(self, key: str) -> Optional[Any]:
        with get_conn(self._db_path) as conn:
            row = conn.execute(
                "SELECT value FROM kv_entries WHERE namespace = ? AND key = ?",
                (self.namespace, key),
            ).fetchone()
        if row is None:
            return None
        return json.loads(row[0])

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        with get_conn(self._db_path) as conn:
            conn.execute(
                """INSERT INTO kv_entries (namespace, key, value) VALUES (?, ?, ?)
                   ON CONFLICT(namespace, key) DO UPDATE SET value = excluded.value""",
                (self.namespace, key, payload),
            )

    def delete(self, key: str) -> bool:
        with get_conn(self._db_path) as conn:
            cur = conn.execute(
                "DELETE FROM kv_entries WHERE namespace = ? AND key = ?",
                (self.namespace, key),
            )
            return cur.rowcount > 0

    def keys(self) -> List[str]:
        with get_conn(self._db_path) as conn:
            rows = conn.execute(
                "SELECT key FROM kv_entries WHERE namespace = ? ORDER BY rowid",
                (self.namespace,),
            ).fetchall()
        return [row[0] for row in rows]


__all__ = ["SqliteStore", "get_conn"]
