"""Storage backends holding the serialized session in a single slot."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional, Protocol


class SessionStorage(Protocol):
    """One durable slot for the serialized credential record."""

    def get(self) -> Optional[str]:
        ...

    def set(self, value: str) -> None:
        ...

    def clear(self) -> None:
        ...


class InMemorySessionStorage:
    """Process-local slot, used for tests and throwaway sessions."""

    def __init__(self, initial: Optional[str] = None) -> None:
        self._value = initial

    def get(self) -> Optional[str]:
        return self._value

    def set(self, value: str) -> None:
        self._value = value

    def clear(self) -> None:
        self._value = None


class SQLiteSessionStorage:
    """Persist the session slot in a key/value table keyed by storage key."""

    def __init__(self, db_path: str, *, key: str = "auth") -> None:
        self._db_path = Path(db_path)
        self._key = key
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS session_slots (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def get(self) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM session_slots WHERE key = ?",
                (self._key,),
            ).fetchone()
        if not row:
            return None
        return row["value"]

    def set(self, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO session_slots (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (self._key, value),
            )

    def clear(self) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM session_slots WHERE key = ?", (self._key,))


__all__ = ["InMemorySessionStorage", "SQLiteSessionStorage", "SessionStorage"]
