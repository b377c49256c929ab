import sqlite3, os
from typing import Optional

from app.errors import StorageError

DB_PATH = "data/wordtest.db"


def _ensure_schema(conn):
    conn.execute("""
    CREATE TABLE IF NOT EXISTS kv(
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """)


class SqliteStore:
    """Key-value store backed by a single sqlite table."""

    def __init__(self, path: str = DB_PATH):
        self.path = str(path)

    def _connect(self):
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        conn = sqlite3.connect(self.path)
        _ensure_schema(conn)
        return conn

    def get(self, key: str) -> Optional[str]:
        conn = None
        try:
            conn = self._connect()
            row = conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
            return row[0] if row else None
        except (sqlite3.Error, OSError) as e:
            raise StorageError(str(e), e) from e
        finally:
            if conn is not None:
                conn.close()

    def set(self, key: str, value: str) -> None:
        conn = None
        try:
            conn = self._connect()
            conn.execute(
                "INSERT INTO kv(key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=CURRENT_TIMESTAMP",
                (key, value),
            )
            conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(str(e), e) from e
        finally:
            if conn is not None:
                conn.close()

    def delete(self, key: str) -> None:
        conn = None
        try:
            conn = self._connect()
            conn.execute("DELETE FROM kv WHERE key=?", (key,))
            conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(str(e), e) from e
        finally:
            if conn is not None:
                conn.close()
