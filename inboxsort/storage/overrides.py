"""Durable storage for user category corrections."""

import os
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator, Optional, Protocol, runtime_checkable

import structlog

from inboxsort.errors import ConfigError, StorageError

logger = structlog.get_logger(__name__)

DEFAULT_MAX_OVERRIDES = 10000


def get_override_db_path() -> Path:
    """Get the path for the SQLite override database."""
    cache_dir = Path(os.getenv("CACHE_DIR", "./data"))
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir / "inboxsort_overrides.db"


def get_max_overrides() -> int:
    """
    Get the override store size cap from environment.

    Raises:
        ConfigError: If INBOXSORT_MAX_OVERRIDES is not an integer.
    """
    raw = os.getenv("INBOXSORT_MAX_OVERRIDES", "").strip()
    if not raw:
        return DEFAULT_MAX_OVERRIDES
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"INBOXSORT_MAX_OVERRIDES must be an integer, got {raw!r}") from None


@runtime_checkable
class OverrideStore(Protocol):
    """Key-value capability the classifier reads overrides through."""

    def get(self, message_id: str) -> Optional[str]:
        """Return the stored category for a message, or None."""
        ...

    def set(self, message_id: str, category: str) -> None:
        """Store a category for a message, replacing any previous value."""
        ...


class SQLiteOverrideStore:
    """SQLite-backed override store that survives restarts."""

    def __init__(self, db_path: Optional[Path] = None, max_entries: Optional[int] = None):
        """
        Initialize the override store.

        Args:
            db_path: Path to the SQLite database. Uses default if not provided.
            max_entries: Maximum number of overrides kept. Least recently
                updated entries are evicted beyond it. Defaults to
                INBOXSORT_MAX_OVERRIDES env var.

        Raises:
            ConfigError: If the size cap setting is invalid.
            StorageError: If the database cannot be opened or initialized.
        """
        self.db_path = db_path or get_override_db_path()
        self.max_entries = max_entries if max_entries is not None else get_max_overrides()
        self._init_db()

    def _init_db(self) -> None:
        """Initialize the database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS overrides (
                    message_id TEXT PRIMARY KEY,
                    category TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_overrides_updated
                ON overrides(updated_at)
            """)

            conn.commit()

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection, mapping SQLite failures to StorageError."""
        try:
            conn = sqlite3.connect(self.db_path, timeout=5.0)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open override store {self.db_path}: {e}") from e

        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as e:
            raise StorageError(f"Override store failure: {e}") from e
        finally:
            conn.close()

    def get(self, message_id: str) -> Optional[str]:
        """
        Get the override for a message.

        Args:
            message_id: The message ID to look up.

        Returns:
            Stored category or None if no override exists.

        Raises:
            StorageError: If the database cannot be read.
        """
        with self._get_connection() as conn:
            cursor = conn.execute(
                "SELECT category FROM overrides WHERE message_id = ?", (message_id,)
            )
            row = cursor.fetchone()
            return row["category"] if row else None

    def set(self, message_id: str, category: str) -> None:
        """
        Store an override, replacing any previous one for the message.

        Raises:
            StorageError: If the database cannot be written.
        """
        updated_at = datetime.utcnow().isoformat()

        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO overrides (message_id, category, updated_at)
                VALUES (?, ?, ?)
                """,
                (message_id, category, updated_at),
            )
            evicted = self._enforce_cap(conn)
            conn.commit()

        if evicted:
            logger.info("overrides_evicted", count=evicted, max_entries=self.max_entries)

    def _enforce_cap(self, conn: sqlite3.Connection) -> int:
        """Delete the least recently updated rows beyond the size cap."""
        if self.max_entries <= 0:
            return 0

        cursor = conn.execute(
            """
            DELETE FROM overrides WHERE message_id IN (
                SELECT message_id FROM overrides
                ORDER BY updated_at DESC, rowid DESC
                LIMIT -1 OFFSET ?
            )
            """,
            (self.max_entries,),
        )
        return cursor.rowcount

    def delete(self, message_id: str) -> bool:
        """
        Remove the override for a message.

        Returns:
            True if an override was removed.
        """
        with self._get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM overrides WHERE message_id = ?", (message_id,)
            )
            conn.commit()
            return cursor.rowcount > 0

    def all(self) -> dict[str, str]:
        """Get every stored override, most recent first."""
        with self._get_connection() as conn:
            cursor = conn.execute(
                "SELECT message_id, category FROM overrides ORDER BY updated_at DESC"
            )
            return {row["message_id"]: row["category"] for row in cursor}

    def count(self) -> int:
        """Get the number of stored overrides."""
        with self._get_connection() as conn:
            cursor = conn.execute("SELECT COUNT(*) as count FROM overrides")
            row = cursor.fetchone()
            return row["count"] if row else 0

    def clear(self) -> None:
        """Remove all overrides."""
        with self._get_connection() as conn:
            conn.execute("DELETE FROM overrides")
            conn.commit()


class MemoryOverrideStore:
    """In-process override store, mainly for tests and one-off runs."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, message_id: str) -> Optional[str]:
        with self._lock:
            return self._data.get(message_id)

    def set(self, message_id: str, category: str) -> None:
        with self._lock:
            # Re-insert so iteration order reflects recency
            self._data.pop(message_id, None)
            self._data[message_id] = category

    def delete(self, message_id: str) -> bool:
        with self._lock:
            return self._data.pop(message_id, None) is not None

    def all(self) -> dict[str, str]:
        with self._lock:
            return dict(reversed(list(self._data.items())))

    def count(self) -> int:
        with self._lock:
            return len(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
