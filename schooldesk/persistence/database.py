"""
Durable key-value backing stores.
"""

import os
import re
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..core.enums import StorageType
from ..core.exceptions import PersistenceError, ConfigurationError
from ..core.interfaces import KeyValueStore

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def _check_key(key: str) -> str:
    if not isinstance(key, str) or not _KEY_PATTERN.match(key):
        raise PersistenceError(f"Invalid storage key: {key!r}", error_code="invalid_key")
    return key


class SQLiteKeyValueStore(KeyValueStore):
    """SQLite implementation: one row per key in ``kv_store``."""

    def __init__(self, database_path: str = "schooldesk.db"):
        self._database_path = database_path
        self._lock = threading.RLock()
        self._initialize_database()

    def _initialize_database(self) -> None:
        """Create the key-value table if needed."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.commit()

    @contextmanager
    def _get_connection(self):
        """Get database connection with proper cleanup."""
        conn = None
        try:
            conn = sqlite3.connect(self._database_path, check_same_thread=False)
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            raise PersistenceError(f"Database error: {str(e)}")
        finally:
            if conn:
                conn.close()

    def get(self, key: str) -> Optional[str]:
        _check_key(key)
        with self._lock, self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        _check_key(key)
        with self._lock, self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                (key, value, datetime.now(timezone.utc).isoformat()),
            )
            conn.commit()

    def remove(self, key: str) -> None:
        _check_key(key)
        with self._lock, self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()

    def keys(self) -> List[str]:
        with self._lock, self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT key FROM kv_store ORDER BY key")
            return [row[0] for row in cursor.fetchall()]


class FileKeyValueStore(KeyValueStore):
    """File-based implementation: ``<base_path>/<key>.json`` per key."""

    def __init__(self, base_path: str = "schooldesk_data"):
        self._base_path = base_path
        self._lock = threading.RLock()
        self._ensure_directory_exists()

    def _ensure_directory_exists(self) -> None:
        os.makedirs(self._base_path, exist_ok=True)

    def _get_path(self, key: str) -> str:
        return os.path.join(self._base_path, f"{_check_key(key)}.json")

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            path = self._get_path(key)
            if not os.path.exists(path):
                return None
            try:
                with open(path, "r", encoding="utf-8") as f:
                    return f.read()
            except (OSError, UnicodeDecodeError) as e:
                raise PersistenceError(f"Failed to read {key}: {str(e)}")

    def set(self, key: str, value: str) -> None:
        with self._lock:
            path = self._get_path(key)
            tmp_path = f"{path}.tmp"
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_path, path)
            except OSError as e:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise PersistenceError(f"Failed to write {key}: {str(e)}")

    def remove(self, key: str) -> None:
        with self._lock:
            path = self._get_path(key)
            try:
                if os.path.exists(path):
                    os.remove(path)
            except OSError as e:
                raise PersistenceError(f"Failed to remove {key}: {str(e)}")

    def keys(self) -> List[str]:
        with self._lock:
            keys = []
            for filename in sorted(os.listdir(self._base_path)):
                if filename.endswith(".json"):
                    keys.append(filename[:-5])  # Remove .json extension
            return keys


class MemoryKeyValueStore(KeyValueStore):
    """In-memory implementation. Does not survive restarts; share the instance instead."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(_check_key(key))

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[_check_key(key)] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(_check_key(key), None)

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._data)


class KeyValueStoreFactory:
    """Factory for creating backing store instances."""

    @staticmethod
    def create_store(store_type: str, **kwargs) -> KeyValueStore:
        """Create a backing store instance based on type."""
        try:
            kind = StorageType(str(store_type).lower())
        except ValueError:
            raise ConfigurationError(f"Unsupported storage type: {store_type}", error_code="storage_type")

        if kind is StorageType.SQLITE:
            return SQLiteKeyValueStore(**kwargs)
        elif kind is StorageType.FILE:
            return FileKeyValueStore(**kwargs)
        else:
            return MemoryKeyValueStore(**kwargs)
