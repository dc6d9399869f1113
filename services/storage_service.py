"""
Persistent store for RECOOK BOOK.

Key/value persistence over two tiers: a durable tier kept in a SQLite file
(survives restarts) and a session tier scoped to one browser session. Values
travel as JSON text in both tiers. Every other service reads and writes
through StorageService only.
"""

import json
import logging
import sqlite3
import threading
from contextlib import contextmanager, ExitStack
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, MutableMapping

from utils import get_logger, log_event
from .errors import CorruptStoredDataError

logger = get_logger(__name__)


class StorageTier(Enum):
    """Storage tiers"""
    DURABLE = "durable"
    SESSION = "session"


def encode_value(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def decode_value(key: str, text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise CorruptStoredDataError(key, str(e)) from e


class SQLiteKeyValueBackend:
    """
    Durable tier backed by a single SQLite table.
    One instance is shared by every session in the process.
    """

    def __init__(self, db_path: str = "recook_book.db"):
        self.db_path = db_path
        self._lock = threading.RLock()
        self._key_locks: Dict[str, threading.RLock] = {}
        # Keep persistent connection for in-memory databases
        self._persistent_conn = None
        if db_path == ":memory:":
            self._persistent_conn = sqlite3.connect(db_path, check_same_thread=False)
        else:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema_exists()

    @contextmanager
    def get_connection(self):
        """Context manager for database connections with proper cleanup"""
        if self._persistent_conn:
            with self._lock:
                try:
                    yield self._persistent_conn
                except Exception as e:
                    self._persistent_conn.rollback()
                    log_event(logger, "store.error", logging.ERROR, path=self.db_path, error=str(e))
                    raise
        else:
            conn = None
            try:
                conn = sqlite3.connect(self.db_path, timeout=30.0)
                yield conn
            except Exception as e:
                if conn:
                    conn.rollback()
                log_event(logger, "store.error", logging.ERROR, path=self.db_path, error=str(e))
                raise
            finally:
                if conn:
                    conn.close()

    def _ensure_schema_exists(self):
        with self.get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
            """)
            conn.commit()
        log_event(logger, "store.ready", logging.DEBUG, path=self.db_path)

    def key_lock(self, key: str) -> threading.RLock:
        """Re-entrant lock guarding read-modify-write units on one key"""
        with self._lock:
            if key not in self._key_locks:
                self._key_locks[key] = threading.RLock()
            return self._key_locks[key]

    def get(self, key: str) -> Optional[str]:
        with self.get_connection() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None

    def set_many(self, items: Dict[str, str]):
        """Write several keys in one transaction"""
        now = datetime.now().isoformat()
        with self.get_connection() as conn:
            conn.executemany("""
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
            """, [(key, text, now) for key, text in items.items()])
            conn.commit()

    def set(self, key: str, text: str):
        self.set_many({key: text})

    def delete(self, key: str):
        with self.get_connection() as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()

    def clear(self):
        with self.get_connection() as conn:
            conn.execute("DELETE FROM kv_store")
            conn.commit()

    def keys(self) -> List[str]:
        with self.get_connection() as conn:
            return [row[0] for row in conn.execute("SELECT key FROM kv_store ORDER BY key")]


class MemorySessionBackend:
    """Session tier held in a plain dict; used by tests and scripts"""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, text: str):
        self._data[key] = text

    def set_many(self, items: Dict[str, str]):
        self._data.update(items)

    def delete(self, key: str):
        self._data.pop(key, None)

    def clear(self):
        self._data.clear()

    def keys(self) -> List[str]:
        return sorted(self._data)


class StreamlitSessionBackend:
    """
    Session tier kept in Streamlit's per-browser-session state.
    Keys are namespaced so widget state is never touched.
    """

    PREFIX = "recook_book:"

    def __init__(self, session_state: Optional[MutableMapping] = None):
        if session_state is None:
            import streamlit as st
            session_state = st.session_state
        self._state = session_state

    def get(self, key: str) -> Optional[str]:
        return self._state.get(self.PREFIX + key)

    def set(self, key: str, text: str):
        self._state[self.PREFIX + key] = text

    def set_many(self, items: Dict[str, str]):
        for key, text in items.items():
            self.set(key, text)

    def delete(self, key: str):
        self._state.pop(self.PREFIX + key, None)

    def clear(self):
        for name in [k for k in self._state.keys() if str(k).startswith(self.PREFIX)]:
            self._state.pop(name, None)

    def keys(self) -> List[str]:
        return sorted(
            str(k)[len(self.PREFIX):] for k in self._state.keys() if str(k).startswith(self.PREFIX)
        )


class StorageService:
    """
    Two-tier key/value store.

    `read` never raises on bad data: a value that cannot be decoded is logged
    and reported as absent.
    """

    def __init__(self, durable: SQLiteKeyValueBackend, session=None):
        self.durable = durable
        self.session = session if session is not None else MemorySessionBackend()

    def _backend(self, tier: StorageTier):
        return self.durable if tier is StorageTier.DURABLE else self.session

    def read(self, tier: StorageTier, key: str, default: Any = None) -> Any:
        """Read and decode a value, or return `default` if absent or corrupt"""
        text = self._backend(tier).get(key)
        if text is None:
            return default
        try:
            return decode_value(key, text)
        except CorruptStoredDataError as e:
            log_event(logger, "store.corrupt_value", logging.WARNING, tier=tier.value, key=key, error=str(e))
            return default

    def write(self, tier: StorageTier, key: str, value: Any):
        self._backend(tier).set(key, encode_value(value))

    def write_many(self, tier: StorageTier, values: Dict[str, Any]):
        """Write several keys together; atomic on the durable tier"""
        self._backend(tier).set_many({key: encode_value(value) for key, value in values.items()})

    def remove(self, tier: StorageTier, key: str):
        self._backend(tier).delete(key)

    def clear(self, tier: StorageTier):
        self._backend(tier).clear()
        log_event(logger, "store.cleared", tier=tier.value)

    def keys(self, tier: StorageTier) -> List[str]:
        return self._backend(tier).keys()

    @contextmanager
    def mutation(self, *keys: str) -> Iterator[None]:
        """Hold the durable-tier locks for `keys` across a read-modify-write unit"""
        with ExitStack() as stack:
            for key in sorted(set(keys)):
                stack.enter_context(self.durable.key_lock(key))
            yield
