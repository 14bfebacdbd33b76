"""
In-memory tables backing the scan tracker.

The Store holds four independent tables (links, users, devices, scans).
Each table owns its own lock, so a handler that touches several tables
takes them one at a time; there is no cross-table transaction.
"""

from contextlib import contextmanager
from typing import Dict, Generic, Iterator, Optional, TypeVar
import threading

from shortener_app.errors import DatabaseError
from shortener_app.models.records import Device, Scan, ShortLink, User

RecordT = TypeVar("RecordT")


class InMemoryTable(Generic[RecordT]):
    """
    A dict guarded by a single lock.

    Every operation holds the lock for exactly one dict access. If the lock
    cannot be acquired within `lock_timeout` seconds the operation raises
    DatabaseError instead of blocking forever.
    """

    def __init__(self, name: str, lock_timeout: float = 5.0):
        self.name = name
        self.lock_timeout = lock_timeout
        self._rows: Dict[str, RecordT] = {}
        self._lock = threading.Lock()

    @contextmanager
    def _locked(self) -> Iterator[Dict[str, RecordT]]:
        if not self._lock.acquire(timeout=self.lock_timeout):
            raise DatabaseError("Failed to acquire database lock")
        try:
            yield self._rows
        finally:
            self._lock.release()

    def get(self, key: str) -> Optional[RecordT]:
        """Return the record stored under key, or None"""
        with self._locked() as rows:
            return rows.get(key)

    def contains(self, key: str) -> bool:
        with self._locked() as rows:
            return key in rows

    def insert(self, key: str, record: RecordT) -> None:
        """Store record under key, overwriting any existing record"""
        with self._locked() as rows:
            rows[key] = record

    def insert_if_absent(self, key: str, record: RecordT) -> bool:
        """
        Store record only if key is unused (first write wins).

        Returns:
            True if the record was inserted, False if key already existed
        """
        with self._locked() as rows:
            if key in rows:
                return False
            rows[key] = record
            return True

    def snapshot(self) -> Dict[str, RecordT]:
        """Return a shallow copy of the whole table"""
        with self._locked() as rows:
            return dict(rows)

    def __len__(self) -> int:
        with self._locked() as rows:
            return len(rows)


class Store:
    """
    The four tables shared by all request handlers.

    A single instance is created per process and injected into services
    (see shortener_app.dependencies.get_store); tests build their own.
    """

    def __init__(self, lock_timeout: float = 5.0):
        self.links: InMemoryTable[ShortLink] = InMemoryTable("shortened_links", lock_timeout)
        self.users: InMemoryTable[User] = InMemoryTable("users", lock_timeout)
        self.devices: InMemoryTable[Device] = InMemoryTable("devices", lock_timeout)
        self.scans: InMemoryTable[Scan] = InMemoryTable("scans", lock_timeout)

    def tables(self):
        """The four tables in export order; each table.name is its export key"""
        return (self.links, self.users, self.devices, self.scans)
