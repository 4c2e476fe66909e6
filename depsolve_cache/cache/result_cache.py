"""
TTL-based cache for depsolve results.

Collapses duplicate depsolve requests within a process run. Thread-safe:
lookups share a read lock, stores and cleanups take the write lock.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterator, Optional, Tuple, Union
import logging
import threading

from depsolve_cache.interfaces.cache import IResultCache
from depsolve_cache.rpmmd import PackageList

logger = logging.getLogger(__name__)


class RWLock:
    """
    Reader/writer lock.

    Any number of readers may hold the lock at once; a writer holds it alone.
    Waiting writers block new readers so a steady stream of lookups cannot
    starve a store.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


@dataclass(frozen=True)
class CachedResult:
    """A stored package list and the time it was stored."""
    packages: PackageList
    timestamp: datetime


class ResultCache(IResultCache):
    """
    In-memory depsolve result cache with a fixed TTL.

    Expired entries are reported as misses by get() but stay in the table
    until clean_cache() sweeps them.

    Example:
        >>> cache = ResultCache(timeout=60)
        >>> cache.store(key, packages)
        >>> packages, found = cache.get(key)
        >>> cache.clean_cache()
    """

    def __init__(self, timeout: Union[float, timedelta]):
        """
        Initialize the cache.

        Args:
            timeout: Time-to-live for entries, in seconds or as a timedelta
        """
        if not isinstance(timeout, timedelta):
            timeout = timedelta(seconds=timeout)
        self.timeout = timeout
        self.results: Dict[str, CachedResult] = {}
        self.lock = RWLock()
        self._hits = 0
        self._misses = 0

    def _is_expired(self, entry: CachedResult, now: datetime) -> bool:
        return now - entry.timestamp > self.timeout

    def store(self, key: str, packages: PackageList) -> None:
        """Store (or overwrite) the result for key, stamped with the current time."""
        with self.lock.write_locked():
            self.results[key] = CachedResult(packages=list(packages), timestamp=datetime.now())

    def get(self, key: str) -> Tuple[Optional[PackageList], bool]:
        """
        Look up the result for key.

        Returns:
            (packages, True) for a live entry, (None, False) when the key is
            unknown or its entry is older than the TTL
        """
        with self.lock.read_locked():
            entry = self.results.get(key)
            found = entry is not None and not self._is_expired(entry, datetime.now())

        # counters are advisory and not guarded by the read lock
        if not found:
            self._misses += 1
            return None, False
        self._hits += 1
        return list(entry.packages), True

    def clean_cache(self) -> int:
        """
        Remove every entry older than the TTL.

        Returns:
            The number of entries removed
        """
        with self.lock.write_locked():
            now = datetime.now()
            expired = [key for key, entry in self.results.items() if self._is_expired(entry, now)]
            for key in expired:
                del self.results[key]

        if expired:
            logger.debug(f"Removed {len(expired)} expired depsolve results")
        return len(expired)

    def stats(self) -> dict:
        """Get entry count, TTL and hit/miss counters."""
        with self.lock.read_locked():
            entries = len(self.results)
        total = self._hits + self._misses
        return {
            "entries": entries,
            "ttl_seconds": self.timeout.total_seconds(),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / total if total > 0 else 0.0,
        }

    def __len__(self) -> int:
        with self.lock.read_locked():
            return len(self.results)


def new_dnf_cache(timeout: Union[float, timedelta]) -> ResultCache:
    """Create a depsolve result cache with the given TTL."""
    return ResultCache(timeout)
