"""Bounded in-memory cache with LRU eviction and per-entry TTL. No Redis needed.

Expiry is lazy: a stale entry keeps its slot until a ``get`` observes it or
capacity pressure evicts it. There is no background sweep.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
a city may be fetched twice (once per worker).
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable

from errors import ConfigurationError


@dataclass
class CacheEntry:
    value: Any
    expires_at: float


class BoundedTTLCache:
    """Thread-safe cache holding at most ``max_entries`` values for ``ttl_seconds`` each.

    Usage::

        cache = BoundedTTLCache(max_entries=200, ttl_seconds=600)
        cache.set("paris", data)
        hit = cache.get("paris")  # value, or None if missing/expired

    Both ``get`` hits and ``set`` promote a key to most recently used. When a
    new key arrives at capacity, the least recently used key is evicted even
    if a more recently used one has already expired.
    """

    def __init__(
        self,
        max_entries: int,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if isinstance(max_entries, bool) or not isinstance(max_entries, int) or max_entries <= 0:
            raise ConfigurationError(f"max_entries must be a positive integer, got {max_entries!r}")
        if isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, (int, float)) or ttl_seconds <= 0:
            raise ConfigurationError(f"ttl_seconds must be positive, got {ttl_seconds!r}")

        self._max_entries = max_entries
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        # Least recently used first
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() >= entry.expires_at

    def get(self, key: str) -> Any | None:
        """Return the cached value if present and not expired, else None.

        An expired entry found here is removed.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._is_expired(entry):
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, evicting the least recently used key if at capacity."""
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
            elif len(self._entries) >= self._max_entries:
                self._entries.popitem(last=False)
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + self._ttl)

    def stats(self) -> dict:
        """Snapshot of the raw entry count and configured limits.

        Expired entries not yet removed are still counted.
        """
        with self._lock:
            return {
                "entries": len(self._entries),
                "max_entries": self._max_entries,
                "ttl_seconds": self._ttl,
            }

    def __contains__(self, key: object) -> bool:
        # Live presence only; recency and stale slots are left untouched.
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not self._is_expired(entry)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
