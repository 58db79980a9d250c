"""Time-bounded memoization for provider responses.

Weather, adcode and location lookups are cached for a fixed time so repeated
inserts do not hit the network. Entries expire lazily on read; when the cache
is full the least recently used entry is evicted.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Optional

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    timestamp: float = field(default_factory=time.time)


class TTLCache:
    """Thread-safe TTL cache with an LRU size bound."""

    def __init__(
        self,
        ttl_seconds: float,
        max_size: int = 256,
        clock: Callable[[], float] = time.time,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._clock = clock
        self._cache: "OrderedDict[Hashable, CacheEntry]" = OrderedDict()
        self._lock = threading.RLock()

    def get(self, key: Hashable) -> Optional[Any]:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            if self._clock() - entry.timestamp >= self.ttl_seconds:
                del self._cache[key]
                logger.debug(f"Cache entry expired: {key}")
                return None
            self._cache.move_to_end(key)
            return entry.value

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._cache[key] = CacheEntry(value=value, timestamp=self._clock())
            self._cache.move_to_end(key)
            while len(self._cache) > self.max_size:
                evicted, _ = self._cache.popitem(last=False)
                logger.debug(f"Cache entry evicted: {evicted}")

    def get_or_set(self, key: Hashable, factory: Callable[[], Any]) -> Any:
        """Return the cached value, computing and storing it on a miss.

        ``None`` results are not cached so a failed lookup is retried next time.
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached
        value = factory()
        if value is not None:
            self.set(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
