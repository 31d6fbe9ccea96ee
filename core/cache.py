"""In-memory TTL cache used by the profile repository.

Entries are stored as key -> CacheEntry(value, timestamp). The clock is
injectable so expiry can be exercised without sleeping.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from core.logger import get_logger

logger = get_logger("core.cache")


@dataclass
class CacheEntry:
    value: Any
    timestamp: float


class TTLCache:
    """Keyed cache whose entries expire `ttl_seconds` after they were stored.

    Not shared between processes. The services never read from it directly;
    only the persistence layer consults it before hitting the database.
    """

    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache miss: %s", key)
            return None
        if self._clock() - entry.timestamp >= self.ttl_seconds:
            logger.debug("Cache entry expired: %s", key)
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, timestamp=self._clock())

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop one key, or every entry when no key is given."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
