"""In-process cache adapter implementing CachePort."""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from repochain.core.models import Entity


class MemoryCache:
    """Dict-backed cache with an optional time-to-live.

    Expiry is measured with time.monotonic(). Expired entries are dropped
    lazily when looked up or listed.
    """

    def __init__(self, ttl_seconds: float | None = None) -> None:
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = ttl_seconds
        self._entries: dict[str, tuple[float | None, Entity]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self.list_all_keys())

    def _expired(self, expiry: float | None, now: float) -> bool:
        return expiry is not None and now >= expiry

    def lookup(self, key: str) -> Entity | None:
        """Return the cached entity, or None if missing or expired."""
        with self._lock:
            item = self._entries.get(key)
            if item is None:
                return None
            expiry, entity = item
            if self._expired(expiry, time.monotonic()):
                del self._entries[key]
                return None
            return entity

    def store(self, key: str, entity: Entity) -> None:
        """Store an entity, replacing any previous entry for key."""
        expiry = None if self._ttl is None else time.monotonic() + self._ttl
        with self._lock:
            self._entries[key] = (expiry, entity)

    def invalidate(self, key: str) -> None:
        """Remove an entry. Missing keys are ignored."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> int:
        """Remove every entry and return how many there were."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count

    def list_all_keys(self) -> list[str]:
        """List keys of entries that have not expired."""
        now = time.monotonic()
        with self._lock:
            return sorted(
                key
                for key, (expiry, _) in self._entries.items()
                if not self._expired(expiry, now)
            )
