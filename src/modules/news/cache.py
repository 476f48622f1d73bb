import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any

DEFAULT_TTL_SECONDS = 300
SWEEP_INTERVAL_SECONDS = 600


@dataclass
class CacheEntry:
    value: Any
    stored_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.stored_at >= self.ttl


class TTLCache:
    """In-process cache whose entries expire a fixed time after insertion.

    Expired entries are dropped when they are next read, and a write sweeps
    out every expired entry once per sweep interval. Reads and writes never
    await, so concurrent requests on one event loop cannot interleave inside
    them; the last writer for a key wins.
    """

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self._default_ttl = default_ttl
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._last_sweep = clock()
        self._entries: dict[Hashable, CacheEntry] = {}

    def get(self, key: Hashable) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: Hashable, value: Any, ttl: float | None = None) -> None:
        now = self._clock()
        if now - self._last_sweep >= self._sweep_interval:
            self.sweep(now)
        self._entries[key] = CacheEntry(
            value=value,
            stored_at=now,
            ttl=self._default_ttl if ttl is None else ttl,
        )

    def sweep(self, now: float | None = None) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock() if now is None else now
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        self._last_sweep = now
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
