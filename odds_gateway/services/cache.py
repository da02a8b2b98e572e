"""In-memory TTL cache keyed by logical request identity."""

import threading
import time
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any, NamedTuple
from urllib.parse import urlencode

# Query parameter names that carry a credential and never enter a cache key
CREDENTIAL_PARAMS = frozenset({"apikey", "api_key"})


class CacheEntry(NamedTuple):
    value: Any
    expires_at: float


def _param_value(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_param_value(v) for v in value)
    return str(value)


def canonical_params(
    params: Mapping[str, Any] | None,
    exclude: Iterable[str] = (),
) -> dict[str, str]:
    """Stringify params, drop None values and credentials, sort by name."""
    excluded = CREDENTIAL_PARAMS | {name.lower() for name in exclude}
    result = {}
    for name, value in sorted((params or {}).items()):
        if value is None or name.lower() in excluded:
            continue
        result[name] = _param_value(value)
    return result


def normalize_path(endpoint: str) -> str:
    return "/" + endpoint.strip().strip("/")


def make_cache_key(
    endpoint: str,
    params: Mapping[str, Any] | None = None,
    exclude: Iterable[str] = (),
) -> str:
    """Deterministic key for a request, independent of parameter order."""
    query = urlencode(canonical_params(params, exclude))
    path = normalize_path(endpoint)
    return f"{path}?{query}" if query else path


class TTLCache:
    """Process-local cache with one TTL for every entry.

    Entries are replaced whole under a lock, so readers never observe a
    half-written entry. Expired entries are evicted lazily on read.
    """

    def __init__(
        self,
        ttl: float,
        *,
        max_entries: int = 0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    async def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.value

    async def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(value, self._clock() + self.ttl)
            if self.max_entries and len(self._entries) > self.max_entries:
                self._evict()

    async def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _evict(self) -> None:
        # Caller holds the lock. Expired first, then earliest expiry.
        now = self._clock()
        for key in [k for k, e in self._entries.items() if e.expires_at <= now]:
            del self._entries[key]
        while len(self._entries) > self.max_entries:
            oldest = min(self._entries, key=lambda k: self._entries[k].expires_at)
            del self._entries[oldest]
