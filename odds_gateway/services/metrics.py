"""In-process counters for request volume, latency and cache efficiency."""

import logging
import threading
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)

KEY_REQUEST_COUNT = "requests"
KEY_ERROR_COUNT = "errors"
KEY_LATENCY_SUM = "latency_sum"
KEY_LATENCY_COUNT = "latency_count"
KEY_CACHE_HITS = "cache_hits"
KEY_CACHE_MISSES = "cache_misses"
KEY_API_CALLS = "api_calls"

ALL_KEYS = (
    KEY_REQUEST_COUNT,
    KEY_ERROR_COUNT,
    KEY_LATENCY_SUM,
    KEY_LATENCY_COUNT,
    KEY_CACHE_HITS,
    KEY_CACHE_MISSES,
    KEY_API_CALLS,
)


class MetricsService:
    """Service for collecting and reporting metrics."""

    def __init__(self):
        self._lock = threading.Lock()
        self._counters: dict[str, int] = dict.fromkeys(ALL_KEYS, 0)
        self._last_reset: datetime | None = None

    def increment(self, key: str, amount: int = 1) -> None:
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + amount

    def get_value(self, key: str) -> int:
        with self._lock:
            return self._counters.get(key, 0)

    def track_request(self) -> None:
        self.increment(KEY_REQUEST_COUNT)

    def track_error(self) -> None:
        self.increment(KEY_ERROR_COUNT)

    def track_latency(self, latency_ms: float) -> None:
        with self._lock:
            self._counters[KEY_LATENCY_SUM] += int(latency_ms)
            self._counters[KEY_LATENCY_COUNT] += 1

    def track_cache_hit(self) -> None:
        self.increment(KEY_CACHE_HITS)

    def track_cache_miss(self) -> None:
        self.increment(KEY_CACHE_MISSES)

    def track_api_call(self) -> None:
        """Track an upstream provider call."""
        self.increment(KEY_API_CALLS)

    def get_metrics(self) -> dict[str, Any]:
        """Get all metrics."""
        with self._lock:
            counters = dict(self._counters)
            last_reset = self._last_reset

        requests = counters[KEY_REQUEST_COUNT]
        errors = counters[KEY_ERROR_COUNT]
        latency_count = counters[KEY_LATENCY_COUNT]
        cache_hits = counters[KEY_CACHE_HITS]
        cache_misses = counters[KEY_CACHE_MISSES]

        avg_latency = counters[KEY_LATENCY_SUM] / latency_count if latency_count > 0 else 0
        cache_total = cache_hits + cache_misses
        cache_hit_rate = (cache_hits / cache_total * 100) if cache_total > 0 else 0
        error_rate = (errors / requests * 100) if requests > 0 else 0

        return {
            "requests": {
                "total": requests,
                "errors": errors,
                "error_rate_percent": round(error_rate, 2),
            },
            "latency": {
                "avg_ms": round(avg_latency, 2),
                "samples": latency_count,
            },
            "cache": {
                "hits": cache_hits,
                "misses": cache_misses,
                "hit_rate_percent": round(cache_hit_rate, 2),
            },
            "external_api": {
                "calls": counters[KEY_API_CALLS],
            },
            "last_reset": last_reset.isoformat() if last_reset else None,
            "collected_at": datetime.now().isoformat(),
        }

    def reset(self) -> None:
        """Reset all metrics."""
        with self._lock:
            self._counters = dict.fromkeys(ALL_KEYS, 0)
            self._last_reset = datetime.now()
        logger.info("Metrics reset")
