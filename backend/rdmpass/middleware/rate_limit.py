"""
In-memory per-IP token bucket for the derivation endpoint
"""

import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, Tuple

from rdmpass.config import settings


@dataclass
class RateLimitConfig:
    """Rate limit configuration"""
    requests_per_minute: int = 60
    burst_size: int = 10


class RateLimiter:
    """
    Token bucket rate limiter
    Buckets are keyed by client IP and refill continuously
    """

    def __init__(self, config: RateLimitConfig = None, clock: Callable[[], float] = time.monotonic):
        self.config = config or RateLimitConfig()
        self._clock = clock
        # ip -> (last refill time, tokens)
        self._buckets: Dict[str, Tuple[float, float]] = {}
        self._lock = Lock()

    def is_allowed(self, ip: str) -> bool:
        """Consume one token for ip; False when the bucket is empty"""
        with self._lock:
            now = self._clock()
            last_update, tokens = self._buckets.get(ip, (now, float(self.config.burst_size)))

            refill = (now - last_update) * self.config.requests_per_minute / 60.0
            tokens = min(float(self.config.burst_size), tokens + refill)

            allowed = tokens >= 1
            if allowed:
                tokens -= 1
            self._buckets[ip] = (now, tokens)
            return allowed

    def cleanup_old_entries(self, max_age_seconds: int = 3600):
        """Remove idle buckets to bound memory"""
        with self._lock:
            cutoff = self._clock() - max_age_seconds
            for ip in [ip for ip, (seen, _) in self._buckets.items() if seen < cutoff]:
                del self._buckets[ip]

    def reset(self):
        with self._lock:
            self._buckets.clear()

    @property
    def tracked_ips(self) -> int:
        with self._lock:
            return len(self._buckets)


rate_limiter = RateLimiter(RateLimitConfig(
    requests_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    burst_size=settings.RATE_LIMIT_BURST,
))
