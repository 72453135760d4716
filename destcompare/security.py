"""Request throttling and the allow-list for the page proxy endpoint."""

from __future__ import annotations

import threading
import time
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Deque, Dict, Sequence
from urllib.parse import urlsplit


@dataclass
class RateLimitConfig:
    requests_per_minute: int = 60
    window_seconds: int = 60


class RateLimiter:
    """Thread-safe sliding-window rate limiter keyed by client identifier."""

    def __init__(self, config: RateLimitConfig | None = None):
        self.config = config or RateLimitConfig()
        self._lock = threading.Lock()
        self._requests: Dict[str, Deque[float]] = defaultdict(deque)

    def is_allowed(self, client_id: str) -> bool:
        now = time.time()
        with self._lock:
            window = self._requests[client_id]
            cutoff = now - self.config.window_seconds
            while window and window[0] < cutoff:
                window.popleft()
            if len(window) >= self.config.requests_per_minute:
                return False
            window.append(now)
            return True

    @classmethod
    def from_settings(cls, settings) -> "RateLimiter":
        return cls(RateLimitConfig(requests_per_minute=settings.rate_limit_per_minute))


def is_allowed_proxy_target(url: str | None, allowed_hosts: Sequence[str]) -> bool:
    """Only http(s) URLs on an allowed host (or one of its subdomains) may be proxied."""
    if not url:
        return False
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.hostname:
        return False
    host = parts.hostname.lower()
    return any(host == allowed or host.endswith("." + allowed) for allowed in allowed_hosts)
