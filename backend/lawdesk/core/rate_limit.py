"""In-memory rate limiting for authentication endpoints."""

from __future__ import annotations

import threading
import time
from collections import defaultdict, deque
from typing import Deque, Dict, Tuple

from fastapi import Request

from lawdesk.core.config import get_settings
from lawdesk.core.errors import RateLimitError

__all__ = ["InMemoryRateLimiter", "RateLimit", "auth_rate_limit", "limiter"]


class InMemoryRateLimiter:
    """Sliding-window limiter per key."""

    def __init__(self) -> None:
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()
        self._last_sweep = 0.0

    def allow(self, key: str, max_requests: int, window_seconds: int) -> Tuple[bool, int]:
        now = time.monotonic()
        retry_after = 0
        with self._lock:
            cutoff = now - window_seconds
            if now - self._last_sweep >= window_seconds:
                self._sweep(cutoff)
                self._last_sweep = now
            q = self._hits[key]
            while q and q[0] < cutoff:
                q.popleft()
            if len(q) >= max_requests:
                retry_after = max(1, int(window_seconds - (now - q[0])))
                return False, retry_after
            q.append(now)
        return True, retry_after

    def _sweep(self, cutoff: float) -> None:
        # Drop keys with no hit inside the window; caller holds the lock
        stale = [key for key, q in self._hits.items() if not q or q[-1] < cutoff]
        for key in stale:
            del self._hits[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


limiter = InMemoryRateLimiter()


class RateLimit:
    """
    FastAPI dependency enforcing a per-client-IP limit for one scope.

    Limits are read from settings at request time.
    """

    def __init__(self, scope: str, backend: InMemoryRateLimiter = limiter) -> None:
        self.scope = scope
        self.backend = backend

    def __call__(self, request: Request) -> None:
        settings = get_settings()
        client_ip = request.client.host if request.client else "unknown"
        allowed, retry_after = self.backend.allow(
            f"{self.scope}:{client_ip}",
            settings.auth_rate_limit_max,
            settings.rate_limit_window_seconds,
        )
        if not allowed:
            raise RateLimitError(
                "Too many authentication attempts. Please try again later.",
                details={"retry_after": retry_after},
                headers={"Retry-After": str(retry_after)},
            )


auth_rate_limit = RateLimit("auth")
