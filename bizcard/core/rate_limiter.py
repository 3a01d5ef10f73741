"""
In-process throttling for the credential endpoints.

Each (action, client ip) pair gets a fixed window; once the window's budget
is spent further attempts get a 429 until it rolls over.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

from fastapi import HTTPException, Request

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    attempts: int
    resets_at: float


class FixedWindowLimiter:
    def __init__(self, limit: int, window_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._lock = threading.Lock()

    def allow(self, key: str) -> bool:
        """Count one attempt for `key`; False once the budget is exhausted."""
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now >= window.resets_at:
                window = self._windows[key] = _Window(0, now + self.window_seconds)
            window.attempts += 1
            return window.attempts <= self.limit

    def retry_after(self, key: str) -> int:
        with self._lock:
            window = self._windows.get(key)
        if window is None:
            return 0
        return max(0, int(window.resets_at - self._clock()) + 1)

    def clear(self) -> None:
        with self._lock:
            self._windows.clear()


AUTH_LIMITERS = {
    "register": FixedWindowLimiter(limit=10, window_seconds=300),
    "login": FixedWindowLimiter(limit=10, window_seconds=300),
}


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def throttle_auth(request: Request, action: str) -> None:
    limiter = AUTH_LIMITERS[action]
    ip = _client_ip(request)
    if not limiter.allow(ip):
        logger.warning("Throttled %s attempts from %s", action, ip)
        raise HTTPException(
            429,
            "Too many attempts. Try again shortly.",
            headers={"Retry-After": str(limiter.retry_after(ip))},
        )


def reset_rate_limits() -> None:
    for limiter in AUTH_LIMITERS.values():
        limiter.clear()
