# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from threading import Lock
from typing import Protocol

from flask import Request, request

from taskapi.shared.errors import RateLimitedError
from taskapi.shared.logging import logger


@dataclass(slots=True)
class WindowCounter:
    count: int
    expires_at: float


class RateLimitStore(Protocol):
    def get(self, key: str) -> WindowCounter | None: ...
    def increment(self, key: str, ttl: float) -> WindowCounter: ...
    def reset(self, key: str) -> None: ...
    def seconds_until_reset(self, counter: WindowCounter) -> float: ...


class InMemoryRateLimitStore(RateLimitStore):
    """Fixed-window counters kept in process memory.

    An expired window is dropped lazily on the next access to its key; there is
    no background sweep. State is lost on restart.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._counters: dict[str, WindowCounter] = {}
        self._lock = Lock()

    def _live(self, key: str, now: float) -> WindowCounter | None:
        counter = self._counters.get(key)
        if counter is not None and now >= counter.expires_at:
            del self._counters[key]
            return None
        return counter

    def get(self, key: str) -> WindowCounter | None:
        with self._lock:
            counter = self._live(key, self._clock())
            if counter is None:
                return None
            return WindowCounter(counter.count, counter.expires_at)

    def increment(self, key: str, ttl: float) -> WindowCounter:
        with self._lock:
            now = self._clock()
            counter = self._live(key, now)
            if counter is None:
                counter = WindowCounter(count=0, expires_at=now + ttl)
                self._counters[key] = counter
            counter.count += 1
            return WindowCounter(counter.count, counter.expires_at)

    def reset(self, key: str) -> None:
        with self._lock:
            self._counters.pop(key, None)

    def seconds_until_reset(self, counter: WindowCounter) -> float:
        return max(0.0, counter.expires_at - self._clock())


class RateLimiter:
    """Hard per-key cap over a fixed window; rejected requests are never queued."""

    def __init__(
        self,
        store: RateLimitStore,
        *,
        limit: int,
        window_seconds: float,
        enabled: bool = True,
        scope: str = "api",
    ) -> None:
        self._store = store
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._enabled = enabled
        self._scope = scope

    def hit(self, key: str) -> None:
        if not self._enabled:
            return
        counter = self._store.increment(f"{self._scope}:{key}", self._window)
        if counter.count > self._limit:
            retry_after = math.ceil(self._store.seconds_until_reset(counter))
            logger.warning(f"rate_limit: rejected scope={self._scope} key={key} count={counter.count}")
            raise RateLimitedError(f"Too many requests, try again in {retry_after} seconds")

    def remaining(self, key: str) -> int:
        counter = self._store.get(f"{self._scope}:{key}")
        if counter is None:
            return self._limit
        return max(0, self._limit - counter.count)

    def limit_by(self, key_func: Callable[[], str | None]):
        """Decorate a view so each call counts against ``key_func()``.

        A ``None`` key means there is nothing to throttle on and the call passes.
        """

        def decorator(f: Callable):
            @wraps(f)
            def wrapper(*args, **kwargs):
                key = key_func()
                if key is not None:
                    self.hit(key)
                return f(*args, **kwargs)

            return wrapper

        return decorator


def client_key(req: Request | None = None) -> str:
    req = req or request
    forwarded = req.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    return forwarded or (req.remote_addr or "unknown")


__all__ = [
    "InMemoryRateLimitStore",
    "RateLimitStore",
    "RateLimiter",
    "WindowCounter",
    "client_key",
]
