"""Process-local fixed-window rate limiting."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from chatwrapper.core.settings import RateLimitPolicy

SWEEP_THRESHOLD = 1024
SWEEP_INTERVAL_SECONDS = 60.0


@dataclass
class WindowCounter:
    """Hit count since the start of a key's current window."""

    window_start: float
    window_seconds: float
    count: int

    def expired(self, now: float) -> bool:
        return now - self.window_start >= self.window_seconds


class FixedWindowRateLimiter:
    """Counts hits per key in windows that start at the key's first hit.

    Counters live in process memory only. They are lost on restart and
    are not shared between server instances. Once at least
    ``sweep_threshold`` keys are tracked, counters whose window has
    elapsed are dropped, at most once every ``sweep_interval`` seconds.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_threshold: int = SWEEP_THRESHOLD,
        sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self._clock = clock
        self._counters: dict[str, WindowCounter] = {}
        self._lock = Lock()
        self._sweep_threshold = sweep_threshold
        self._sweep_interval = sweep_interval
        self._last_sweep = clock()

    def check(self, key: str, window_seconds: float, max_count: int) -> bool:
        """Record a hit for ``key`` and report whether it is within the limit."""
        now = self._clock()
        with self._lock:
            self._maybe_sweep(now)
            counter = self._counters.get(key)
            if counter is None or now - counter.window_start >= window_seconds:
                counter = WindowCounter(
                    window_start=now, window_seconds=window_seconds, count=0
                )
                self._counters[key] = counter
            counter.count += 1
            return counter.count <= max_count

    def hit(self, key: str, policy: RateLimitPolicy) -> bool:
        """Apply a configured policy to ``key``."""
        return self.check(key, policy.window_seconds, policy.max_count)

    def count(self, key: str) -> int:
        """Hits recorded in the key's latest window (0 if never hit)."""
        with self._lock:
            counter = self._counters.get(key)
            return counter.count if counter else 0

    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._counters)

    def reset(self) -> None:
        """Forget every counter."""
        with self._lock:
            self._counters.clear()

    def _maybe_sweep(self, now: float) -> None:
        # caller holds the lock
        if len(self._counters) < self._sweep_threshold:
            return
        if now - self._last_sweep < self._sweep_interval:
            return
        self._counters = {
            key: counter
            for key, counter in self._counters.items()
            if not counter.expired(now)
        }
        self._last_sweep = now


def login_ip_key(client_ip: str) -> str:
    return f"login-ip:{client_ip}"


def login_name_key(login_name: str) -> str:
    return f"login-name:{login_name.casefold()}"


def chat_key(user_id: str) -> str:
    return f"chat:{user_id}"
