import threading
import time
from dataclasses import dataclass


@dataclass
class _Window:
    started_at: float
    length: int
    hits: int = 0

    def expired(self, now: float) -> bool:
        return now - self.started_at >= self.length


class InMemoryRateLimiter:
    """
    Fixed-window request counter keyed by client and route group.
    State is per process; a multi-instance deployment needs a shared store.
    Expired windows are swept at most once per sweep_interval seconds.
    """

    def __init__(self, clock=time.monotonic, sweep_interval: float = 60.0) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: dict[str, _Window] = {}
        self._sweep_interval = sweep_interval
        self._last_sweep = clock()

    def allow(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int]:
        """
        Returns (allowed, retry_after_seconds).
        """
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self._sweep_interval:
                self._sweep(now)
            window = self._windows.get(key)
            if window is None or window.expired(now):
                window = _Window(started_at=now, length=window_seconds)
                self._windows[key] = window
            if window.hits >= limit:
                return False, max(1, int(window_seconds - (now - window.started_at)))
            window.hits += 1
            return True, 0

    def _sweep(self, now: float) -> None:
        for key in [k for k, w in self._windows.items() if w.expired(now)]:
            del self._windows[key]
        self._last_sweep = now

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


rate_limiter = InMemoryRateLimiter()
