"""Fixed-window rate limiter keyed by policy name and caller."""

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Tuple

from .config import Settings


@dataclass(frozen=True)
class RateLimitPolicy:
    """Threshold for one named policy."""

    limit: int
    window_seconds: int


@dataclass
class _Window:
    started_at: float
    count: int


class RateLimiter:
    """
    Thread-safe fixed-window rate limiter.

    Each ``(policy, caller_key)`` pair gets a window of ``window_seconds``
    during which at most ``limit`` requests are allowed. The limiter is owned
    by the application (``app.state.rate_limiter``) so tests and deployments
    can inject their own thresholds.
    """

    def __init__(
        self,
        policies: Mapping[str, RateLimitPolicy],
        clock: Callable[[], float] = time.monotonic,
    ):
        self.policies: Dict[str, RateLimitPolicy] = dict(policies)
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: Dict[Tuple[str, str], _Window] = {}
        self._last_sweep = clock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "RateLimiter":
        """Build the limiter with the ``general`` and ``strict`` policies from settings."""
        return cls({
            "general": RateLimitPolicy(
                limit=settings.rate_limit_general_requests,
                window_seconds=settings.rate_limit_general_window_seconds,
            ),
            "strict": RateLimitPolicy(
                limit=settings.rate_limit_strict_requests,
                window_seconds=settings.rate_limit_strict_window_seconds,
            ),
        })

    def check(self, policy: str, caller_key: str) -> bool:
        """
        Count one request and report whether it is allowed.

        Raises:
            KeyError: If ``policy`` is not configured
        """
        return self.hit(policy, caller_key)[0]

    def hit(self, policy: str, caller_key: str) -> Tuple[bool, Optional[int]]:
        """
        Count one request against ``policy`` for ``caller_key``.

        Returns:
            ``(allowed, retry_after_seconds)``; ``retry_after_seconds`` is None
            when the request is allowed.
        """
        config = self.policies[policy]
        now = self._clock()
        key = (policy, caller_key)

        with self._lock:
            self._sweep_expired(now)
            window = self._windows.get(key)
            if window is None or now - window.started_at >= config.window_seconds:
                window = _Window(started_at=now, count=0)
                self._windows[key] = window

            if window.count >= config.limit:
                remaining = config.window_seconds - (now - window.started_at)
                return False, max(1, math.ceil(remaining))

            window.count += 1
            return True, None

    def _sweep_expired(self, now: float) -> None:
        # Caller holds the lock. At most one full scan per shortest window.
        if not self._windows:
            return
        shortest = min(p.window_seconds for p in self.policies.values())
        if now - self._last_sweep < shortest:
            return

        self._last_sweep = now
        expired = [
            key for key, window in self._windows.items()
            if now - window.started_at >= self.policies[key[0]].window_seconds
        ]
        for key in expired:
            del self._windows[key]

    def reset(self) -> None:
        """Forget every counter."""
        with self._lock:
            self._windows.clear()

    def get_stats(self) -> Dict[str, int]:
        """Get rate limiter statistics."""
        with self._lock:
            self._sweep_expired(self._clock())
            return {
                "tracked_windows": len(self._windows),
                "total_requests_tracked": sum(w.count for w in self._windows.values()),
            }
