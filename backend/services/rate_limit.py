"""Moving-window counter for failed sign-in attempts, keyed by email."""
from __future__ import annotations

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter

NAMESPACE = "signin"


class FailedAttemptLimiter:
    def __init__(self, storage: MemoryStorage | None = None):
        self._storage = storage or MemoryStorage()
        self._strategy = MovingWindowRateLimiter(self._storage)

    @staticmethod
    def _item(max_attempts: int, window_seconds: int) -> RateLimitItemPerSecond:
        return RateLimitItemPerSecond(max_attempts, window_seconds, namespace=NAMESPACE)

    def is_limited(self, key: str, max_attempts: int, window_seconds: int) -> bool:
        return not self._strategy.test(self._item(max_attempts, window_seconds), key)

    def record_failure(self, key: str, max_attempts: int, window_seconds: int) -> None:
        self._strategy.hit(self._item(max_attempts, window_seconds), key)

    def clear(self, key: str, max_attempts: int, window_seconds: int) -> None:
        self._strategy.clear(self._item(max_attempts, window_seconds), key)

    def reset(self) -> None:
        self._storage.reset()


limiter = FailedAttemptLimiter()
