"""Fixed-rate limiter shared by API and frontend requests."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from ..config import QPS_LIMIT

__all__ = ["RateLimiter"]

LOGGER = logging.getLogger(__name__)


class RateLimiter:
    """Hand out one permit every ``1 / rate`` seconds.

    No bursts: after an idle period a single permit is available immediately
    and the following ones are spaced out again. ``rate=None`` (or ``0``)
    disables limiting so ``acquire`` never waits.
    """

    def __init__(
        self,
        rate: float | None = QPS_LIMIT,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if rate is not None and rate < 0:
            raise ValueError("rate must be >= 0")
        self._interval = 1.0 / rate if rate else 0.0
        self._rate = rate or None
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._next_permit: float | None = None
        self._issued = 0

    @property
    def enabled(self) -> bool:
        return self._rate is not None

    def acquire(self) -> None:
        """Block until the next permit is due."""

        if not self.enabled:
            return
        with self._lock:
            now = self._clock()
            due = now if self._next_permit is None else max(now, self._next_permit)
            self._next_permit = due + self._interval
            self._issued += 1
            wait_for = due - now
        if wait_for > 0:
            LOGGER.debug("RateLimiter waiting %.3fs for permit", wait_for)
            self._sleep(wait_for)

    def snapshot(self) -> dict[str, float | int | None]:
        """Return current limiter stats (used by tests and diagnostics)."""

        with self._lock:
            return {
                "rate": self._rate,
                "issued": self._issued,
                "next_permit": self._next_permit,
            }
