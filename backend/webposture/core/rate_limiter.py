import asyncio
import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from webposture.models.schemas import RateLimitDecision

logger = logging.getLogger(__name__)


@dataclass
class RateLimitEntry:
    count: int
    reset_at: float


class RateLimiter:
    """
    Fixed-window throttle keyed by an opaque client identifier.

    One instance is shared by the whole process. ``check`` is atomic per call,
    so concurrent bursts from one identifier cannot undercount. Expired
    windows are dropped by a background sweep started with ``start()``.
    """

    def __init__(
        self,
        max_requests: int = 5,
        window_seconds: float = 60.0,
        sweep_interval: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._store: Dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()
        self._sweeper: Optional[asyncio.Task] = None

    def check(self, identifier: str) -> RateLimitDecision:
        with self._lock:
            now = self._clock()
            entry = self._store.get(identifier)

            if entry is None or now >= entry.reset_at:
                self._store[identifier] = RateLimitEntry(count=1, reset_at=now + self.window_seconds)
                return RateLimitDecision(allowed=True)

            if entry.count >= self.max_requests:
                retry_after = math.ceil(entry.reset_at - now)
                return RateLimitDecision(allowed=False, retry_after_seconds=retry_after)

            entry.count += 1
            return RateLimitDecision(allowed=True)

    def cleanup(self) -> int:
        """Drop entries whose window has elapsed. Returns how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._store.items() if now >= entry.reset_at]
            for key in expired:
                del self._store[key]
        if expired:
            logger.debug(f"Rate limiter swept {len(expired)} expired entries")
        return len(expired)

    def __len__(self) -> int:
        return len(self._store)

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval)
            self.cleanup()

    def start(self) -> None:
        """Start the periodic sweep on the running event loop."""
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.get_running_loop().create_task(self._sweep_forever())

    async def stop(self) -> None:
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None
